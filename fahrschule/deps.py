"""FastAPI dependency injection providers.

Usage in routers:
    async def endpoint(transport: Transport):
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from fahrschule.services.mailer import SMTPTransport

# --- SMTP ---

_transport: SMTPTransport | None = None


def get_transport() -> SMTPTransport:
    """Provide the shared SMTP transport, built from settings on first use."""
    global _transport
    if _transport is None:
        _transport = SMTPTransport.from_settings()
    return _transport


# Type alias for cleaner router signatures
Transport = Annotated[SMTPTransport, Depends(get_transport)]
