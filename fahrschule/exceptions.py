"""Exception types raised by the notification and consent services."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for registration notification failures."""


class DeliveryFailedError(NotificationError):
    """Every notification email failed to send.

    The individual causes are kept on ``errors`` for server-side logging;
    they are never sent back to the client.
    """

    def __init__(self, errors: list[BaseException]):
        self.errors = errors
        super().__init__(f"All {len(errors)} emails failed to send.")


class ConsentStorageError(Exception):
    """The consent storage backend could not read, write or remove a record."""
