"""Registration notifications — fan out two emails and collect both outcomes.

For every submission two emails go out concurrently:
1. Operator notification with the full form contents
2. Internal alert that a submission arrived (fixed content)

Sends are joined with ``gather(..., return_exceptions=True)``: one failure
never hides or cancels the other. Nothing is retried or persisted; a failed
send is logged and reported through the dispatch status.
"""

from __future__ import annotations

import asyncio
import enum
from dataclasses import dataclass

import structlog

from fahrschule.config import settings
from fahrschule.exceptions import DeliveryFailedError
from fahrschule.schemas.registration import RegistrationSubmission
from fahrschule.services.email_templates import internal_alert, operator_notification
from fahrschule.services.mailer import OutgoingEmail, SMTPTransport

logger = structlog.get_logger()


class DispatchStatus(str, enum.Enum):
    ALL_SENT = "all-sent"
    PARTIAL = "partial"
    ALL_FAILED = "all-failed"


@dataclass(frozen=True)
class SendOutcome:
    recipient: str
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class DispatchResult:
    outcomes: list[SendOutcome]

    @property
    def succeeded(self) -> list[SendOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[SendOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def status(self) -> DispatchStatus:
        if not self.failed:
            return DispatchStatus.ALL_SENT
        if not self.succeeded:
            return DispatchStatus.ALL_FAILED
        return DispatchStatus.PARTIAL


def build_notifications(
    submission: RegistrationSubmission,
    operator: str | None = None,
    internal: str | None = None,
) -> list[OutgoingEmail]:
    """Render the operator notification and the internal alert."""
    subject, text, html = operator_notification(submission)
    alert_subject, alert_text, alert_html = internal_alert()
    return [
        OutgoingEmail(to=operator or settings.OPERATOR_EMAIL, subject=subject, text=text, html=html),
        OutgoingEmail(
            to=internal or settings.NOTIFICATION_EMAIL,
            subject=alert_subject,
            text=alert_text,
            html=alert_html,
        ),
    ]


async def dispatch(transport: SMTPTransport, emails: list[OutgoingEmail]) -> DispatchResult:
    """Send all emails concurrently and wait for every one to settle."""
    results = await asyncio.gather(
        *(asyncio.to_thread(transport.send, email) for email in emails),
        return_exceptions=True,
    )
    return DispatchResult(
        outcomes=[
            SendOutcome(recipient=email.to, error=result if isinstance(result, BaseException) else None)
            for email, result in zip(emails, results)
        ]
    )


async def notify_registration(
    transport: SMTPTransport,
    submission: RegistrationSubmission,
) -> DispatchResult:
    """Send both registration emails.

    Returns the dispatch result when at least one email went out.

    Raises:
        DeliveryFailedError: every send failed.
    """
    result = await dispatch(transport, build_notifications(submission))

    for outcome in result.failed:
        logger.error("email_send_failed", to=outcome.recipient, error=repr(outcome.error))

    if result.status is DispatchStatus.ALL_FAILED:
        logger.error("email_dispatch_failed", failed=len(result.failed))
        raise DeliveryFailedError([o.error for o in result.failed])

    if result.status is DispatchStatus.PARTIAL:
        logger.warning(
            "email_dispatch_partial",
            sent=len(result.succeeded),
            failed=len(result.failed),
        )
    else:
        logger.info("emails_sent", count=len(result.succeeded))

    return result
