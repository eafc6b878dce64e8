"""Registration router — forwards the sign-up form as email.

Endpoints:
  POST /api/send-emails — notify the school and the internal inbox

Any other method on the same path answers 405.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from fahrschule.deps import Transport
from fahrschule.schemas.registration import MessageResponse, RegistrationSubmission
from fahrschule.services.notifications import DispatchStatus, notify_registration

logger = structlog.get_logger()

router = APIRouter()

MSG_SUCCESS = "Emails sent successfully"
MSG_PARTIAL = "One or more emails failed to send, but others succeeded."
MSG_ERROR = "Error sending email"
MSG_METHOD_NOT_ALLOWED = "Only POST requests are allowed"


@router.post(
    "/send-emails",
    response_model=MessageResponse,
    responses={
        207: {"model": MessageResponse, "description": "Only some emails were sent"},
        500: {"model": MessageResponse, "description": "No email was sent"},
    },
)
async def send_emails(
    transport: Transport,
    body: RegistrationSubmission | None = Body(default=None),
):
    """Send the operator notification and the internal alert for a registration.

    Missing form fields are rendered as placeholders; nothing is rejected.
    """
    submission = body or RegistrationSubmission()

    try:
        result = await notify_registration(transport, submission)
    except Exception as e:
        logger.error("send_emails_failed", error=repr(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": MSG_ERROR},
        )

    if result.status is DispatchStatus.PARTIAL:
        return JSONResponse(
            status_code=status.HTTP_207_MULTI_STATUS,
            content={"message": MSG_PARTIAL},
        )

    return MessageResponse(message=MSG_SUCCESS)


@router.api_route(
    "/send-emails",
    methods=["GET", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def send_emails_wrong_method():
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"message": MSG_METHOD_NOT_ALLOWED},
        headers={"Allow": "POST"},
    )
