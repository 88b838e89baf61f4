"""
Outbound SMS, WhatsApp and email for admins.

Order of checks on every route: rate limit, admin role, provider configuration,
then the message itself.
"""
import asyncio
import logging

from fastapi import APIRouter, Depends

from kurstakip.errors import ProviderError
from kurstakip.models.user import User
from kurstakip.schemas.messaging import (
    BulkRequest,
    BulkResult,
    BulkSummary,
    EmailRequest,
    MessageRequest,
    RecipientResult,
    SendResult,
)
from kurstakip.utils.auth import require_admin
from kurstakip.utils.messaging import Messenger, personalize, resend_messenger, twilio_messenger
from kurstakip.utils.phone import normalize_phone
from kurstakip.utils.rate_limit import rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Messaging"])


async def _send_text(channel: str, payload: MessageRequest, user: User, messenger: Messenger) -> SendResult:
    to = normalize_phone(payload.to)
    result = await messenger.send_text(channel, to, payload.message)
    logger.info("%s sent by %s to %s (%s)", channel, user.id, to, result.get("message_id"))
    return SendResult(**result)


@router.post("/sms", response_model=SendResult, dependencies=[Depends(rate_limit(5))])
async def send_sms(
    payload: MessageRequest,
    user: User = Depends(require_admin),
    messenger: Messenger = Depends(twilio_messenger("sms")),
):
    return await _send_text("sms", payload, user, messenger)


@router.post("/whatsapp", response_model=SendResult, dependencies=[Depends(rate_limit(5))])
async def send_whatsapp(
    payload: MessageRequest,
    user: User = Depends(require_admin),
    messenger: Messenger = Depends(twilio_messenger("whatsapp")),
):
    return await _send_text("whatsapp", payload, user, messenger)


@router.post("/bulk", response_model=BulkResult, dependencies=[Depends(rate_limit(2))])
async def send_bulk(
    payload: BulkRequest,
    user: User = Depends(require_admin),
    messenger: Messenger = Depends(twilio_messenger("whatsapp")),
):
    """
    Sends one message per recipient, all at once.
    `{{ogrenci_adi}}` in the text is replaced by each recipient's name.
    A failed recipient does not stop the others.
    """
    messenger.require_twilio(payload.channel)

    phones = [normalize_phone(r.phone) for r in payload.recipients]
    outcomes = await asyncio.gather(
        *(
            messenger.send_text(payload.channel, phone, personalize(payload.message, r.name))
            for phone, r in zip(phones, payload.recipients)
        ),
        return_exceptions=True,
    )

    results = []
    for phone, outcome in zip(phones, outcomes):
        if isinstance(outcome, BaseException):
            error = outcome.message if isinstance(outcome, ProviderError) else str(outcome)
            results.append(RecipientResult(phone=phone, status="failed", error=error))
        else:
            results.append(RecipientResult(phone=phone, status="sent"))

    successful = sum(1 for r in results if r.status == "sent")
    logger.info(
        "Bulk %s by %s: %d sent, %d failed", payload.channel, user.id, successful, len(results) - successful
    )
    return BulkResult(
        summary=BulkSummary(total=len(results), successful=successful, failed=len(results) - successful),
        results=results,
    )


@router.post("/email", response_model=SendResult, dependencies=[Depends(rate_limit(10))])
async def send_email(
    payload: EmailRequest,
    user: User = Depends(require_admin),
    messenger: Messenger = Depends(resend_messenger),
):
    result = await messenger.send_email(payload.to, payload.subject, payload.message, payload.student_name)
    logger.info("Email sent by %s (%s)", user.id, result.get("message_id"))
    return SendResult(**result)
