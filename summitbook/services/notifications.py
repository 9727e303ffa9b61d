# summitbook/services/notifications.py
from dataclasses import dataclass
from typing import Any, Dict
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from summitbook.core.config import settings

logger = logging.getLogger(__name__)

COMPANY_NAME = "Tamil Adventure Trekking Club"


class EmailSendError(Exception):
    """Raised when SES rejects or cannot deliver the confirmation."""


@dataclass(frozen=True)
class ConfirmationEmail:
    to_address: str
    subject: str
    text_body: str


def build_confirmation_email(booking: Dict[str, Any]) -> ConfirmationEmail:
    """Plain-text booking confirmation for the customer."""
    booking_id = booking["booking_id"]
    name = booking.get("customer_name") or "Adventurer"
    lines = [
        f"Hi {name},",
        "",
        "Your expedition booking is confirmed.",
        "",
        f"Booking ID:   {booking_id}",
        f"Expedition:   {booking.get('mountain_name') or booking.get('mountain_id') or '-'}",
        f"Date:         {booking.get('date') or '-'}",
        f"Participants: {booking.get('participants', 1)}",
        f"Amount paid:  {booking.get('amount')} {booking.get('currency')}",
        "",
        "Keep this booking ID for any correspondence with our team.",
        "",
        f"{COMPANY_NAME}",
    ]
    return ConfirmationEmail(
        to_address=booking["customer_email"],
        subject=f"Booking Confirmed - {booking_id}",
        text_body="\n".join(lines),
    )


def _get_ses_client():
    return boto3.client(
        "ses",
        region_name=settings.AWS_REGION,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
    )


def send_email_ses(email: ConfirmationEmail) -> Dict[str, Any]:
    client = _get_ses_client()
    try:
        resp = client.send_email(
            Source=f"{COMPANY_NAME} <{settings.FROM_EMAIL}>",
            Destination={"ToAddresses": [email.to_address]},
            Message={
                "Subject": {"Data": email.subject, "Charset": "UTF-8"},
                "Body": {"Text": {"Data": email.text_body, "Charset": "UTF-8"}},
            },
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"SES send_email failed for {email.to_address}: {e}")
        raise EmailSendError(str(e)) from e
    logger.info(f"SES send_email ok: MessageId={resp.get('MessageId')}")
    return resp


def send_booking_confirmation(booking: Dict[str, Any]) -> bool:
    """Send the confirmation; with SES disabled the message is only logged."""
    if not booking.get("customer_email"):
        logger.warning(f"No customer email for booking {booking.get('booking_id')}, skipping confirmation")
        return False

    email = build_confirmation_email(booking)

    if not settings.USE_SES_EMAIL:
        logger.info(f"Email not configured, confirmation for {booking['booking_id']} to {email.to_address} logged only")
        logger.debug(email.text_body)
        return False

    send_email_ses(email)
    logger.info(f"Booking confirmation sent for {booking['booking_id']}")
    return True
