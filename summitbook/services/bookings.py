# summitbook/services/bookings.py
import logging

from fastapi.concurrency import run_in_threadpool

from summitbook.core.database import save_booking, log_activity
from summitbook.models.booking import BookingRecord

logger = logging.getLogger(__name__)


def dispatch_confirmation(booking: BookingRecord) -> None:
    """Queue the confirmation email. Failures never fail the booking."""
    from summitbook.tasks.tasks import send_booking_confirmation_task

    try:
        send_booking_confirmation_task.delay(booking.model_dump(mode="json"))
    except Exception as e:
        logger.error(f"Could not queue confirmation for booking {booking.booking_id}: {e}")


async def confirm_booking(conn, booking: BookingRecord, action: str) -> None:
    """Persist a confirmed booking (when a database is configured) and notify the customer."""
    if conn is None:
        logger.warning(f"No database configured, booking {booking.booking_id} not persisted")
    else:
        await save_booking(conn, booking)
        await log_activity(
            conn,
            action,
            booking.booking_id,
            {
                "payment_method": booking.payment_method.value,
                "provider_order_id": booking.provider_order_id,
                "amount": str(booking.amount),
                "currency": booking.currency,
            },
        )

    logger.info(f"Booking {booking.booking_id} confirmed via {booking.payment_method.value}")
    await run_in_threadpool(dispatch_confirmation, booking)
