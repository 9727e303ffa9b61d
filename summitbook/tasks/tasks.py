from .celery_app import celery_app
from summitbook.services.notifications import send_booking_confirmation

@celery_app.task
def send_booking_confirmation_task(booking: dict) -> bool:
    return send_booking_confirmation(booking)
