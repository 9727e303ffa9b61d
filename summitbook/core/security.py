# summitbook/core/security.py
from typing import Optional

from summitbook.core.config import RazorpayCredentials


class PaymentVerificationError(Exception):
    pass


def verify_razorpay_signature(
    order_id: str,
    payment_id: str,
    signature: Optional[str],
    credentials: RazorpayCredentials,
) -> None:
    """Check the ``order_id|payment_id`` signature with the Razorpay SDK utility."""
    if not signature:
        raise PaymentVerificationError("Missing payment signature")

    import razorpay
    from razorpay.errors import SignatureVerificationError

    client = razorpay.Client(auth=(credentials.key_id, credentials.key_secret))
    try:
        client.utility.verify_payment_signature(
            {
                "razorpay_order_id": order_id,
                "razorpay_payment_id": payment_id,
                "razorpay_signature": signature,
            }
        )
    except SignatureVerificationError as e:
        raise PaymentVerificationError("Payment signature mismatch") from e
