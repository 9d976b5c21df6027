import hashlib
import hmac
import logging
from typing import Any, Dict, Optional

import razorpay

from wetreck.config import Settings
from wetreck.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)


def generate_signature(order_id: str, payment_id: str, secret: str) -> str:
    """HMAC-SHA256 hex digest of "<order_id>|<payment_id>" keyed by `secret`"""
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_payment_signature(order_id: str, payment_id: str, signature: str, secret: Optional[str]) -> bool:
    """Constant-time check of a gateway payment signature"""
    if not secret:
        logger.warning("Payment secret not configured, rejecting signature")
        return False
    expected = generate_signature(order_id, payment_id, secret)
    return hmac.compare_digest(expected.encode("utf-8"), (signature or "").encode("utf-8"))


class PaymentService:
    """Razorpay order creation and payment signature verification"""

    def __init__(self, key_id: Optional[str], key_secret: Optional[str], client: Any = None):
        self.key_id = key_id
        self.key_secret = key_secret
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "PaymentService":
        return cls(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET)

    @property
    def client(self):
        if self._client is None:
            if not self.key_id or not self.key_secret:
                raise PaymentGatewayError("Payment gateway is not configured")
            self._client = razorpay.Client(auth=(self.key_id, self.key_secret))
        return self._client

    def create_order(self, amount: float, currency: str = "INR", receipt: Optional[str] = None) -> Dict[str, Any]:
        """Create a gateway order; `amount` is in major units"""
        data = {
            "amount": int(round(amount * 100)),  # smallest currency unit
            "currency": currency,
        }
        if receipt:
            data["receipt"] = receipt

        try:
            order = self.client.order.create(data=data)
        except PaymentGatewayError:
            raise
        except Exception as e:
            logger.error(f"Failed to create payment order: {e}")
            raise PaymentGatewayError(str(e)) from e

        logger.info(f"Created payment order {order.get('id')} for {data['amount']} {currency}")
        return order

    def verify(self, order_id: str, payment_id: str, signature: str) -> bool:
        verified = verify_payment_signature(order_id, payment_id, signature, self.key_secret)
        if verified:
            logger.info(f"Payment {payment_id} verified for order {order_id}")
        else:
            logger.warning(f"Payment verification failed for order {order_id}")
        return verified
