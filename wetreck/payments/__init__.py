"""
Payment Module

Razorpay order creation and HMAC-SHA256 verification of payment
signatures over "<order_id>|<payment_id>". Endpoints live in
`wetreck.payments.router`.
"""

from .service import PaymentService, generate_signature, verify_payment_signature

__all__ = [
    "PaymentService",
    "generate_signature",
    "verify_payment_signature"
]
