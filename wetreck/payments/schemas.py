from pydantic import BaseModel, Field
from typing import Optional

class PaymentOrderRequest(BaseModel):
    """Order to open with the payment gateway"""
    amount: float = Field(..., gt=0, description="Amount in major currency units")
    currency: str = "INR"
    receipt: Optional[str] = None

class PaymentVerificationRequest(BaseModel):
    """Identifiers and signature returned by the gateway checkout"""
    order_id: str
    payment_id: str
    signature: str

class PaymentVerificationResponse(BaseModel):
    success: bool
    message: str
