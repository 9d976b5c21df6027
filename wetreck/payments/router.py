from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from wetreck.dependencies import get_payment_service
from wetreck.exceptions import PaymentGatewayError
from wetreck.payments.schemas import (
    PaymentOrderRequest, PaymentVerificationRequest, PaymentVerificationResponse
)
from wetreck.payments.service import PaymentService

router = APIRouter()

@router.post("/order")
def create_payment_order(
    request: PaymentOrderRequest,
    payment_service: PaymentService = Depends(get_payment_service)
):
    """Create a gateway order for checkout"""
    try:
        return payment_service.create_order(request.amount, request.currency, request.receipt)
    except PaymentGatewayError:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to create order"}
        )

@router.post("/verify", response_model=PaymentVerificationResponse)
def verify_payment(
    request: PaymentVerificationRequest,
    payment_service: PaymentService = Depends(get_payment_service)
):
    """Verify the signature of a completed payment"""
    if payment_service.verify(request.order_id, request.payment_id, request.signature):
        return PaymentVerificationResponse(success=True, message="Payment has been verified")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Payment verification failed"}
    )
