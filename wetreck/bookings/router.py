from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional

from wetreck.database import get_db
from wetreck.dependencies import get_admin_email, get_email_sender
from wetreck.bookings.schemas import (
    AdminEmailRequest, BookingRequest, BookingSubmissionResponse, MessageResponse
)
from wetreck.bookings.booking_service import BookingService
from wetreck.exceptions import NotificationError, PersistenceError, ValidationError
from wetreck.notifications.sender import BaseSender

router = APIRouter()

@router.post("/booking", response_model=BookingSubmissionResponse)
def create_booking(
    request: BookingRequest,
    db: Session = Depends(get_db),
    email_sender: BaseSender = Depends(get_email_sender),
    admin_email: Optional[str] = Depends(get_admin_email)
):
    """Save a tour, trek or bike booking and send confirmation emails"""

    booking_service = BookingService(db, email_sender, admin_email)

    try:
        booking, result = booking_service.create_booking(request)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to save booking info.", "details": str(e)}
        )

    if result.notified:
        message = "Booking info received, saved, and emails sent."
    else:
        message = "Booking info saved, but failed to send emails."

    return BookingSubmissionResponse(
        message=message,
        persisted=result.persisted,
        notified=result.notified,
        notify_error=result.notify_error,
        booking=booking
    )

@router.post("/send-admin-email", response_model=MessageResponse)
def send_admin_email(
    request: AdminEmailRequest,
    email_sender: BaseSender = Depends(get_email_sender)
):
    """Send a pickup request summary to an administrator"""

    booking_service = BookingService(None, email_sender)

    try:
        booking_service.send_admin_email(request)
    except NotificationError:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Failed to send admin email"}
        )

    return MessageResponse(message="Admin email sent successfully")
