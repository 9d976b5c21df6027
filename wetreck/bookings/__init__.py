"""
Booking Module

Intake of tour, trek and bike bookings. Each variant is stored in its own
table with the shared booking columns plus its variant payload (health
declaration for treks, bike details for bike rentals). After a booking is
saved the submitter and the administrator receive a confirmation email on
a best-effort basis.

Key Components:
- booking_service.py: variant selection, persistence and confirmation emails
- router.py: FastAPI endpoints mounted under /api/v2
- schemas.py: Pydantic models for booking requests and responses
"""

from .router import router
from .booking_service import BookingService
from .schemas import (
    BookingType, PersonDetail, HealthDetail, BikeDetail, BookingRequest,
    AdminEmailRequest, BookingRecord, BookingSubmissionResponse
)

__all__ = [
    "router",
    "BookingService",
    "BookingType",
    "PersonDetail",
    "HealthDetail",
    "BikeDetail",
    "BookingRequest",
    "AdminEmailRequest",
    "BookingRecord",
    "BookingSubmissionResponse"
]
