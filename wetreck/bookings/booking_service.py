import logging
from typing import Dict, Optional, Tuple, Type, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wetreck.bookings.schemas import (
    AdminEmailRequest, BookingRecord, BookingRequest, BookingType
)
from wetreck.exceptions import (
    NotificationError, PersistenceError, SubmissionResult, ValidationError
)
from wetreck.models import BikeBooking, TourBooking, TrekBooking
from wetreck.notifications import templates
from wetreck.notifications.sender import BaseSender

logger = logging.getLogger(__name__)

BookingModel = Union[TourBooking, TrekBooking, BikeBooking]

BOOKING_MODELS: Dict[BookingType, Type] = {
    BookingType.TOUR: TourBooking,
    BookingType.TREK: TrekBooking,
    BookingType.BIKE: BikeBooking,
}

class BookingService:
    """Service for tour, trek and bike booking intake"""

    def __init__(self, db: Optional[Session], email_sender: BaseSender, admin_email: Optional[str] = None):
        self.db = db
        self.email_sender = email_sender
        self.admin_email = admin_email

    def create_booking(self, request: BookingRequest) -> Tuple[BookingRecord, SubmissionResult]:
        """Validate, persist and announce a booking"""

        booking_type = self.resolve_booking_type(request.booking_type)
        booking = self._build_record(booking_type, request)

        try:
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save {booking_type.value} booking: {e}", exc_info=True)
            raise PersistenceError(str(e)) from e

        logger.info(f"Saved {booking_type.value} booking {booking.id} for {request.package_title}")

        result = self._notify(request)
        return self._to_record(booking_type, booking), result

    def send_admin_email(self, request: AdminEmailRequest) -> None:
        """Forward a pickup request to the given recipient; raises NotificationError"""
        html = templates.pickup_admin_notice(request.subject, request)
        self.email_sender.send(request.recipient, request.subject, html)

    @staticmethod
    def resolve_booking_type(value: Optional[str]) -> BookingType:
        try:
            return BookingType(value)
        except ValueError:
            raise ValidationError("Invalid booking type")

    def _build_record(self, booking_type: BookingType, request: BookingRequest) -> BookingModel:
        model = BOOKING_MODELS[booking_type]
        fields = dict(
            package_id=request.package_id,
            package_title=request.package_title,
            person_count=request.person_count,
            date=request.date,
            person_details=[person.model_dump(by_alias=True) for person in request.person_details],
            arrival_place=request.arrival_place,
            pickup_needed=request.pickup_needed,
            is_member=request.is_member,
            membership_id=request.membership_id,
            final_amount=request.final_amount,
        )

        if booking_type == BookingType.TREK and request.health_details:
            fields["health_details"] = request.health_details.model_dump(by_alias=True)
        elif booking_type == BookingType.BIKE and request.bike_details:
            fields["bike_details"] = request.bike_details.model_dump(by_alias=True)

        return model(**fields)

    def _notify(self, request: BookingRequest) -> SubmissionResult:
        """Email the submitter and the administrator; failures are logged only"""

        subject = f"Booking Confirmation: {request.package_title}"
        html = templates.booking_confirmation(request)

        recipients = []
        first_person = request.person_details[0] if request.person_details else None
        if first_person and first_person.email:
            recipients.append(first_person.email)
        else:
            logger.info("No submitter email on booking, skipping user confirmation")
        if self.admin_email:
            recipients.append(self.admin_email)
        else:
            logger.warning("Admin email not configured, skipping admin notification")

        error = None
        for recipient in recipients:
            try:
                self.email_sender.send(recipient, subject, html)
            except NotificationError as e:
                logger.error(f"Failed to send booking email to {recipient}: {e}")
                error = error or e.kind

        return SubmissionResult(persisted=True, notified=error is None, notify_error=error)

    @staticmethod
    def _to_record(booking_type: BookingType, booking: BookingModel) -> BookingRecord:
        return BookingRecord.model_validate({
            "id": booking.id,
            "booking_type": booking_type,
            "package_id": booking.package_id,
            "package_title": booking.package_title,
            "person_count": booking.person_count,
            "date": booking.date,
            "person_details": booking.person_details or [],
            "arrival_place": booking.arrival_place,
            "pickup_needed": bool(booking.pickup_needed),
            "is_member": bool(booking.is_member),
            "membership_id": booking.membership_id,
            "final_amount": booking.final_amount,
            "health_details": getattr(booking, "health_details", None),
            "bike_details": getattr(booking, "bike_details", None),
            "created_at": booking.created_at,
        })
