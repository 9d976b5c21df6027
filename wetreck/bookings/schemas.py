from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime
from enum import Enum

from wetreck.exceptions import NotifyErrorKind

class BookingType(str, Enum):
    """Booking variant discriminator"""
    TOUR = "tour"
    TREK = "trek"
    BIKE = "bike"

class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON and coercing numbers to text"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        coerce_numbers_to_str = True

# Traveler and variant sub-records
class PersonDetail(CamelModel):
    """One traveler on a booking"""
    name: Optional[str] = None
    age: Optional[str] = None
    relation: Optional[str] = None
    occupation: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

class HealthDetail(CamelModel):
    """Trek-only health declaration"""
    heart_conditions: Optional[str] = None
    respiratory_issues: Optional[str] = None
    past_injuries: Optional[str] = None
    other_concerns: Optional[str] = None

class BikeDetail(CamelModel):
    """Bike-only rental details"""
    type: Optional[str] = None
    name: Optional[str] = None
    cc: Optional[str] = None
    experience: Optional[str] = None

# Request Models
class BookingFields(CamelModel):
    """Fields shared by every booking variant"""
    package_id: Optional[str] = None
    package_title: Optional[str] = None
    person_count: Optional[int] = None
    date: Optional[str] = None
    person_details: List[PersonDetail] = []
    arrival_place: Optional[str] = None
    pickup_needed: bool = False
    is_member: bool = False
    membership_id: Optional[str] = None
    final_amount: Optional[float] = None

class BookingRequest(BookingFields):
    """
    Booking submission. `bookingType` is checked by the service so that an
    unknown or missing variant is a client error rather than a schema error.
    Fields outside this allow-list are ignored.
    """
    booking_type: Optional[str] = None
    health_details: Optional[HealthDetail] = None
    bike_details: Optional[BikeDetail] = None

class AdminEmailRequest(CamelModel):
    """Pickup request forwarded to an administrator"""
    subject: str
    recipient: str
    package_title: Optional[str] = None
    person_count: Optional[int] = None
    date: Optional[str] = None
    arrival_place: Optional[str] = None
    pickup_needed: bool = False
    person_details: List[PersonDetail] = []

# Response Models
class BookingRecord(BookingFields):
    """Stored booking as returned to the caller"""
    id: int
    booking_type: BookingType
    health_details: Optional[HealthDetail] = None
    bike_details: Optional[BikeDetail] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class BookingSubmissionResponse(CamelModel):
    message: str
    persisted: bool
    notified: bool
    notify_error: Optional[NotifyErrorKind] = None
    booking: BookingRecord

class MessageResponse(BaseModel):
    message: str
