from pydantic import validator
from typing import Optional
from datetime import datetime

from wetreck.bookings.schemas import CamelModel
from wetreck.exceptions import NotifyErrorKind

def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to scheduler-local wall-clock time"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)

class MembershipCreate(CamelModel):
    """Membership registration form"""
    name: Optional[str] = None
    dob: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None
    occupation: Optional[str] = None
    address: Optional[str] = None
    membership_plan: Optional[str] = None
    amount: Optional[float] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @validator('start_date', 'end_date')
    def normalize_timezone(cls, v):
        return to_local_naive(v)

class MembershipRecord(CamelModel):
    """Stored membership"""
    id: int
    name: Optional[str] = None
    dob: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None
    occupation: Optional[str] = None
    address: Optional[str] = None
    membership_plan: Optional[str] = None
    amount: Optional[float] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    unique_code: str
    expiration_notified: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class MembershipSubmissionResponse(CamelModel):
    message: str
    persisted: bool
    notified: bool
    notify_error: Optional[NotifyErrorKind] = None
    member: MembershipRecord

class MembershipValidationRequest(CamelModel):
    email: str
    membership_id: str

class MembershipValidationResponse(CamelModel):
    is_valid: bool
    member: Optional[MembershipRecord] = None
    message: Optional[str] = None
