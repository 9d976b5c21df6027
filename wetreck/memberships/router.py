from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from wetreck.database import get_db
from wetreck.dependencies import get_admin_email, get_email_sender
from wetreck.exceptions import PersistenceError
from wetreck.memberships.schemas import (
    MembershipCreate, MembershipRecord, MembershipSubmissionResponse,
    MembershipValidationRequest, MembershipValidationResponse
)
from wetreck.memberships.service import MembershipService
from wetreck.notifications.sender import BaseSender

router = APIRouter()

@router.post("/membership", response_model=MembershipSubmissionResponse)
def register_membership(
    request: MembershipCreate,
    db: Session = Depends(get_db),
    email_sender: BaseSender = Depends(get_email_sender),
    admin_email: Optional[str] = Depends(get_admin_email)
):
    """Register a membership and send the welcome email"""

    membership_service = MembershipService(db, email_sender, admin_email)

    try:
        member, result = membership_service.register(request)
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save membership info."
        )

    if result.notified:
        message = "Membership info received, saved, and emails sent."
    else:
        message = "Membership info saved, but failed to send emails."

    return MembershipSubmissionResponse(
        message=message,
        persisted=result.persisted,
        notified=result.notified,
        notify_error=result.notify_error,
        member=MembershipRecord.model_validate(member)
    )

@router.get("/users", response_model=List[MembershipRecord])
def list_members(db: Session = Depends(get_db)):
    """List every membership"""
    try:
        return MembershipService(db).list_members()
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch memberships."
        )

@router.post(
    "/validate-membership",
    response_model=MembershipValidationResponse,
    response_model_exclude_none=True
)
def validate_membership(request: MembershipValidationRequest, db: Session = Depends(get_db)):
    """Check a membership code against the member's email"""
    try:
        is_valid, member = MembershipService(db).validate(request.email, request.membership_id)
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to validate membership."
        )

    if not is_valid:
        return MembershipValidationResponse(is_valid=False, message="Invalid membership ID or email")

    return MembershipValidationResponse(is_valid=True, member=MembershipRecord.model_validate(member))
