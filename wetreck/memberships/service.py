import logging
import secrets
import string
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wetreck.exceptions import (
    NotificationError, NotFound, PersistenceError, SubmissionResult
)
from wetreck.memberships.plans import classify_plan, render_plan_details
from wetreck.memberships.schemas import MembershipCreate
from wetreck.models import Membership
from wetreck.notifications import templates
from wetreck.notifications.sender import BaseSender

logger = logging.getLogger(__name__)

UNIQUE_CODE_ALPHABET = string.ascii_uppercase + string.digits
UNIQUE_CODE_LENGTH = 8
DEFAULT_PLAN = "Not specified"

def generate_unique_code() -> str:
    """
    Random membership code of 8 characters from [A-Z0-9].

    Codes are not checked against existing records; with 36^8 possible
    values a collision is unlikely but not impossible.
    """
    return "".join(secrets.choice(UNIQUE_CODE_ALPHABET) for _ in range(UNIQUE_CODE_LENGTH))

class MembershipService:
    """Service for membership registration, listing and validation"""

    def __init__(self, db: Session, email_sender: Optional[BaseSender] = None, admin_email: Optional[str] = None):
        self.db = db
        self.email_sender = email_sender
        self.admin_email = admin_email

    def register(self, request: MembershipCreate) -> Tuple[Membership, SubmissionResult]:
        """Persist a new membership and send the admin notice and welcome email"""

        logger.info(f"Received membershipPlan value: {request.membership_plan!r}")

        member = Membership(
            name=request.name,
            dob=request.dob,
            mobile=request.mobile,
            email=request.email,
            occupation=request.occupation,
            address=request.address,
            membership_plan=request.membership_plan if request.membership_plan is not None else DEFAULT_PLAN,
            amount=request.amount,
            start_date=request.start_date,
            end_date=request.end_date,
            unique_code=generate_unique_code(),
            expiration_notified=False,
        )

        try:
            self.db.add(member)
            self.db.commit()
            self.db.refresh(member)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save membership info: {e}", exc_info=True)
            raise PersistenceError(str(e)) from e

        logger.info(f"Registered membership {member.id} with code {member.unique_code}")

        return member, self._notify(member, request.membership_plan)

    def list_members(self) -> List[Membership]:
        """All memberships, oldest first"""
        try:
            return self.db.query(Membership).order_by(Membership.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list memberships: {e}", exc_info=True)
            raise PersistenceError(str(e)) from e

    def get_by_code(self, email: str, unique_code: str) -> Membership:
        """Exact match on email and unique code; raises NotFound"""
        try:
            member = self.db.query(Membership).filter(
                Membership.email == email,
                Membership.unique_code == unique_code
            ).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to validate membership: {e}", exc_info=True)
            raise PersistenceError(str(e)) from e

        if not member:
            raise NotFound("Invalid membership ID or email")
        return member

    def validate(self, email: str, unique_code: str) -> Tuple[bool, Optional[Membership]]:
        """Report whether a membership with this email and code exists"""
        try:
            return True, self.get_by_code(email, unique_code)
        except NotFound:
            return False, None

    def _notify(self, member: Membership, submitted_plan: Optional[str]) -> SubmissionResult:
        plan = classify_plan(submitted_plan)
        plan_block = render_plan_details(plan, member.start_date, member.end_date)

        messages = []
        if self.admin_email:
            messages.append((
                self.admin_email,
                "New Membership Registration",
                templates.membership_admin_notice(member, plan_block),
            ))
        else:
            logger.warning("Admin email not configured, skipping membership notice")
        if member.email:
            messages.append((
                member.email,
                "Welcome to our Membership!",
                templates.membership_welcome(member, plan_block, plan.amount_line),
            ))
        else:
            logger.info(f"Membership {member.id} has no email, skipping welcome email")

        error = None
        for recipient, subject, html in messages:
            try:
                self.email_sender.send(recipient, subject, html)
            except NotificationError as e:
                logger.error(f"Failed to send membership email to {recipient}: {e}")
                error = error or e.kind

        return SubmissionResult(persisted=True, notified=error is None, notify_error=error)
