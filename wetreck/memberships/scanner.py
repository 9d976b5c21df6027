import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wetreck.exceptions import NotificationError
from wetreck.models import Membership
from wetreck.notifications import templates
from wetreck.notifications.sender import BaseSender

logger = logging.getLogger(__name__)

@dataclass
class ScanReport:
    scanned: int = 0
    notified: int = 0
    failed: int = 0

def start_of_day(now: datetime) -> datetime:
    return datetime.combine(now.date(), time.min)

def seconds_until(now: datetime, at: time) -> float:
    """Seconds from `now` until the next occurrence of wall-clock time `at`"""
    target = datetime.combine(now.date(), at)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()

class ExpirationScanner:
    """
    Daily job that notifies members whose membership has ended.

    Each expired member gets a user email and an admin email, then is
    flagged as notified; a member without an email address gets only the
    admin notice. A failure on one member is logged and the scan
    moves on; a member whose email failed stays unflagged and is picked up
    again on the next run.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        email_sender: BaseSender,
        admin_email: Optional[str] = None,
        run_at: time = time(0, 0),
    ):
        self.session_factory = session_factory
        self.email_sender = email_sender
        self.admin_email = admin_email
        self.run_at = run_at

    def find_expired(self, db: Session, now: datetime) -> List[Membership]:
        return db.query(Membership).filter(
            Membership.end_date < start_of_day(now),
            Membership.expiration_notified == False  # noqa: E712
        ).order_by(Membership.id).all()

    def run_once(self, now: Optional[datetime] = None) -> ScanReport:
        """Scan for expired memberships and notify each one"""
        now = now or datetime.now()
        report = ScanReport()

        logger.info("Running daily check for expired memberships...")
        db = self.session_factory()
        try:
            try:
                expired = self.find_expired(db, now)
            except SQLAlchemyError as e:
                logger.error(f"Error checking for expired memberships: {e}", exc_info=True)
                return report

            report.scanned = len(expired)
            member_ids = [member.id for member in expired]
            for member_id, member in zip(member_ids, expired):
                if self._notify_member(db, member_id, member):
                    report.notified += 1
                else:
                    report.failed += 1
        finally:
            db.close()

        logger.info(
            f"Expiration scan finished: {report.scanned} expired, "
            f"{report.notified} notified, {report.failed} failed"
        )
        return report

    def _notify_member(self, db: Session, member_id: int, member: Membership) -> bool:
        # Attributes of `member` reload from the store after every commit
        try:
            if member.email:
                self.email_sender.send(
                    member.email,
                    "Your Membership Has Expired",
                    templates.membership_expired_user(member),
                )
            else:
                logger.info(f"Membership {member_id} has no email, skipping expiration notice to member")
            if self.admin_email:
                self.email_sender.send(
                    self.admin_email,
                    f"Membership Expired for {member.name}",
                    templates.membership_expired_admin(member),
                )
        except NotificationError as e:
            logger.error(f"Failed to send expiration notice for membership {member_id}: {e}")
            return False
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to load membership {member_id}: {e}", exc_info=True)
            return False

        try:
            member.expiration_notified = True
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to flag membership {member_id} as notified: {e}", exc_info=True)
            return False

        logger.info(f"Sent expiration notice for membership {member_id}")
        return True

    async def run_daily(self):
        """Run the scan every day at `run_at`, local time, until cancelled"""
        logger.info(f"Starting expiration scanner, daily at {self.run_at.strftime('%H:%M')}")

        while True:
            try:
                delay = seconds_until(datetime.now(), self.run_at)
                logger.info(f"Next expiration scan in {delay:.0f} seconds")
                await asyncio.sleep(delay)
                await asyncio.to_thread(self.run_once)
            except asyncio.CancelledError:
                logger.info("Expiration scanner cancelled.")
                break
            except Exception as e:
                logger.error(f"Error in expiration scanner loop: {e}", exc_info=True)
                await asyncio.sleep(60)
