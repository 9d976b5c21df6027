from datetime import datetime, time

import pytest

from wetreck.memberships.scanner import ExpirationScanner, seconds_until, start_of_day
from wetreck.models import Membership

from .conftest import ADMIN_EMAIL, RecordingSender

NOW = datetime(2026, 10, 19, 0, 0, 5)


def add_member(db_session, email, end_date, notified=False, name="Member"):
    member = Membership(
        name=name,
        email=email,
        membership_plan="2 Years Membership",
        unique_code="ABCD1234",
        end_date=end_date,
        expiration_notified=notified,
    )
    db_session.add(member)
    db_session.commit()
    return member.id


@pytest.fixture
def scanner(session_factory, email_sender):
    return ExpirationScanner(session_factory, email_sender, ADMIN_EMAIL)


def test_expired_member_is_notified_once(scanner, db_session, email_sender):
    member_id = add_member(db_session, "late@example.com", datetime(2026, 10, 18, 23, 59), name="Late")

    report = scanner.run_once(now=NOW)

    assert (report.scanned, report.notified, report.failed) == (1, 1, 0)
    assert email_sender.recipients() == ["late@example.com", ADMIN_EMAIL]
    assert email_sender.sent[0]["subject"] == "Your Membership Has Expired"
    assert email_sender.sent[1]["subject"] == "Membership Expired for Late"
    assert "18/10/2026" in email_sender.sent[0]["html"]

    db_session.expire_all()
    assert db_session.get(Membership, member_id).expiration_notified is True

    second = scanner.run_once(now=NOW)
    assert second.scanned == 0
    assert len(email_sender.sent) == 2


def test_membership_ending_today_is_not_expired(scanner, db_session, email_sender):
    add_member(db_session, "today@example.com", datetime(2026, 10, 19, 0, 0))

    report = scanner.run_once(now=datetime(2026, 10, 19, 18, 0))

    assert report.scanned == 0
    assert email_sender.sent == []


def test_already_notified_member_is_skipped(scanner, db_session, email_sender):
    add_member(db_session, "done@example.com", datetime(2025, 1, 1), notified=True)

    assert scanner.run_once(now=NOW).scanned == 0
    assert email_sender.sent == []


def test_failure_on_one_member_does_not_stop_scan(scanner, db_session, email_sender):
    failing_id = add_member(db_session, "bounce@example.com", datetime(2026, 5, 1))
    ok_id = add_member(db_session, "fine@example.com", datetime(2026, 6, 1))
    email_sender.failing.add("bounce@example.com")

    report = scanner.run_once(now=NOW)

    assert (report.scanned, report.notified, report.failed) == (2, 1, 1)
    db_session.expire_all()
    assert db_session.get(Membership, failing_id).expiration_notified is False
    assert db_session.get(Membership, ok_id).expiration_notified is True

    # the unflagged member is picked up again on the next run
    email_sender.failing.clear()
    retry = scanner.run_once(now=NOW)
    assert (retry.scanned, retry.notified) == (1, 1)


def test_admin_notice_skipped_without_admin(session_factory, db_session, email_sender):
    add_member(db_session, "solo@example.com", datetime(2026, 1, 1))
    scanner = ExpirationScanner(session_factory, email_sender, admin_email=None)

    report = scanner.run_once(now=NOW)

    assert report.notified == 1
    assert email_sender.recipients() == ["solo@example.com"]


def test_start_of_day():
    assert start_of_day(datetime(2026, 10, 19, 15, 30)) == datetime(2026, 10, 19)


def test_seconds_until_next_midnight():
    assert seconds_until(datetime(2026, 10, 19, 23, 0), time(0, 0)) == 3600
    assert seconds_until(datetime(2026, 10, 19, 0, 0), time(0, 0)) == 24 * 3600
    assert seconds_until(datetime(2026, 10, 19, 1, 0), time(6, 30)) == 5.5 * 3600


def test_member_without_email_only_notifies_admin(scanner, db_session, email_sender):
    member_id = add_member(db_session, None, datetime(2026, 9, 30), name="No Mail")

    report = scanner.run_once(now=NOW)

    assert (report.scanned, report.notified, report.failed) == (1, 1, 0)
    assert email_sender.recipients() == [ADMIN_EMAIL]
    assert email_sender.sent[0]["subject"] == "Membership Expired for No Mail"
    db_session.expire_all()
    assert db_session.get(Membership, member_id).expiration_notified is True
    assert scanner.run_once(now=NOW).scanned == 0


class StoreOutageSender(RecordingSender):
    """Drops the memberships table once the first admin notice goes out"""

    def __init__(self, engine):
        super().__init__()
        self.engine = engine

    def send(self, recipient, subject, html):
        super().send(recipient, subject, html)
        if recipient == ADMIN_EMAIL and len(self.sent) == 2:
            with self.engine.begin() as conn:
                conn.exec_driver_sql("ALTER TABLE memberships RENAME TO memberships_offline")


def test_store_failure_mid_scan_is_reported_per_member(engine, session_factory, db_session):
    for index in range(3):
        add_member(db_session, f"m{index}@example.com", datetime(2026, 8, 1 + index))
    db_session.close()
    sender = StoreOutageSender(engine)
    scanner = ExpirationScanner(session_factory, sender, ADMIN_EMAIL)

    report = scanner.run_once(now=NOW)

    assert (report.scanned, report.notified, report.failed) == (3, 0, 3)
    assert sender.recipients() == ["m0@example.com", ADMIN_EMAIL]
