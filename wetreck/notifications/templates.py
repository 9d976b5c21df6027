"""HTML bodies for every email the service sends."""

from datetime import datetime
from html import escape
from typing import Any, Iterable, Optional

PERSON_FIELDS = [
    ("Name", "name"),
    ("Age", "age"),
    ("Relation", "relation"),
    ("Occupation", "occupation"),
    ("Phone", "phone"),
    ("Email", "email"),
    ("City", "city"),
    ("State", "state"),
]


def _text(value: Any) -> str:
    return escape("" if value is None else str(value))


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")


def yes_no(flag: Optional[bool]) -> str:
    return "Yes" if flag else "No"


def render_person_details(persons: Iterable[Any]) -> str:
    blocks = []
    for person in persons:
        items = "".join(
            f"<li>{label}: {_text(getattr(person, attr, None))}</li>"
            for label, attr in PERSON_FIELDS
        )
        blocks.append(f"<ul>{items}</ul>")
    return "".join(blocks)


def booking_confirmation(booking: Any) -> str:
    return (
        "<h1>Booking Details</h1>"
        f"<p>Package: {_text(booking.package_title)}</p>"
        f"<p>Date: {_text(booking.date)}</p>"
        f"<p>Persons: {_text(booking.person_count)}</p>"
        f"<p>Arrival Place: {_text(booking.arrival_place)}</p>"
        f"<p>Pickup Needed: {yes_no(booking.pickup_needed)}</p>"
        "<h3>Person Details:</h3>"
        f"{render_person_details(booking.person_details)}"
    )


def pickup_admin_notice(subject: str, booking: Any) -> str:
    return (
        f"<h1>{_text(subject)}</h1>"
        "<p>A new booking has been made with a pickup request.</p>"
        "<h2>Booking Details:</h2>"
        "<ul>"
        f"<li>Package: {_text(booking.package_title)}</li>"
        f"<li>Persons: {_text(booking.person_count)}</li>"
        f"<li>Date: {_text(booking.date)}</li>"
        f"<li>Arrival Place: {_text(booking.arrival_place)}</li>"
        f"<li>Pickup Needed: {yes_no(booking.pickup_needed)}</li>"
        "</ul>"
        "<h3>Person Details:</h3>"
        f"{render_person_details(booking.person_details)}"
    )


def membership_admin_notice(member: Any, plan_block: str) -> str:
    return (
        "<h1>New Membership Registration</h1>"
        "<p>A new user has registered with the following details:</p>"
        "<ul>"
        f"<li>Name: {_text(member.name)}</li>"
        f"<li>Date of Birth: {_text(member.dob)}</li>"
        f"<li>Mobile: {_text(member.mobile)}</li>"
        f"<li>Email: {_text(member.email)}</li>"
        f"<li>Occupation: {_text(member.occupation)}</li>"
        f"<li>Address: {_text(member.address)}</li>"
        f"<li>Unique Code: {_text(member.unique_code)}</li>"
        "</ul>"
        "<h2>Selected Membership Plan</h2>"
        f"{plan_block}"
    )


def membership_welcome(member: Any, plan_block: str, amount_line: str) -> str:
    return (
        "<h1>Welcome to wetreck membership plan!</h1>"
        "<p>Thank you for registering for our membership.</p>"
        f"<p>Your Unique Membership Code is: <strong>{_text(member.unique_code)}</strong></p>"
        "<h2>Your Selected Plan</h2>"
        f"{plan_block}"
        f"<p>Your chosen plan amount is: {_text(amount_line)}.</p>"
        "<p>We are excited to have you on board.</p>"
    )


def membership_expired_user(member: Any) -> str:
    return (
        "<h1>Your Membership Has Expired</h1>"
        f"<p>Hi {_text(member.name)}, your {_text(member.membership_plan)} has expired on "
        f"{format_date(member.end_date)}. Please renew to continue enjoying the benefits.</p>"
    )


def membership_expired_admin(member: Any) -> str:
    return (
        "<h1>Membership Expired</h1>"
        f"<p>The membership for {_text(member.name)} ({_text(member.email)}) has expired on "
        f"{format_date(member.end_date)}.</p>"
    )
