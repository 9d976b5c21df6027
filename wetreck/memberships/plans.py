"""
Membership plan classification.

The plan string is stored exactly as submitted; classification only
decides which description and price the emails quote.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from html import escape
from typing import List, Optional

from wetreck.notifications.templates import format_date


class PlanTier(str, Enum):
    TWO_YEAR = "2-year"
    LIFETIME = "lifetime"
    CUSTOM = "custom"
    UNSPECIFIED = "unspecified"


TWO_YEAR_ALIASES = frozenset([
    "2 years plan",
    "2 years membership",
    "299",
    "two years plan",
    "two years membership",
    "2 year plan",
    "2 year membership",
])

LIFETIME_ALIASES = frozenset([
    "lifetime plan",
    "lifetime membership",
    "999",
    "life time plan",
    "life time membership",
])


@dataclass(frozen=True)
class PlanDescription:
    tier: PlanTier
    title: Optional[str] = None
    price: Optional[int] = None
    benefits: List[str] = field(default_factory=list)

    @property
    def amount_line(self) -> str:
        return f"₹{self.price}" if self.price is not None else "Not specified"


TWO_YEAR_PLAN = PlanDescription(
    tier=PlanTier.TWO_YEAR,
    title="2 Years Membership",
    price=299,
    benefits=[
        "Valid for 2 years",
        "Exclusive trek and bike ride offers",
        "Priority booking for popular treks",
        "Access to member-only events and webinars",
        "Personalized gear consultation",
        "Digital membership card",
    ],
)

LIFETIME_PLAN = PlanDescription(
    tier=PlanTier.LIFETIME,
    title="Lifetime Membership",
    price=999,
    benefits=[
        "Lifetime exclusive discounts on all treks",
        "Free annual trek (one per year)",
        "Dedicated trek consultant for planning",
        "VIP access to member events and expeditions",
        "Physical and digital membership card",
        "Special recognition in our community",
    ],
)


def normalize_plan(plan: Optional[str]) -> str:
    return (plan or "").strip().lower()


def classify_plan(plan: Optional[str]) -> PlanDescription:
    """Map a free-text plan name onto its tier description"""
    value = normalize_plan(plan)
    if value in TWO_YEAR_ALIASES:
        return TWO_YEAR_PLAN
    if value in LIFETIME_ALIASES:
        return LIFETIME_PLAN
    if value:
        return PlanDescription(tier=PlanTier.CUSTOM, title=plan.strip())
    return PlanDescription(tier=PlanTier.UNSPECIFIED)


def render_plan_details(
    plan: PlanDescription,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> str:
    """HTML block describing the selected plan"""
    if plan.tier == PlanTier.UNSPECIFIED:
        return "<p><strong>No plan was selected.</strong></p>"

    html = f"<h3>Selected Plan: {escape(plan.title)}</h3>"
    if plan.tier == PlanTier.CUSTOM:
        return html

    html += f"<p><strong>Amount:</strong> {plan.amount_line}</p>"
    html += "<ul>" + "".join(f"<li>{benefit}</li>" for benefit in plan.benefits) + "</ul>"
    # Only the fixed-term plan has a validity window worth quoting
    if plan.tier == PlanTier.TWO_YEAR and start_date and end_date:
        html += (
            f"<p><strong>Start Date:</strong> {format_date(start_date)}</p>"
            f"<p><strong>End Date:</strong> {format_date(end_date)}</p>"
        )
    return html
