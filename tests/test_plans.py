import re
from datetime import datetime

import pytest

from wetreck.memberships.plans import PlanTier, classify_plan, render_plan_details
from wetreck.memberships.service import generate_unique_code


@pytest.mark.parametrize("plan", [
    "299",
    "2 Years Plan",
    "2 years membership",
    " Two Years Membership ",
    "2 year plan",
])
def test_two_year_aliases(plan):
    described = classify_plan(plan)
    assert described.tier == PlanTier.TWO_YEAR
    assert described.amount_line == "₹299"


@pytest.mark.parametrize("plan", ["999", "Lifetime Membership", "life time plan", "LIFE TIME MEMBERSHIP"])
def test_lifetime_aliases(plan):
    described = classify_plan(plan)
    assert described.tier == PlanTier.LIFETIME
    assert described.amount_line == "₹999"


def test_unknown_plan_is_custom():
    described = classify_plan("Monsoon Special")
    assert described.tier == PlanTier.CUSTOM
    assert described.amount_line == "Not specified"
    assert render_plan_details(described) == "<h3>Selected Plan: Monsoon Special</h3>"


@pytest.mark.parametrize("plan", [None, "", "   "])
def test_blank_plan_is_unspecified(plan):
    described = classify_plan(plan)
    assert described.tier == PlanTier.UNSPECIFIED
    assert render_plan_details(described) == "<p><strong>No plan was selected.</strong></p>"


def test_custom_plan_title_is_escaped():
    html = render_plan_details(classify_plan("<b>VIP</b>"))
    assert "<b>" not in html
    assert "&lt;b&gt;VIP&lt;/b&gt;" in html


def test_two_year_block_lists_dates():
    html = render_plan_details(classify_plan("299"), datetime(2026, 1, 1), datetime(2027, 12, 31))
    assert "<strong>Amount:</strong> ₹299" in html
    assert "Valid for 2 years" in html
    assert "31/12/2027" in html


def test_lifetime_block_has_no_dates():
    html = render_plan_details(classify_plan("999"), datetime(2026, 1, 1), datetime(2027, 12, 31))
    assert "Start Date" not in html
    assert "Free annual trek (one per year)" in html


def test_unique_code_format():
    for _ in range(50):
        assert re.fullmatch(r"[A-Z0-9]{8}", generate_unique_code())
