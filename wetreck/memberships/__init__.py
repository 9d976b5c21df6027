"""
Membership Module

Membership registration, plan classification, code validation and the
daily expiration scan.

Key Components:
- plans.py: plan tier classification and plan description HTML
- service.py: registration, listing and code validation
- scanner.py: daily job notifying members whose membership has ended
- router.py: FastAPI endpoints mounted under /api
- schemas.py: Pydantic models for membership requests and responses
"""

from .router import router
from .service import MembershipService, generate_unique_code
from .scanner import ExpirationScanner, ScanReport
from .plans import PlanTier, PlanDescription, classify_plan
from .schemas import (
    MembershipCreate, MembershipRecord, MembershipSubmissionResponse,
    MembershipValidationRequest, MembershipValidationResponse
)

__all__ = [
    "router",
    "MembershipService",
    "generate_unique_code",
    "ExpirationScanner",
    "ScanReport",
    "PlanTier",
    "PlanDescription",
    "classify_plan",
    "MembershipCreate",
    "MembershipRecord",
    "MembershipSubmissionResponse",
    "MembershipValidationRequest",
    "MembershipValidationResponse"
]
