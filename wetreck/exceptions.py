"""
Error taxonomy and intake outcome types shared by the services.

Routers translate these into HTTP responses; services never build
responses themselves.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class WeTreckError(Exception):
    """Base class for service errors"""


class ValidationError(WeTreckError):
    """Request rejected before any side effect"""


class PersistenceError(WeTreckError):
    """Store unavailable or write rejected"""


class NotFound(WeTreckError):
    """Lookup matched no record"""


class PaymentGatewayError(WeTreckError):
    """Payment gateway call failed"""


class NotifyErrorKind(str, Enum):
    PROVIDER = "provider"
    TIMEOUT = "timeout"
    NOT_CONFIGURED = "not_configured"
    INVALID_RECIPIENT = "invalid_recipient"


class NotificationError(WeTreckError):
    """Email could not be handed to the provider"""

    def __init__(self, message: str, kind: NotifyErrorKind = NotifyErrorKind.PROVIDER):
        super().__init__(message)
        self.kind = kind


@dataclass
class SubmissionResult:
    """Outcome of a persist-then-notify intake request"""
    persisted: bool
    notified: bool
    notify_error: Optional[NotifyErrorKind] = None
