"""
Process-wide clients built once and handed to routes through FastAPI
dependencies. Tests replace them with `app.dependency_overrides`.
"""

from functools import lru_cache
from typing import Optional

from wetreck.config import settings
from wetreck.notifications.sender import BaseSender, EmailSender
from wetreck.payments.service import PaymentService

@lru_cache
def get_email_sender() -> BaseSender:
    """Email sender shared by all requests"""
    return EmailSender.from_settings(settings)

@lru_cache
def get_payment_service() -> PaymentService:
    """Payment gateway client shared by all requests"""
    return PaymentService.from_settings(settings)

def get_admin_email() -> Optional[str]:
    """Administrator notification address, if configured"""
    return settings.admin_email
