"""
Notification Module

Transactional email for booking and membership events. `EmailSender`
hands one message at a time to the Resend API; `templates` builds the
HTML bodies.
"""

from .sender import BaseSender, EmailSender
from . import templates

__all__ = [
    "BaseSender",
    "EmailSender",
    "templates"
]
