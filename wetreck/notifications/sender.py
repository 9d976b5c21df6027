import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Optional

import resend
from resend.exceptions import ResendError

from wetreck.config import Settings
from wetreck.exceptions import NotificationError, NotifyErrorKind

logger = logging.getLogger(__name__)


class BaseSender(ABC):
    """Sends one HTML email per call; raises NotificationError on failure"""

    @abstractmethod
    def send(self, recipient: str, subject: str, html: str) -> None:
        pass

    def close(self) -> None:
        pass


class EmailSender(BaseSender):
    """
    Resend-backed sender.

    The provider call runs on a small worker pool so the caller stops
    waiting after `timeout` seconds. No retry is attempted.
    """

    def __init__(self, api_key: Optional[str], from_address: str, timeout: float = 10.0, max_workers: int = 4):
        self.api_key = api_key
        self.from_address = from_address
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="email")
        if api_key:
            resend.api_key = api_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailSender":
        return cls(
            api_key=settings.RESEND_API_KEY,
            from_address=settings.EMAIL_FROM,
            timeout=settings.EMAIL_SEND_TIMEOUT_SECONDS,
        )

    def send(self, recipient: str, subject: str, html: str) -> None:
        if not self.api_key:
            raise NotificationError("Email provider is not configured", NotifyErrorKind.NOT_CONFIGURED)
        if not recipient or "@" not in recipient:
            raise NotificationError(f"Invalid recipient: {recipient!r}", NotifyErrorKind.INVALID_RECIPIENT)

        params = {
            "from": self.from_address,
            "to": [recipient],
            "subject": subject,
            "html": html,
        }
        try:
            future = self._executor.submit(resend.Emails.send, params)
            future.result(timeout=self.timeout)
        except FutureTimeoutError:
            future.cancel()
            logger.error(f"Email to {recipient} timed out after {self.timeout}s")
            raise NotificationError("Email provider timed out", NotifyErrorKind.TIMEOUT)
        except ResendError as e:
            logger.error(f"Email provider rejected message to {recipient}: {e}")
            raise NotificationError("Failed to send email") from e
        except Exception as e:
            logger.error(f"Unexpected error sending email to {recipient}: {e}")
            raise NotificationError("Failed to send email") from e

        logger.info(f"Email sent successfully to {recipient}")

    def close(self) -> None:
        self._executor.shutdown(wait=False)
