import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EXPIRATION_SCAN_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from wetreck.database import Base, get_db
from wetreck.dependencies import get_admin_email, get_email_sender, get_payment_service
from wetreck.exceptions import NotificationError, NotifyErrorKind
from wetreck.main import app
from wetreck.notifications.sender import BaseSender
from wetreck.payments.service import PaymentService

ADMIN_EMAIL = "admin@wetreck.test"
PAYMENT_SECRET = "test_secret"


class RecordingSender(BaseSender):
    """Keeps every message instead of sending it"""

    def __init__(self):
        self.sent = []
        self.attempts = []
        self.failing = set()
        self.fail_all = False

    def send(self, recipient, subject, html):
        self.attempts.append(recipient)
        if self.fail_all or recipient in self.failing:
            raise NotificationError("Failed to send email", NotifyErrorKind.PROVIDER)
        self.sent.append({"to": recipient, "subject": subject, "html": html})

    def recipients(self):
        return [message["to"] for message in self.sent]


class FakeOrders:
    def __init__(self):
        self.created = []
        self.error = None

    def create(self, data):
        if self.error:
            raise self.error
        self.created.append(data)
        return {"id": "order_test_1", "entity": "order", **data}


class FakeRazorpayClient:
    def __init__(self):
        self.order = FakeOrders()


def _sqlite_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def engine():
    engine = _sqlite_engine()
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def email_sender():
    return RecordingSender()


@pytest.fixture
def razorpay_client():
    return FakeRazorpayClient()


@pytest.fixture
def payment_service(razorpay_client):
    return PaymentService("rzp_test_key", PAYMENT_SECRET, client=razorpay_client)


def _override(session_factory, email_sender, payment_service):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_admin_email] = lambda: ADMIN_EMAIL
    app.dependency_overrides[get_payment_service] = lambda: payment_service


@pytest.fixture
def client(session_factory, email_sender, payment_service):
    _override(session_factory, email_sender, payment_service)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client(email_sender, payment_service):
    """Client whose store has no tables, so every write fails"""
    engine = _sqlite_engine()
    _override(sessionmaker(bind=engine), email_sender, payment_service)
    yield TestClient(app)
    app.dependency_overrides.clear()
    engine.dispose()
