# tests/conftest.py
"""
Pytest Configuration and Fixtures

Shared fixtures for EduLMS tests.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from edulms.app import create_app
from edulms.helpers.auth import _registry
from edulms.services.workspace import Workspace


# =============================================================================
# Clock
# =============================================================================

class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start):
        self.current = start

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


@pytest.fixture
def start_time():
    return datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(start_time):
    """Controllable clock injected as app.config["CLOCK"]."""
    return FakeClock(start_time)


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app(clock):
    """Flask app built with the testing config."""
    app = create_app("testing", CLOCK=clock)
    yield app


@pytest.fixture
def client(app):
    """Signed-out test client."""
    return app.test_client()


def login(client, email, password="password123", **kwargs):
    return client.post("/login", data={"email": email, "password": password}, **kwargs)


@pytest.fixture
def admin_client(app):
    c = app.test_client()
    login(c, "admin@lms.com")
    return c


@pytest.fixture
def tutor_client(app):
    c = app.test_client()
    login(c, "tutor1@lms.com")
    return c


@pytest.fixture
def student_client(app):
    c = app.test_client()
    login(c, "student1@lms.com")
    return c


def workspace_for(app, client):
    """The workspace bound to a test client's session (seeded on first use)."""
    with client.session_transaction() as sess:
        ws_id = sess.setdefault("lms_ws", uuid.uuid4().hex)
    with app.app_context():
        return _registry().get_or_create(ws_id)


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def ws():
    """Fresh workspace seeded from demo data."""
    return Workspace("test")


@pytest.fixture
def workspace_of(app):
    """workspace_of(client) → that client's Workspace."""
    return lambda c: workspace_for(app, c)


@pytest.fixture
def sign_in_as():
    """sign_in_as(client, email, password=...) → login response."""
    return login
