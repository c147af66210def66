"""Shared fixtures for waitlist endpoint tests.

Provides:
- FastAPI TestClient wired to a FakeNotifier instead of EmailJS
- A second client whose notifier always fails
"""

import pytest
from fastapi.testclient import TestClient

from src.main import create_app


@pytest.fixture()
def client(test_settings, notifier):
    app = create_app(test_settings, notifier=notifier)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def failing_client(test_settings, failing_notifier):
    app = create_app(test_settings, notifier=failing_notifier)
    with TestClient(app) as test_client:
        yield test_client
