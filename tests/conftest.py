"""Shared fixtures for waitlist tests.

Provides:
- FakeNotifier instances that record calls (one of them always fails)
- Settings built without reading a .env file
"""

import pytest

from src.config.settings import Settings
from tests.fakes import FakeNotifier


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def failing_notifier() -> FakeNotifier:
    return FakeNotifier(fail=True)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        EMAILJS_PUBLIC_KEY="public_test_key",
        EMAILJS_SERVICE_ID="service_test",
        EMAILJS_TEMPLATE_ID="template_test",
        SESSION_SECRET_KEY="test-secret",
    )
