"""Pytest configuration and shared fixtures."""

import os

import django
from django.test import Client

import pytest

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "notifier_service.settings_test")
django.setup()


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture
def fake_channel():
    """Provide a ready in-memory channel client."""
    from tests.factories import FakeChannelClient  # noqa: PLC0415

    return FakeChannelClient(ready=True)
