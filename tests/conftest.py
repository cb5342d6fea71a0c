"""Pytest configuration and shared fixtures."""

import pytest

from resp_mapper import Client, MockSender, create_test_client


@pytest.fixture(scope="module")
def anyio_backend():
    """Configure anyio to use asyncio backend."""
    return "asyncio"


@pytest.fixture
def sender() -> MockSender:
    """Fresh mock sender with no canned replies."""
    return MockSender()


@pytest.fixture
def client(sender: MockSender) -> Client:
    """Client bound to the mock sender fixture."""
    return create_test_client(sender)
