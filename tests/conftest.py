"""Shared fixtures for the card builder tests."""

import pytest

from config.settings import settings
from gchat_cards import add_on_click


@pytest.fixture
def link():
    """Click handler that opens a URL."""
    return add_on_click(url="https://example.com/report")


@pytest.fixture
def action():
    """Click handler that invokes a bot action with parameters."""
    return add_on_click(action_method_name="approve", parameters={"id": "42", "level": "2"})


@pytest.fixture
def no_coalescing(monkeypatch):
    """Switch off merging of adjacent buttons for one test."""
    monkeypatch.setattr(settings, "coalesce_buttons", False)
