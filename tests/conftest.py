"""Shared pytest fixtures for the watch history tests."""

from datetime import datetime

import pytest

from history_store import HistoryStore, SAMPLE_HISTORY
from models import WatchRecord
from settings import Settings


def titled_entry(title, channel, stamp="Jan 29, 2025, 8:00:26 AM EST"):
    """One titled entry as it appears when copied from watch-history.html."""
    return (
        "**YouTube**\n"
        f"Watched **{title}** **{channel}** {stamp}\n"
        "**Products:**  YouTube **Why is this here?**  This activity was saved to your Google Account.\n"
    )


def url_entry(url, stamp="Jan 29, 2025, 8:00:26 AM EST"):
    return (
        "**YouTube**\n"
        f"Watched {url}\n"
        f"{stamp}\n"
        "**Products:**  YouTube\n"
    )


def record(title="Title", channel="Channel", instant=None, **kwargs):
    return WatchRecord(
        title=title,
        channel=channel,
        instant=instant or datetime(2025, 1, 29, 8, 0, 26),
        **kwargs,
    )


@pytest.fixture
def sample_text():
    return SAMPLE_HISTORY


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def store(settings):
    """Empty HistoryStore with default settings."""
    return HistoryStore(settings)


@pytest.fixture
def sample_store(store):
    """HistoryStore that has parsed the built-in sample history."""
    store.load_sample()
    assert store.parse()
    return store
