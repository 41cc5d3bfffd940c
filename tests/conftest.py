"""Shared fixtures: scripted completion service, pinned clock, builtin registry."""
from datetime import datetime
from typing import List
from unittest.mock import AsyncMock

import pytest

from single_agent.session import Session
from single_agent.tools import ToolExecutor, build_registry


class ScriptedCompletion:
    """Completion client returning canned replies in order and recording requests."""

    def __init__(self, *replies):
        self.replies: List = list(replies)
        self.requests: List[dict] = []

    async def complete(self, messages, *, json_mode=False):
        self.requests.append({"messages": messages, "json_mode": json_mode})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


FIXED_NOW = datetime(2026, 10, 18, 14, 30, 5)  # a Sunday


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def joke_fetcher():
    fetcher = AsyncMock()
    fetcher.fetch_joke = AsyncMock(return_value="I told a chemistry joke. There was no reaction.")
    return fetcher


@pytest.fixture
def mock_session(joke_fetcher):
    return Session(joke_fetcher=joke_fetcher, clock=lambda: FIXED_NOW)


@pytest.fixture
def executor(registry, mock_session):
    return ToolExecutor(registry, mock_session)


@pytest.fixture
def scripted():
    """Factory: scripted("first reply", "second reply", ...)."""
    return ScriptedCompletion
