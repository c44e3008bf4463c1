"""
Sequential Thinking Test Configuration - Shared Fixtures

Provides fresh thinking sessions and payload builders for tests.
The server's process-wide session is reset around every test.
"""
import copy

import pytest

from seqthink.session import ThinkingSession
from seqthink.settings import DEFAULT_CONFIG


@pytest.fixture(autouse=True)
def fresh_server_session():
    """Give every test an empty server-side history."""
    from seqthink.server import reset_session
    reset_session()
    yield
    reset_session()


@pytest.fixture
def session():
    """A standalone thinking session, not shared with the server."""
    return ThinkingSession(session_id="test-session")


@pytest.fixture
def config():
    """A private copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def make_payload():
    """Build a valid tool payload, overriding any field."""
    def _make(thought_number: int = 1, total_thoughts: int = 5, **overrides):
        payload = {
            "thought": f"Thought number {thought_number} about the problem",
            "thoughtNumber": thought_number,
            "totalThoughts": total_thoughts,
            "nextThoughtNeeded": True,
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def make_record():
    """Build an internal (snake_case) record for helper tests."""
    def _make(thought_number: int = 1, thought: str = "A thought", **overrides):
        record = {
            "thought": thought,
            "thought_number": thought_number,
            "total_thoughts": max(5, thought_number),
            "next_thought_needed": True,
            "is_revision": False,
            "revises_thought": None,
            "branch_from_thought": None,
            "branch_id": None,
            "needs_more_thoughts": None,
            "phase": None,
            "dependencies": [],
            "tools_used": [],
            "complexity": None,
            "status": None,
        }
        record.update(overrides)
        return record
    return _make
