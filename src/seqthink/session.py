"""
Thinking Session State

ThoughtStore: append-only thought history plus a branch index.
ThinkingSession: the store, prompt metadata and tool-usage statistics
for one caller. Every pipeline stage receives the session explicitly.
"""

import copy
import logging
import uuid
from typing import Any, Optional

from seqthink.helpers.progress import PHASES

logger = logging.getLogger(__name__)


# =============================================================================
# Thought Store
# =============================================================================

class ThoughtStore:
    """
    Ordered, append-only collection of enriched thought records.

    The store keeps its own copy of every record; `get` hands out copies,
    so nothing outside the store can change stored state. Revisions are
    new records pointing at the revised thought via `revises_thought`.
    """

    def __init__(self):
        self._records: list[dict[str, Any]] = []
        self._branches: dict[str, list[dict[str, Any]]] = {}
        self._by_number: dict[int, dict[str, Any]] = {}
        self._max_total_thoughts = 0

    def __len__(self) -> int:
        return len(self._records)

    def append(self, record: dict[str, Any]) -> None:
        """Store a record and index it by number and branch."""
        stored = copy.deepcopy(record)
        self._records.append(stored)
        # Last write for a number wins
        self._by_number[stored["thought_number"]] = stored
        self._max_total_thoughts = max(
            self._max_total_thoughts, stored["total_thoughts"], stored["thought_number"]
        )

        branch_id = stored.get("branch_id")
        if branch_id:
            self._branches.setdefault(branch_id, []).append(stored)

    @property
    def records(self) -> list[dict[str, Any]]:
        """Stored records, oldest first. Callers must treat them as read-only."""
        return list(self._records)

    @property
    def max_total_thoughts(self) -> int:
        """Running maximum of the adjusted totals seen this session."""
        return self._max_total_thoughts

    def get(self, thought_number: int) -> Optional[dict[str, Any]]:
        """Copy of the latest record stored under a thought number."""
        record = self._by_number.get(thought_number)
        return copy.deepcopy(record) if record is not None else None

    def revisions_of(self, thought_number: int) -> list[int]:
        """Thought numbers of records that revise the given thought."""
        return [
            r["thought_number"] for r in self._records
            if r.get("is_revision") and r.get("revises_thought") == thought_number
        ]

    def branch_ids(self) -> list[str]:
        """Branch ids in order of first appearance."""
        return list(self._branches)

    def branch(self, branch_id: str) -> list[dict[str, Any]]:
        """Records in a branch, in append order."""
        return list(self._branches.get(branch_id, []))

    def recent(self, count: int) -> list[dict[str, Any]]:
        return self._records[-count:] if count > 0 else []


# =============================================================================
# Session Context
# =============================================================================

class ThinkingSession:
    """All mutable state for one thinking session."""

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or str(uuid.uuid4())
        self.store = ThoughtStore()
        self.prompt_metadata: Optional[dict[str, Any]] = None
        self.tool_usage_stats: dict[str, dict[str, Any]] = {}

    @property
    def has_prompt_context(self) -> bool:
        return self.prompt_metadata is not None

    def set_prompt_metadata(self, metadata: dict[str, Any]) -> None:
        """Install prompt metadata built from a first thought."""
        self.prompt_metadata = copy.deepcopy(metadata)
        logger.info(
            f"Prompt context initialized: goals={len(metadata.get('goals', []))}, "
            f"domains={metadata.get('domains', [])}, task_type={metadata.get('task_type')}, "
            f"complexity={metadata.get('complexity')}"
        )

    def track_tool_usage(self, record: dict[str, Any]) -> None:
        """Count each tool named in a committed record."""
        phase = record.get("phase")
        for tool in record.get("tools_used") or []:
            stats = self.tool_usage_stats.setdefault(tool, {
                "usage_count": 0,
                "thoughts_used_in": [],
                "phase_usage": {p: 0 for p in PHASES},
            })
            stats["usage_count"] += 1
            stats["thoughts_used_in"].append(record["thought_number"])
            if phase:
                stats["phase_usage"][phase] = stats["phase_usage"].get(phase, 0) + 1

    def commit(self, record: dict[str, Any], prompt_metadata: Optional[dict[str, Any]] = None) -> None:
        """
        Apply a fully enriched record to the session.

        Prompt metadata staged from a first thought is installed in the
        same step, so a failed submission leaves no trace.
        """
        if prompt_metadata is not None:
            self.set_prompt_metadata(prompt_metadata)
        self.store.append(record)
        self.track_tool_usage(record)
