"""
Dependency Graph Helpers

Explicit dependencies come from the caller. Implicit ones are inferred
from keyword overlap with earlier thoughts and kept apart in
`inferred_dependencies`, so a reader can always tell the two apart.
"""

import logging
from typing import Any

from seqthink.helpers.keywords import shared_keywords

logger = logging.getLogger(__name__)


# Shared keywords needed to infer a dependency on an earlier thought
SEMANTIC_OVERLAP_THRESHOLD = 2


def all_dependencies(record: dict[str, Any]) -> list[int]:
    """Declared dependencies followed by inferred ones."""
    combined = list(record.get("dependencies") or [])
    for dep in record.get("inferred_dependencies") or []:
        if dep not in combined:
            combined.append(dep)
    return combined


def infer_semantic_dependencies(
    record: dict[str, Any],
    history: list[dict[str, Any]],
    min_overlap: int = SEMANTIC_OVERLAP_THRESHOLD
) -> list[int]:
    """
    Find earlier thoughts that share enough keywords with a new one.

    Args:
        record: New record; needs keywords, thought_number, dependencies
        history: Stored records, oldest first
        min_overlap: Shared keywords required for a connection

    Returns:
        Thought numbers to record as inferred dependencies, in history
        order, excluding declared dependencies and the thought itself
    """
    keywords = record.get("keywords") or []
    declared = set(record.get("dependencies") or [])
    connections: list[int] = []

    for prior in history:
        number = prior["thought_number"]
        if number == record["thought_number"] or number in declared or number in connections:
            continue
        if len(shared_keywords(prior.get("keywords") or [], keywords)) >= min_overlap:
            connections.append(number)

    if connections:
        logger.info(f"Detected semantic connections with thoughts: {', '.join(map(str, connections))}")

    return connections


def build_dependency_graph(records: list[dict[str, Any]]) -> dict[int, list[int]]:
    """
    Build the adjacency list dependency -> dependents.

    Args:
        records: Stored records, oldest first

    Returns:
        Dict mapping each depended-on thought number to the thought
        numbers that depend on it, in append order
    """
    adjacency: dict[int, list[int]] = {}
    for record in records:
        for dep in all_dependencies(record):
            dependents = adjacency.setdefault(dep, [])
            if record["thought_number"] not in dependents:
                dependents.append(record["thought_number"])
    return adjacency


def find_root_thoughts(records: list[dict[str, Any]]) -> list[int]:
    """Thought numbers with no dependencies at all."""
    roots = []
    for record in records:
        if not all_dependencies(record) and record["thought_number"] not in roots:
            roots.append(record["thought_number"])
    return roots
