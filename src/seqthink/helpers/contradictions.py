"""
Contradiction Detection Helpers

Naive pairwise comparison of a new thought against stored history.

Two thoughts are only compared when they talk about the same thing
(enough shared content terms). A pair is flagged when exactly one side
is negated, or when the two sides use opposite words of an antonym pair.
Detected contradictions are annotations: they never block ingestion.
"""

import logging
from typing import Any, Optional

from seqthink.utils import content_terms, detect_negation, tokenize

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Shared content terms needed before two thoughts count as comparable
MIN_SHARED_TERMS = 2

# Terms quoted back in a detail string
MAX_TERMS_IN_DETAIL = 3

ANTONYM_PAIRS: list[tuple[str, str]] = [
    ("increase", "decrease"),
    ("increases", "decreases"),
    ("true", "false"),
    ("valid", "invalid"),
    ("correct", "incorrect"),
    ("possible", "impossible"),
    ("always", "never"),
    ("include", "exclude"),
    ("success", "failure"),
    ("succeeds", "fails"),
    ("accept", "reject"),
    ("enable", "disable"),
    ("add", "remove"),
    ("higher", "lower"),
    ("faster", "slower"),
    ("more", "less"),
    ("safe", "unsafe"),
    ("stable", "unstable"),
    ("required", "optional"),
    ("sufficient", "insufficient"),
]


# =============================================================================
# Pair Checks
# =============================================================================

def _opposing_pair(words_a: set[str], words_b: set[str]) -> Optional[tuple[str, str]]:
    """Find an antonym pair split across the two word sets."""
    for left, right in ANTONYM_PAIRS:
        if left in words_a and right in words_b and right not in words_a:
            return left, right
        if right in words_a and left in words_b and left not in words_a:
            return right, left
    return None


def compare_thoughts(new_text: str, prior_text: str) -> Optional[str]:
    """
    Compare two thought texts for a likely logical conflict.

    Args:
        new_text: Text of the incoming thought
        prior_text: Text of a stored thought

    Returns:
        Short reason string when the pair looks contradictory, else None
    """
    shared = sorted(content_terms(new_text) & content_terms(prior_text))
    if len(shared) < MIN_SHARED_TERMS:
        return None

    terms = ", ".join(f"'{t}'" for t in shared[:MAX_TERMS_IN_DETAIL])

    new_negated = bool(detect_negation(new_text))
    prior_negated = bool(detect_negation(prior_text))
    if new_negated != prior_negated:
        return f"negation mismatch on shared terms {terms}"

    pair = _opposing_pair(set(tokenize(new_text)), set(tokenize(prior_text)))
    if pair:
        return f"'{pair[0]}' opposes '{pair[1]}' on shared terms {terms}"

    return None


# =============================================================================
# History Scan
# =============================================================================

def check_contradictions(
    record: dict[str, Any],
    history: list[dict[str, Any]]
) -> dict[str, Any]:
    """
    Check a new thought record against every stored record.

    The thought a revision explicitly revises is skipped: disagreeing
    with it is the point of the revision.

    Args:
        record: Validated record about to be stored
        history: Stored records, oldest first

    Returns:
        Dict with has_contradictions (bool) and details (list of str),
        each detail naming the conflicting prior thought number
    """
    revised = record.get("revises_thought") if record.get("is_revision") else None
    details: list[str] = []

    for prior in history:
        if revised is not None and prior["thought_number"] == revised:
            continue

        reason = compare_thoughts(record["thought"], prior["thought"])
        if reason:
            details.append(
                f"Thought {record['thought_number']} may contradict thought "
                f"{prior['thought_number']}: {reason}"
            )

    if details:
        logger.info(f"Potential contradictions detected: {len(details)}")

    return {
        "has_contradictions": bool(details),
        "details": details
    }
