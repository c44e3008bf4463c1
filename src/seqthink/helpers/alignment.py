"""
Prompt Alignment Helpers

Lexical-overlap scoring of how well a thought serves the prompt it
belongs to. Produces a 0-10 alignment score, a per-goal relevance map
and an optional drift warning.
"""

from typing import Any, Optional

from seqthink.helpers.prompt import domain_terms
from seqthink.utils import content_terms, round_half_up, truncate_text


# =============================================================================
# Constants
# =============================================================================

# Component weights; components without inputs are dropped and the
# remaining weights renormalised
ALIGNMENT_WEIGHTS = {
    "goals": 0.5,
    "keywords": 0.2,
    "domains": 0.2,
    "constraints": 0.1,
}

MAX_ALIGNMENT = 10

# Score used when the metadata gives nothing to compare against
NEUTRAL_ALIGNMENT = 5

# Alignment below this attaches a drift warning
DRIFT_THRESHOLD = 4

RELEVANCE_PRECISION = 2


# =============================================================================
# Overlap Measures
# =============================================================================

def term_overlap(reference: str, thought_terms: set[str]) -> float:
    """Fraction of the reference text's content terms found in the thought."""
    reference_terms = content_terms(reference)
    if not reference_terms:
        return 0.0
    return len(reference_terms & thought_terms) / len(reference_terms)


def compute_goal_relevance(goals: list[str], thought_terms: set[str]) -> dict[str, float]:
    """Map goal_<i> to the lexical overlap between goal i and the thought."""
    return {
        f"goal_{index}": round(term_overlap(goal, thought_terms), RELEVANCE_PRECISION)
        for index, goal in enumerate(goals)
    }


def _hit_rate(groups: list[set[str]], thought_terms: set[str]) -> Optional[float]:
    """Fraction of term groups with at least one term in the thought."""
    if not groups:
        return None
    hits = sum(1 for group in groups if group & thought_terms)
    return hits / len(groups)


def _blend(components: dict[str, Optional[float]]) -> Optional[float]:
    present = {name: value for name, value in components.items() if value is not None}
    if not present:
        return None
    total_weight = sum(ALIGNMENT_WEIGHTS[name] for name in present)
    return sum(ALIGNMENT_WEIGHTS[name] * value for name, value in present.items()) / total_weight


# =============================================================================
# Alignment
# =============================================================================

def analyze_thought_alignment(
    thought: str,
    metadata: dict[str, Any],
    drift_threshold: int = DRIFT_THRESHOLD
) -> dict[str, Any]:
    """
    Score a thought against prompt metadata.

    Args:
        thought: Thought text
        metadata: Prompt metadata (goals, constraints, domains, keywords)
        drift_threshold: Alignment below this produces a drift warning

    Returns:
        Dict with prompt_alignment (int 0-10), prompt_relevance
        (goal_<i> -> 0..1) and drift_warning (str or None)
    """
    thought_terms = content_terms(thought)
    goals = metadata.get("goals", [])
    relevance = compute_goal_relevance(goals, thought_terms)

    constraints = metadata.get("constraints", [])
    components = {
        "goals": max(relevance.values()) if relevance else None,
        "keywords": _hit_rate([{kw} for kw in metadata.get("keywords", [])], thought_terms),
        "domains": _hit_rate([domain_terms(d) for d in metadata.get("domains", [])], thought_terms),
        "constraints": (
            sum(term_overlap(c, thought_terms) for c in constraints) / len(constraints)
            if constraints else None
        ),
    }

    blended = _blend(components)
    if blended is None:
        alignment = NEUTRAL_ALIGNMENT
    else:
        alignment = max(0, min(MAX_ALIGNMENT, round_half_up(blended * MAX_ALIGNMENT)))

    drift_warning = None
    if alignment < drift_threshold:
        focus = truncate_text(goals[0], 60) if goals else "the original prompt"
        drift_warning = (
            f"Thought is drifting from the original prompt (alignment {alignment}/10). "
            f"Refocus on: {focus}"
        )

    return {
        "prompt_alignment": alignment,
        "prompt_relevance": relevance,
        "drift_warning": drift_warning,
    }
