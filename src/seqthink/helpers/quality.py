"""
Thought Quality Helpers

Hand-tuned coherence/depth/relevance scoring from structural features
of a thought. Feedback strings are advisory and never affect control flow.
"""

from typing import Any

from seqthink.utils import round_half_up, word_count


# =============================================================================
# Constants
# =============================================================================

BASE_SUBSCORE = 5

# Coherence
MAX_COHERENCE = 8
DISCONNECTED_COHERENCE = 3

# Depth (word count)
SHALLOW_WORD_COUNT = 30
DEEP_WORD_COUNT = 100
SHALLOW_DEPTH = 3
DEEP_DEPTH = 8

# Relevance
PLANNING_OVERRUN_AFTER = 3
PLANNING_OVERRUN_RELEVANCE = 4

# Insight value
INSIGHT_WEIGHTS = {"depth": 0.4, "coherence": 0.3, "relevance": 0.3}
CONNECTED_INSIGHT_BONUS = 1.2

FEEDBACK_DISCONNECTED = "Consider how this thought connects to previous thinking"
FEEDBACK_SHALLOW = "This thought could be explored in more depth"
FEEDBACK_PLANNING_OVERRUN = "Consider moving from planning to execution"


# =============================================================================
# Sub-scores
# =============================================================================

def score_coherence(dependency_count: int, thought_number: int) -> tuple[int, str | None]:
    """Coherence rises with explicit connections to earlier thoughts."""
    if dependency_count > 0:
        return min(MAX_COHERENCE, BASE_SUBSCORE + dependency_count), None
    if thought_number > 1:
        return DISCONNECTED_COHERENCE, FEEDBACK_DISCONNECTED
    return BASE_SUBSCORE, None


def score_depth(words: int) -> tuple[int, str | None]:
    """Depth keyed to word count."""
    if words < SHALLOW_WORD_COUNT:
        return SHALLOW_DEPTH, FEEDBACK_SHALLOW
    if words > DEEP_WORD_COUNT:
        return DEEP_DEPTH, None
    return BASE_SUBSCORE, None


def score_relevance(phase: str | None, thought_number: int) -> tuple[int, str | None]:
    """Planning that runs past the first few thoughts loses relevance."""
    if phase == "Planning" and thought_number > PLANNING_OVERRUN_AFTER:
        return PLANNING_OVERRUN_RELEVANCE, FEEDBACK_PLANNING_OVERRUN
    return BASE_SUBSCORE, None


# =============================================================================
# Assessment
# =============================================================================

def assess_thought_quality(
    record: dict[str, Any],
    dependencies: list[int]
) -> tuple[dict[str, Any], int]:
    """
    Assess a thought's quality and insight value.

    Args:
        record: Thought record (needs thought, thought_number, phase)
        dependencies: Dependencies the caller declared for the thought

    Returns:
        Tuple of (quality dict, insight_value). The quality dict holds
        coherence, depth, relevance, quality_score and feedback.
    """
    thought_number = record["thought_number"]
    coherence, coherence_note = score_coherence(len(dependencies), thought_number)
    depth, depth_note = score_depth(word_count(record["thought"]))
    relevance, relevance_note = score_relevance(record.get("phase"), thought_number)

    feedback = [note for note in (coherence_note, depth_note, relevance_note) if note]

    quality = {
        "coherence": coherence,
        "depth": depth,
        "relevance": relevance,
        "quality_score": round_half_up((coherence + depth + relevance) / 3),
        "feedback": feedback,
    }

    weighted = (
        depth * INSIGHT_WEIGHTS["depth"]
        + coherence * INSIGHT_WEIGHTS["coherence"]
        + relevance * INSIGHT_WEIGHTS["relevance"]
    )
    bonus = CONNECTED_INSIGHT_BONUS if dependencies else 1
    insight_value = round_half_up(weighted * bonus)

    return quality, insight_value
