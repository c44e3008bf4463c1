"""
Phase & Progress Helpers

Four ordered phases: Planning -> Analysis -> Execution -> Verification.
Movement between them is driven by position in the declared total
(thought_number / total_thoughts). Suggestions are advisory: the
caller's declared phase is never overwritten.

All functions are pure; history and prompt metadata are passed in.
"""

import math
from typing import Any, Optional

from seqthink.utils import round_half_up


# =============================================================================
# Phase Tables
# =============================================================================

PHASES = ("Planning", "Analysis", "Execution", "Verification")

DEFAULT_PHASE = "Execution"
FIRST_THOUGHT_PHASE = "Planning"

# Weight of the latest phase in the overall progress blend
PHASE_WEIGHTS = {
    "Planning": 0.1,
    "Analysis": 0.3,
    "Execution": 0.5,
    "Verification": 0.9,
}

# phase -> (progress ratio that must be exceeded, suggested next phase)
PHASE_TRANSITIONS = {
    "Planning": (0.2, "Analysis"),
    "Analysis": (0.4, "Execution"),
    "Execution": (0.8, "Verification"),
    "Verification": (None, "Verification"),
}

VERIFICATION_SUGGESTION_RATIO = 0.75


# =============================================================================
# Progress Tables
# =============================================================================

PROGRESS_WEIGHTS = {
    "thoughts": 0.3,
    "alignment": 0.3,
    "coverage": 0.3,
    "phase": 0.1,
}

# Mean alignment assumed before any thought has been scored
DEFAULT_MEAN_ALIGNMENT = 5

# Thoughts relevant to a goal needed for full coverage
EXPECTED_THOUGHTS_BY_COMPLEXITY = {"simple": 3, "medium": 5, "complex": 8}

# Remaining-thought estimate used while progress is too low to project
FALLBACK_REMAINING_BY_COMPLEXITY = {"simple": 5, "medium": 8, "complex": 12}
MIN_PROJECTABLE_PROGRESS = 10

GOAL_RELEVANCE_THRESHOLD = 0.5

TREND_WINDOW = 5
TREND_MIN_POINTS = 3
TREND_DELTA = 1

LOW_ALIGNMENT_THRESHOLD = 5
MAX_GUIDANCE_ITEMS = 2

GUIDANCE_VERIFY = "Consider transitioning to the Verification phase to validate your solution"
GUIDANCE_LOW_ALIGNMENT = (
    "This thought has low alignment with the original prompt. "
    "Consider revising to better address the prompt's goals"
)


# =============================================================================
# Phase Inference
# =============================================================================

def default_phase(thought_number: int) -> str:
    """Phase assumed when the caller does not declare one."""
    return FIRST_THOUGHT_PHASE if thought_number == 1 else DEFAULT_PHASE


def progress_ratio(thought_number: int, total_thoughts: int) -> float:
    """Position of a thought within the declared total."""
    return thought_number / max(1, total_thoughts)


def format_progress(thought_number: int, total_thoughts: int) -> str:
    """Percentage string reported back to the caller, e.g. '20%'."""
    return f"{round_half_up(progress_ratio(thought_number, total_thoughts) * 100)}%"


def suggest_next_phase(phase: Optional[str], thought_number: int, total_thoughts: int) -> str:
    """
    Suggest the phase the next thought should be in.

    Returns the current phase when no transition is due.
    """
    current = phase or DEFAULT_PHASE
    if current not in PHASE_TRANSITIONS:
        return current
    threshold, next_phase = PHASE_TRANSITIONS[current]
    if threshold is not None and progress_ratio(thought_number, total_thoughts) > threshold:
        return next_phase
    return current


def should_suggest_verification(phase: Optional[str], thought_number: int, total_thoughts: int) -> bool:
    """Late in the sequence and not yet verifying."""
    return (
        progress_ratio(thought_number, total_thoughts) > VERIFICATION_SUGGESTION_RATIO
        and phase != "Verification"
    )


# =============================================================================
# Session Metrics
# =============================================================================

def latest_thought(records: list[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """Record with the highest thought number (earliest wins ties)."""
    if not records:
        return None
    return max(records, key=lambda r: r["thought_number"])


def calculate_goal_coverage(
    records: list[dict[str, Any]],
    metadata: Optional[dict[str, Any]]
) -> dict[str, int]:
    """
    Coverage percentage per prompt goal.

    A goal is covered by thoughts whose relevance to it exceeds 0.5;
    full coverage needs as many such thoughts as the prompt's
    complexity expects.
    """
    if not metadata:
        return {}

    expected = EXPECTED_THOUGHTS_BY_COMPLEXITY.get(metadata.get("complexity"), EXPECTED_THOUGHTS_BY_COMPLEXITY["complex"])
    coverage = {}
    for index, _ in enumerate(metadata.get("goals", [])):
        key = f"goal_{index}"
        relevant = sum(
            1 for r in records
            if (r.get("prompt_relevance") or {}).get(key, 0) > GOAL_RELEVANCE_THRESHOLD
        )
        coverage[key] = min(100, round_half_up(relevant / expected * 100))
    return coverage


def calculate_alignment_trend(records: list[dict[str, Any]]) -> str:
    """Improving / Declining / Stable over the most recent aligned thoughts."""
    aligned = sorted(
        (r for r in records if r.get("prompt_alignment") is not None),
        key=lambda r: r["thought_number"]
    )
    if len(aligned) < TREND_MIN_POINTS:
        return "Insufficient data"

    recent = aligned[-TREND_WINDOW:]
    difference = recent[-1]["prompt_alignment"] - recent[0]["prompt_alignment"]
    if difference > TREND_DELTA:
        return "Improving"
    elif difference < -TREND_DELTA:
        return "Declining"
    return "Stable"


def calculate_overall_progress(
    records: list[dict[str, Any]],
    metadata: Optional[dict[str, Any]]
) -> int:
    """
    Blend thought position, alignment, goal coverage and phase into 0-100.

    Returns 0 until prompt metadata and at least one thought exist.
    """
    latest = latest_thought(records)
    if not metadata or latest is None:
        return 0

    thought_progress = min(100, progress_ratio(latest["thought_number"], latest["total_thoughts"]) * 100)

    scores = [r["prompt_alignment"] for r in records if r.get("prompt_alignment") is not None]
    mean_alignment = sum(scores) / len(scores) if scores else DEFAULT_MEAN_ALIGNMENT

    coverage = calculate_goal_coverage(records, metadata)
    mean_coverage = sum(coverage.values()) / max(1, len(coverage))

    phase_progress = PHASE_WEIGHTS.get(latest.get("phase") or DEFAULT_PHASE, PHASE_WEIGHTS[DEFAULT_PHASE]) * 100

    weighted = (
        thought_progress * PROGRESS_WEIGHTS["thoughts"]
        + mean_alignment * 10 * PROGRESS_WEIGHTS["alignment"]
        + mean_coverage * PROGRESS_WEIGHTS["coverage"]
        + phase_progress * PROGRESS_WEIGHTS["phase"]
    )
    return round_half_up(weighted)


def estimate_remaining_thoughts(
    records: list[dict[str, Any]],
    metadata: Optional[dict[str, Any]]
) -> int:
    """
    Project how many more thoughts the session needs.

    Below 10% overall progress there is too little signal, so a fixed
    estimate by prompt complexity is returned instead.
    """
    latest = latest_thought(records)
    if not metadata or latest is None:
        return 0

    progress = calculate_overall_progress(records, metadata)
    if progress < MIN_PROJECTABLE_PROGRESS:
        return FALLBACK_REMAINING_BY_COMPLEXITY.get(
            metadata.get("complexity"), FALLBACK_REMAINING_BY_COMPLEXITY["complex"]
        )

    current = latest["thought_number"]
    estimated_total = math.ceil(current * 100 / max(1, progress))
    return max(0, estimated_total - current)


def estimate_complexity(records: list[dict[str, Any]], branch_count: int) -> str:
    """Complexity guess from the shape of the history."""
    thought_count = len(records)
    revision_count = sum(1 for r in records if r.get("is_revision"))

    if thought_count > 10 or branch_count > 2:
        return "complex"
    elif thought_count > 5 or revision_count > 1 or branch_count > 0:
        return "medium"
    return "simple"


# =============================================================================
# Strategic Guidance
# =============================================================================

def provide_strategic_guidance(
    record: dict[str, Any],
    recommendations: Optional[dict[str, Any]] = None,
    low_alignment_threshold: int = LOW_ALIGNMENT_THRESHOLD,
    max_items: int = MAX_GUIDANCE_ITEMS
) -> list[str]:
    """
    Advisory guidance for the next thought, highest priority first.

    Order: phase transition, low alignment, top strategy, top
    reasoning type. Capped at max_items.
    """
    guidance: list[str] = []
    phase = record.get("phase")
    number, total = record["thought_number"], record["total_thoughts"]

    if should_suggest_verification(phase, number, total):
        guidance.append(GUIDANCE_VERIFY)
    else:
        next_phase = suggest_next_phase(phase, number, total)
        if phase and next_phase != phase:
            guidance.append(f"Consider moving from {phase} to the {next_phase} phase")

    alignment = record.get("prompt_alignment")
    if alignment is not None and alignment < low_alignment_threshold:
        guidance.append(GUIDANCE_LOW_ALIGNMENT)

    if recommendations:
        strategies = recommendations.get("strategies") or []
        if strategies:
            top = strategies[0]
            guidance.append(f'Try using the "{top["strategy_name"]}" strategy: {top["description"]}')

        reasoning_types = recommendations.get("reasoning_types") or []
        if reasoning_types:
            top = reasoning_types[0]
            guidance.append(f"Consider using {top['reasoning_type']} reasoning: {top['description']}")

    return guidance[:max_items]
