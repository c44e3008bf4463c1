"""
Thinking Recommendation Helpers

Table-driven hints on how to approach the next thought:
- strategies keyed by phase
- reasoning types keyed by the prompt's task type
- focus areas: the prompt goals with the least coverage so far
"""

from typing import Any, Optional

from seqthink.utils import truncate_text


# Every phase has an entry; order within a list is priority order
PHASE_STRATEGIES: dict[str, list[dict[str, str]]] = {
    "Planning": [
        {
            "strategy_name": "Problem Decomposition",
            "description": "Break the problem into independent sub-problems and order them by dependency"
        },
        {
            "strategy_name": "Constraint Listing",
            "description": "Write down every stated and implied constraint before choosing an approach"
        },
    ],
    "Analysis": [
        {
            "strategy_name": "Assumption Surfacing",
            "description": "State what must be true for the current approach to work and check each point"
        },
        {
            "strategy_name": "Alternative Comparison",
            "description": "Compare at least two candidate approaches on cost, risk and fit"
        },
    ],
    "Execution": [
        {
            "strategy_name": "Incremental Build",
            "description": "Carry out one small step at a time and confirm it before moving on"
        },
        {
            "strategy_name": "Worked Example",
            "description": "Run the approach by hand on a small concrete input"
        },
    ],
    "Verification": [
        {
            "strategy_name": "Edge Case Review",
            "description": "Test the result against empty, extreme and malformed inputs"
        },
        {
            "strategy_name": "Goal Traceback",
            "description": "Map each part of the result back to a goal in the original prompt"
        },
    ],
}

TASK_REASONING_TYPES: dict[str, list[dict[str, str]]] = {
    "debugging": [
        {"reasoning_type": "abductive", "description": "infer the most likely cause that explains all observed symptoms"},
    ],
    "design": [
        {"reasoning_type": "analogical", "description": "borrow structure from a known solution to a similar problem"},
    ],
    "analysis": [
        {"reasoning_type": "inductive", "description": "generalise carefully from the concrete cases you have examined"},
    ],
    "implementation": [
        {"reasoning_type": "deductive", "description": "derive each step from the requirements and prior steps"},
    ],
    "optimization": [
        {"reasoning_type": "quantitative", "description": "measure before and after, and reason from the numbers"},
    ],
    "explanation": [
        {"reasoning_type": "causal", "description": "trace each effect back to the mechanism that produces it"},
    ],
    "general": [
        {"reasoning_type": "deductive", "description": "move from what is known to what must follow"},
    ],
}

MAX_FOCUS_AREAS = 3


def rank_focus_areas(
    goals: list[str],
    goal_coverage: Optional[dict[str, int]] = None
) -> list[dict[str, Any]]:
    """Order goals by ascending coverage, least covered first."""
    goal_coverage = goal_coverage or {}
    areas = [
        {
            "area": f"goal_{index}",
            "description": truncate_text(goal, 80),
            "coverage": goal_coverage.get(f"goal_{index}", 0),
        }
        for index, goal in enumerate(goals)
    ]
    areas.sort(key=lambda a: a["coverage"])
    return areas[:MAX_FOCUS_AREAS]


def generate_recommendations(
    metadata: dict[str, Any],
    phase: Optional[str],
    goal_coverage: Optional[dict[str, int]] = None
) -> dict[str, list[dict[str, Any]]]:
    """
    Build recommendations for the next thought.

    Args:
        metadata: Prompt metadata (task_type, goals)
        phase: Phase of the thought just submitted
        goal_coverage: goal_<i> -> coverage percentage before this thought

    Returns:
        Dict with strategies, reasoning_types and focus_areas lists
    """
    strategies = PHASE_STRATEGIES.get(phase or "", PHASE_STRATEGIES["Execution"])
    reasoning_types = TASK_REASONING_TYPES.get(
        metadata.get("task_type", "general"), TASK_REASONING_TYPES["general"]
    )

    return {
        "strategies": [dict(s) for s in strategies],
        "reasoning_types": [dict(r) for r in reasoning_types],
        "focus_areas": rank_focus_areas(metadata.get("goals", []), goal_coverage),
    }


def trim_recommendations(recommendations: dict[str, list[dict[str, Any]]]) -> dict[str, list[dict[str, Any]]]:
    """Keep only the top entry of each list for the tool response."""
    return {
        "strategies": recommendations.get("strategies", [])[:1],
        "reasoningTypes": recommendations.get("reasoning_types", [])[:1],
        "focusAreas": recommendations.get("focus_areas", [])[:1],
    }
