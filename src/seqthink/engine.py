"""
Thinking Engine - per-submission pipeline

validate -> keywords -> contradictions -> prompt alignment ->
recommendations -> inferred dependencies -> quality -> commit ->
progress/guidance -> response

Every derived field is computed from the session state as it was
before the submission. Nothing is committed until every stage has
succeeded, and no exception escapes `process_thought`.
"""

import logging
from typing import Any, Optional

from seqthink.errors import ThinkingError, ProcessingError, ThoughtNotFoundError
from seqthink.session import ThinkingSession
from seqthink.settings import DEFAULT_CONFIG
from seqthink.helpers.validation import validate_thought_data, validate_thought_number
from seqthink.helpers.keywords import extract_keywords
from seqthink.helpers.contradictions import check_contradictions
from seqthink.helpers.prompt import analyze_prompt
from seqthink.helpers.alignment import analyze_thought_alignment
from seqthink.helpers.quality import assess_thought_quality
from seqthink.helpers.graph import (
    all_dependencies,
    build_dependency_graph,
    find_root_thoughts,
    infer_semantic_dependencies,
)
from seqthink.helpers.progress import (
    PHASES,
    calculate_alignment_trend,
    calculate_goal_coverage,
    calculate_overall_progress,
    default_phase,
    estimate_complexity,
    estimate_remaining_thoughts,
    format_progress,
    provide_strategic_guidance,
    suggest_next_phase,
)
from seqthink.helpers.recommendations import generate_recommendations, trim_recommendations
from seqthink.utils import truncate_text

logger = logging.getLogger(__name__)

RECENT_THOUGHTS_IN_SUMMARY = 5


# =============================================================================
# Enrichment
# =============================================================================

def enrich_thought(
    session: ThinkingSession,
    record: dict[str, Any],
    prompt_metadata: Optional[dict[str, Any]],
    config: dict
) -> dict[str, Any]:
    """
    Attach derived fields to a validated record.

    Args:
        session: Session whose stored history the record is compared with
        record: Validated record (modified in place and returned)
        prompt_metadata: Metadata in effect for this thought, if any
        config: Loaded configuration

    Returns:
        The enriched record, ready to commit
    """
    history = session.store.records

    # Auto-adjust the declared total
    if record["thought_number"] > record["total_thoughts"]:
        record["total_thoughts"] = record["thought_number"]

    if not record.get("phase"):
        record["phase"] = default_phase(record["thought_number"])
    elif record["phase"] not in PHASES:
        logger.warning(f"Thought {record['thought_number']} declares unknown phase '{record['phase']}'")

    record["keywords"] = extract_keywords(
        record["thought"], limit=config["thinking"]["keyword_limit"]
    )

    contradictions = check_contradictions(record, history)
    record["contradictions"] = contradictions["details"]

    record["prompt_alignment"] = None
    record["prompt_relevance"] = None
    record["drift_warning"] = None
    record["recommendations"] = None
    if prompt_metadata is not None:
        alignment = analyze_thought_alignment(
            record["thought"],
            prompt_metadata,
            drift_threshold=config["alignment"]["drift_threshold"]
        )
        record.update(alignment)

        if config["recommendations"]["enabled"]:
            record["recommendations"] = generate_recommendations(
                prompt_metadata,
                record["phase"],
                goal_coverage=calculate_goal_coverage(history, prompt_metadata)
            )

    record["inferred_dependencies"] = infer_semantic_dependencies(
        record,
        history,
        min_overlap=config["thinking"]["semantic_overlap_threshold"]
    )

    # Coherence rewards explicit connections only
    quality, insight_value = assess_thought_quality(record, record["dependencies"])
    record["quality"] = quality
    record["insight_value"] = insight_value
    if quality["feedback"]:
        logger.info(f"Thought {record['thought_number']} quality feedback: {'; '.join(quality['feedback'])}")

    return record


# =============================================================================
# Response Formatting
# =============================================================================

def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def format_quality(quality: dict[str, Any]) -> dict[str, Any]:
    return {
        "coherence": quality["coherence"],
        "depth": quality["depth"],
        "relevance": quality["relevance"],
        "qualityScore": quality["quality_score"],
        "feedback": list(quality["feedback"]),
    }


def format_record(record: dict[str, Any]) -> dict[str, Any]:
    """Full wire (camelCase) view of a stored record."""
    return _drop_none({
        "thought": record["thought"],
        "thoughtNumber": record["thought_number"],
        "totalThoughts": record["total_thoughts"],
        "nextThoughtNeeded": record["next_thought_needed"],
        "isRevision": record.get("is_revision"),
        "revisesThought": record.get("revises_thought"),
        "branchFromThought": record.get("branch_from_thought"),
        "branchId": record.get("branch_id"),
        "needsMoreThoughts": record.get("needs_more_thoughts"),
        "phase": record.get("phase"),
        "dependencies": record.get("dependencies"),
        "inferredDependencies": record.get("inferred_dependencies"),
        "toolsUsed": record.get("tools_used"),
        "complexity": record.get("complexity"),
        "status": record.get("status"),
        "keywords": record.get("keywords"),
        "contradictions": record.get("contradictions"),
        "quality": format_quality(record["quality"]) if record.get("quality") else None,
        "insightValue": record.get("insight_value"),
        "promptAlignment": record.get("prompt_alignment"),
        "promptRelevance": record.get("prompt_relevance"),
        "driftWarning": record.get("drift_warning"),
    })


def build_thought_response(
    session: ThinkingSession,
    record: dict[str, Any],
    config: dict
) -> dict[str, Any]:
    """Compact progress summary returned after a successful submission."""
    number, total = record["thought_number"], record["total_thoughts"]
    branches = session.store.branch_ids()

    guidance = provide_strategic_guidance(
        record,
        record.get("recommendations"),
        low_alignment_threshold=config["alignment"]["low_alignment_threshold"],
        max_items=config["guidance"]["max_items"]
    )
    if guidance:
        logger.info(f"Guidance: {' | '.join(guidance)}")

    response = {
        "success": True,
        "thoughtNumber": number,
        "totalThoughts": total,
        "nextThoughtNeeded": record["next_thought_needed"],
        "branches": branches,
        "phase": record["phase"],
        "suggestedNextPhase": suggest_next_phase(record["phase"], number, total),
        "complexity": record.get("complexity") or estimate_complexity(session.store.records, len(branches)),
        "progress": format_progress(number, total),
        "strategicGuidance": guidance,
        "quality": format_quality(record["quality"]),
        "insightValue": record["insight_value"],
        "keywords": record["keywords"],
        "dependencies": all_dependencies(record),
        "contradictions": record["contradictions"],
        "revisesThought": record.get("revises_thought") if record.get("is_revision") else None,
        "promptAlignment": record.get("prompt_alignment"),
        "driftWarning": record.get("drift_warning"),
        "recommendations": (
            trim_recommendations(record["recommendations"]) if record.get("recommendations") else None
        ),
    }
    return _drop_none(response)


# =============================================================================
# Tool Operations
# =============================================================================

def process_thought(
    session: ThinkingSession,
    payload: Any,
    config: Optional[dict] = None
) -> dict[str, Any]:
    """
    Validate, enrich, store and summarise one submitted thought.

    Args:
        session: Session to add the thought to
        payload: Raw tool arguments (camelCase keys)
        config: Loaded configuration (defaults when omitted)

    Returns:
        Success response dict, or a failure dict with status "failed"
    """
    config = config or DEFAULT_CONFIG
    try:
        record = validate_thought_data(payload)

        # Thought 1 starts a prompt context; staged until commit
        staged_metadata = None
        if record["thought_number"] == 1:
            staged_metadata = analyze_prompt(record["thought"])
        prompt_metadata = staged_metadata if staged_metadata is not None else session.prompt_metadata

        record = enrich_thought(session, record, prompt_metadata, config)
        session.commit(record, prompt_metadata=staged_metadata)

        logger.info(
            f"Stored thought {record['thought_number']}/{record['total_thoughts']} "
            f"({record['phase']}, Q:{record['quality']['quality_score']})"
        )
        return build_thought_response(session, record, config)

    except ThinkingError as e:
        logger.warning(f"Thought rejected: {e.message}")
        return e.to_dict()
    except Exception as e:
        logger.error(f"process_thought failed: {e}", exc_info=True)
        return ProcessingError(str(e)).to_dict()


def summarize_session(session: ThinkingSession) -> dict[str, Any]:
    """Session-wide progress report: progress, coverage, trend, graph, tools."""
    records = session.store.records
    metadata = session.prompt_metadata
    branch_ids = session.store.branch_ids()

    return {
        "success": True,
        "sessionId": session.session_id,
        "thoughtCount": len(records),
        "maxTotalThoughts": session.store.max_total_thoughts,
        "branches": {
            branch_id: [r["thought_number"] for r in session.store.branch(branch_id)]
            for branch_id in branch_ids
        },
        "overallProgress": calculate_overall_progress(records, metadata),
        "estimatedRemainingThoughts": estimate_remaining_thoughts(records, metadata),
        "alignmentTrend": calculate_alignment_trend(records),
        "goalCoverage": calculate_goal_coverage(records, metadata),
        "complexity": estimate_complexity(records, len(branch_ids)),
        "toolUsage": {
            tool: {
                "usageCount": stats["usage_count"],
                "thoughtsUsedIn": list(stats["thoughts_used_in"]),
                "phaseUsage": {p: n for p, n in stats["phase_usage"].items() if n > 0},
            }
            for tool, stats in session.tool_usage_stats.items()
        },
        "dependencyGraph": {
            "adjacency": {str(k): v for k, v in build_dependency_graph(records).items()},
            "roots": find_root_thoughts(records),
        },
        "recentThoughts": [
            {"number": r["thought_number"], "summary": truncate_text(r["thought"], 50)}
            for r in session.store.recent(RECENT_THOUGHTS_IN_SUMMARY)
        ],
        "promptContext": (
            {
                "goals": metadata["goals"],
                "constraints": metadata["constraints"],
                "domains": metadata["domains"],
                "taskType": metadata["task_type"],
                "complexity": metadata["complexity"],
                "priority": metadata["priority"],
                "keywords": metadata["keywords"],
            }
            if metadata else None
        ),
    }


def lookup_thought(session: ThinkingSession, thought_number: Any) -> dict[str, Any]:
    """Latest stored record for a thought number, plus its revisions."""
    try:
        thought_number = validate_thought_number(thought_number)
        record = session.store.get(thought_number)
        if record is None:
            raise ThoughtNotFoundError(thought_number)
        return {
            "success": True,
            "thought": format_record(record),
            "revisions": session.store.revisions_of(thought_number),
        }
    except ThinkingError as e:
        return e.to_dict()
