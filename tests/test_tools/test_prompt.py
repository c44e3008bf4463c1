"""
Layer 1: Prompt Analysis and Alignment Tests

Tests for prompt metadata extraction and thought-to-prompt alignment.
"""
import pytest

from seqthink.helpers.prompt import (
    analyze_prompt,
    detect_domains,
    detect_priority,
    detect_task_type,
    estimate_prompt_complexity,
    split_sentences,
)
from seqthink.helpers.alignment import analyze_thought_alignment, compute_goal_relevance
from seqthink.utils import content_terms


class TestAnalyzePrompt:
    """Tests for analyze_prompt and its classifiers."""

    def test_goals_and_constraints_split(self):
        """Verify constraint sentences are kept apart from goals."""
        metadata = analyze_prompt("Build a REST API for orders. It must not use external databases.")

        assert metadata["goals"] == ["Build a REST API for orders."]
        assert metadata["constraints"] == ["It must not use external databases."]
        assert "api" in metadata["domains"]
        assert metadata["task_type"] == "implementation"
        assert metadata["complexity"] == "medium"

    def test_single_sentence_prompt(self):
        """Verify a one-sentence prompt becomes its only goal."""
        metadata = analyze_prompt("Plan the approach to sort a list")

        assert metadata["goals"] == ["Plan the approach to sort a list"]
        assert metadata["constraints"] == []
        assert metadata["domains"] == ["algorithms"]
        assert metadata["task_type"] == "design"
        assert metadata["complexity"] == "medium"
        assert metadata["keywords"] == ["approach"]

    def test_all_constraints_falls_back_to_prompt(self):
        """Verify a prompt made only of constraints still yields a goal."""
        metadata = analyze_prompt("Never block the event loop")

        assert metadata["constraints"] == ["Never block the event loop"]
        assert metadata["goals"] == ["Never block the event loop"]

    def test_priority_and_debugging(self):
        """Verify urgency markers and bug verbs are detected."""
        text = "This is urgent: fix the login crash"

        assert detect_priority(text) == "high"
        assert detect_task_type(text) == "debugging"

    def test_defaults(self):
        """Verify neutral text gets general task type and medium priority."""
        assert detect_task_type("Tell me a story") == "general"
        assert detect_priority("Tell me a story") == "medium"
        assert detect_domains("Tell me a story") == []

    @pytest.mark.parametrize("goals,constraints,domains,words,expected", [
        (1, 0, 0, 10, "simple"),
        (2, 1, 0, 50, "medium"),
        (2, 2, 1, 100, "complex"),
    ])
    def test_prompt_complexity(self, goals, constraints, domains, words, expected):
        """Verify size buckets."""
        result = estimate_prompt_complexity(
            ["g"] * goals, ["c"] * constraints, ["d"] * domains, words
        )

        assert result == expected

    def test_split_sentences(self):
        """Verify splitting on terminators and newlines."""
        assert split_sentences("One. Two!\nThree") == ["One.", "Two!", "Three"]


class TestAlignment:
    """Tests for analyze_thought_alignment."""

    GOALS = ["Design a caching layer for user profiles", "Measure response latency"]

    def test_goal_relevance(self):
        """Verify per-goal overlap fractions."""
        relevance = compute_goal_relevance(
            self.GOALS, content_terms("The caching layer stores user profiles in memory")
        )

        assert relevance == {"goal_0": 0.8, "goal_1": 0.0}

    def test_alignment_from_goals_only(self):
        """Verify alignment uses the best goal when nothing else is known."""
        result = analyze_thought_alignment(
            "The caching layer stores user profiles in memory",
            {"goals": self.GOALS}
        )

        assert result["prompt_alignment"] == 8
        assert result["drift_warning"] is None

    def test_drift_warning(self):
        """Verify an off-topic thought gets a drift warning naming the first goal."""
        result = analyze_thought_alignment(
            "Lunch options near the office",
            {"goals": self.GOALS, "keywords": ["caching"], "domains": ["backend"]}
        )

        assert result["prompt_alignment"] == 0
        assert result["drift_warning"].startswith("Thought is drifting from the original prompt (alignment 0/10)")
        assert "Design a caching layer" in result["drift_warning"]

    def test_neutral_without_metadata_content(self):
        """Verify empty metadata gives the neutral score."""
        result = analyze_thought_alignment("Anything at all", {})

        assert result["prompt_alignment"] == 5
        assert result["prompt_relevance"] == {}
        assert result["drift_warning"] is None

    def test_alignment_bounds(self):
        """Verify scores stay within 0..10."""
        metadata = analyze_prompt("Build a REST API for orders. It must not use external databases.")
        for text in ["Build a REST API for orders", "Orders API", "Unrelated gardening notes"]:
            score = analyze_thought_alignment(text, metadata)["prompt_alignment"]
            assert 0 <= score <= 10
