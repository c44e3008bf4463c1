"""
Layer 1: Dependency Graph and Recommendation Tests
"""
from seqthink.helpers.graph import (
    all_dependencies,
    build_dependency_graph,
    find_root_thoughts,
    infer_semantic_dependencies,
)
from seqthink.helpers.keywords import extract_keywords
from seqthink.helpers.recommendations import (
    PHASE_STRATEGIES,
    generate_recommendations,
    rank_focus_areas,
    trim_recommendations,
)


class TestDependencies:
    """Tests for declared and inferred dependencies."""

    def test_all_dependencies_declared_first(self, make_record):
        """Verify declared dependencies precede inferred ones without repeats."""
        record = make_record(5, dependencies=[3, 1], inferred_dependencies=[2, 3])

        assert all_dependencies(record) == [3, 1, 2]

    def test_infer_from_shared_keywords(self, make_record):
        """Verify two shared keywords link a thought to an earlier one."""
        first = make_record(1, "Design the caching layer and measure latency carefully")
        first["keywords"] = extract_keywords(first["thought"])
        second = make_record(2, "The caching layer must keep latency under ten milliseconds")
        second["keywords"] = extract_keywords(second["thought"])

        assert infer_semantic_dependencies(second, [first]) == [1]

    def test_declared_not_inferred_again(self, make_record):
        """Verify a declared dependency is not repeated as inferred."""
        first = make_record(1, keywords=["caching", "latency"])
        second = make_record(2, keywords=["caching", "latency"], dependencies=[1])

        assert infer_semantic_dependencies(second, [first]) == []

    def test_single_shared_keyword_ignored(self, make_record):
        """Verify one shared keyword is below the threshold."""
        first = make_record(1, keywords=["caching", "profiles"])
        second = make_record(2, keywords=["caching", "latency"])

        assert infer_semantic_dependencies(second, [first]) == []
        assert infer_semantic_dependencies(second, [first], min_overlap=1) == [1]

    def test_graph_and_roots(self, make_record):
        """Verify adjacency maps dependency to dependents."""
        records = [
            make_record(1),
            make_record(2, dependencies=[1]),
            make_record(3, dependencies=[1], inferred_dependencies=[2]),
            make_record(4),
        ]

        assert build_dependency_graph(records) == {1: [2, 3], 2: [3]}
        assert find_root_thoughts(records) == [1, 4]


class TestRecommendations:
    """Tests for table-driven recommendations."""

    def test_every_phase_has_strategies(self):
        """Verify each phase offers at least one strategy."""
        for phase in ("Planning", "Analysis", "Execution", "Verification"):
            assert PHASE_STRATEGIES[phase]

    def test_generate_for_planning(self):
        """Verify strategy, reasoning type and focus area selection."""
        metadata = {"goals": ["Sort a list", "Keep it stable"], "task_type": "implementation"}

        result = generate_recommendations(metadata, "Planning", {"goal_0": 67, "goal_1": 0})

        assert result["strategies"][0]["strategy_name"] == "Problem Decomposition"
        assert result["reasoning_types"][0]["reasoning_type"] == "deductive"
        assert result["focus_areas"][0]["area"] == "goal_1"

    def test_unknown_phase_and_task_type_fall_back(self):
        """Verify unknown inputs use the Execution and general tables."""
        result = generate_recommendations({"goals": [], "task_type": "poetry"}, "Brainstorm")

        assert result["strategies"] == PHASE_STRATEGIES["Execution"]
        assert result["reasoning_types"][0]["reasoning_type"] == "deductive"
        assert result["focus_areas"] == []

    def test_focus_areas_capped(self):
        """Verify at most three focus areas, least covered first."""
        areas = rank_focus_areas(["a", "b", "c", "d"], {"goal_0": 90, "goal_1": 10, "goal_2": 50, "goal_3": 30})

        assert [a["area"] for a in areas] == ["goal_1", "goal_3", "goal_2"]

    def test_trim_keeps_top_entries(self):
        """Verify trimming keeps one entry per list in wire keys."""
        full = generate_recommendations({"goals": ["x", "y"], "task_type": "design"}, "Analysis")

        trimmed = trim_recommendations(full)

        assert set(trimmed) == {"strategies", "reasoningTypes", "focusAreas"}
        assert trimmed["strategies"] == full["strategies"][:1]
        assert len(trimmed["focusAreas"]) == 1
