"""Tests for the course-scoped graph builder."""

import pytest

from coursemap.core.errors import NotFound, StoreUnavailable
from coursemap.services.course_graph import CourseGraph, build_course_graph
from coursemap.services.graph import EdgeType, NodeType
from coursemap.services.records import InMemoryRecordStore


def _edges(graph, edge_type):
    return [(e.source, e.target) for e in graph.edges if e.type == edge_type]


class TestBuildCourseGraph:
    """Tests for build_course_graph."""

    def test_two_module_course(self, make_module, make_course):
        """MATHBSC with MTH1001 and MTH2001 (which requires MTH1001)."""
        store = InMemoryRecordStore(
            modules=[make_module("MTH1001"), make_module("MTH2001", ["MTH1001"])],
            courses=[make_course("MATHBSC", core=["MTH1001", "MTH2001"])],
        )

        graph = build_course_graph(store, "MATHBSC")

        assert isinstance(graph, CourseGraph)
        assert [n.id for n in graph.nodes] == ["MATHBSC", "MTH1001", "MTH2001"]
        assert graph.nodes[0].type == NodeType.COURSE
        assert _edges(graph, EdgeType.CORE) == [("MATHBSC", "MTH1001"), ("MATHBSC", "MTH2001")]
        assert _edges(graph, EdgeType.PREREQUISITE) == [("MTH1001", "MTH2001")]
        assert len(graph.edges) == 3

    def test_unknown_course_is_not_found(self, sample_store):
        result = build_course_graph(sample_store, "NOEXIST")

        assert result == NotFound("course", "NOEXIST")

    def test_course_without_modules_is_a_valid_graph(self, make_course):
        store = InMemoryRecordStore(courses=[make_course("EMPTY")])

        graph = build_course_graph(store, "EMPTY")

        assert isinstance(graph, CourseGraph)
        assert [n.id for n in graph.nodes] == ["EMPTY"]
        assert graph.edges == []

    def test_core_wins_over_optional(self, make_module, make_course):
        store = InMemoryRecordStore(
            modules=[make_module("A"), make_module("B")],
            courses=[make_course("C", core=["A"], optional=["A", "B"])],
        )

        graph = build_course_graph(store, "C")

        membership = [(e.target, e.type) for e in graph.edges if e.source == "C"]
        assert membership == [("A", EdgeType.CORE), ("B", EdgeType.OPTIONAL)]
        assert [n.id for n in graph.nodes].count("A") == 1

    def test_missing_module_is_dropped(self, make_module, make_course):
        store = InMemoryRecordStore(
            modules=[make_module("A")],
            courses=[make_course("C", core=["A", "GHOST"])],
        )

        graph = build_course_graph(store, "C")

        assert [n.id for n in graph.nodes] == ["C", "A"]
        assert all(e.target != "GHOST" for e in graph.edges)

    def test_mutual_prerequisites_keep_both_edges(self, make_module, make_course):
        store = InMemoryRecordStore(
            modules=[make_module("A", ["B"]), make_module("B", ["A"])],
            courses=[make_course("C", core=["A", "B"])],
        )

        graph = build_course_graph(store, "C")

        assert sorted(_edges(graph, EdgeType.PREREQUISITE)) == [("A", "B"), ("B", "A")]

    def test_prerequisite_outside_course_is_dropped(self, make_module, make_course):
        store = InMemoryRecordStore(
            modules=[make_module("A", ["OUTSIDE"]), make_module("OUTSIDE")],
            courses=[make_course("C", core=["A"])],
        )

        graph = build_course_graph(store, "C")

        assert _edges(graph, EdgeType.PREREQUISITE) == []
        assert "OUTSIDE" not in {n.id for n in graph.nodes}

    def test_duplicate_prerequisites_are_suppressed(self, make_module, make_course):
        store = InMemoryRecordStore(
            modules=[make_module("A"), make_module("B", ["A", "A"])],
            courses=[make_course("C", core=["A", "B"])],
        )

        graph = build_course_graph(store, "C")

        assert _edges(graph, EdgeType.PREREQUISITE) == [("A", "B")]

    def test_self_prerequisite_is_a_self_loop(self, make_module, make_course):
        """A module listing itself keeps one looping edge and one node."""
        store = InMemoryRecordStore(
            modules=[make_module("A", ["A"])],
            courses=[make_course("C", core=["A"])],
        )

        graph = build_course_graph(store, "C")

        assert [n.id for n in graph.nodes] == ["C", "A"]
        assert _edges(graph, EdgeType.PREREQUISITE) == [("A", "A")]
        assert len(graph.edges) == 2

    def test_module_sharing_course_code_is_skipped(self, make_module, make_course):
        store = InMemoryRecordStore(
            modules=[make_module("C"), make_module("A", ["C"])],
            courses=[make_course("C", core=["C", "A"])],
        )

        graph = build_course_graph(store, "C")

        ids = [n.id for n in graph.nodes]
        assert ids == ["C", "A"]
        assert graph.nodes[0].type == NodeType.COURSE
        assert _edges(graph, EdgeType.PREREQUISITE) == []

    def test_modules_fetched_in_one_batch(self, sample_store):
        build_course_graph(sample_store, "MATHBSC")

        assert [call for call, _ in sample_store.lookups] == [
            "find_course_by_code",
            "find_modules_by_codes",
        ]

    def test_sample_mathematics_course(self, sample_store):
        graph = build_course_graph(sample_store, "MATHBSC")

        assert len(graph.nodes) == 9
        assert sorted(t for _, t in _edges(graph, EdgeType.OPTIONAL)) == [
            "MTH2003",
            "MTH3002",
            "MTH3003",
        ]
        assert sorted(_edges(graph, EdgeType.PREREQUISITE)) == [
            ("MTH1001", "MTH2001"),
            ("MTH1001", "MTH2002"),
            ("MTH1001", "MTH2003"),
            ("MTH1002", "MTH3003"),
            ("MTH2001", "MTH3001"),
            ("MTH2001", "MTH3002"),
            ("MTH2001", "MTH3003"),
        ]

    @pytest.mark.parametrize("course_code", ["MATHBSC", "COMPBSC"])
    def test_graph_invariants(self, sample_store, course_code):
        graph = build_course_graph(sample_store, course_code)

        node_ids = [n.id for n in graph.nodes]
        assert len(node_ids) == len(set(node_ids))
        edge_ids = [e.id for e in graph.edges]
        assert len(edge_ids) == len(set(edge_ids))
        for edge in graph.edges:
            assert edge.source in node_ids
            assert edge.target in node_ids

    def test_repeated_builds_are_identical(self, sample_store):
        assert build_course_graph(sample_store, "COMPBSC") == build_course_graph(
            sample_store, "COMPBSC"
        )

    def test_node_projections(self, sample_store):
        graph = build_course_graph(sample_store, "MATHBSC")

        course, module = graph.nodes[0], graph.nodes[1]
        assert course.label == "Mathematics"
        assert set(course.data) == {"name", "degree", "department", "description"}
        assert module.id == "MTH1001"
        assert module.data["semester"] == "Full Year"
        assert module.data["assessment_methods"] == [
            {"method": "Examination", "percentage": 70},
            {"method": "Coursework", "percentage": 30},
        ]
        assert module.depth is None

    def test_store_errors_propagate(self):
        class _DownStore(InMemoryRecordStore):
            def find_course_by_code(self, code):
                raise StoreUnavailable("down")

        with pytest.raises(StoreUnavailable):
            build_course_graph(_DownStore(), "MATHBSC")
