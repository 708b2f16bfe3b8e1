from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from coursemap.services.records import Course, Module


class NodeType(str, Enum):
    COURSE = "course"
    MODULE = "module"


class EdgeType(str, Enum):
    CORE = "core"
    OPTIONAL = "optional"
    PREREQUISITE = "prerequisite"


@dataclass
class GraphNode:
    id: str
    label: str
    type: NodeType
    data: dict[str, Any] = field(default_factory=dict)
    depth: int | None = None


@dataclass
class GraphEdge:
    id: str
    source: str
    target: str
    type: EdgeType


@dataclass
class Graph:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)


def edge_id(source: str, target: str, edge_type: EdgeType) -> str:
    return f"{edge_type.value}:{source}-{target}"


class GraphAssembler:
    """Collects nodes and edges in insertion order, keeping ids unique.

    The first node or edge registered under an id wins; later ones are ignored.
    """

    def __init__(self):
        self._nodes: dict[str, GraphNode] = {}
        self._edges: dict[str, GraphEdge] = {}

    def add_node(self, node: GraphNode) -> bool:
        if node.id in self._nodes:
            return False
        self._nodes[node.id] = node
        return True

    def add_edge(self, source: str, target: str, edge_type: EdgeType) -> bool:
        key = edge_id(source, target, edge_type)
        if key in self._edges:
            return False
        self._edges[key] = GraphEdge(id=key, source=source, target=target, type=edge_type)
        return True

    def prune_dangling_edges(self) -> int:
        dangling = [
            key
            for key, edge in self._edges.items()
            if edge.source not in self._nodes or edge.target not in self._nodes
        ]
        for key in dangling:
            del self._edges[key]
        return len(dangling)

    def graph(self) -> Graph:
        return Graph(nodes=list(self._nodes.values()), edges=list(self._edges.values()))


# ── Node projections ─────────────────────────────────────────────────────────


def course_node(course: Course) -> GraphNode:
    return GraphNode(
        id=course.course_code,
        label=course.name,
        type=NodeType.COURSE,
        data={
            "name": course.name,
            "degree": course.degree.value,
            "department": course.department,
            "description": course.description,
        },
    )


def module_node(module: Module) -> GraphNode:
    return GraphNode(
        id=module.module_code,
        label=module.title,
        type=NodeType.MODULE,
        data={
            "module_code": module.module_code,
            "title": module.title,
            "credit_value": module.credit_value,
            "summary": module.summary,
            "learning_outcomes": list(module.learning_outcomes),
            "assessment_methods": [
                {"method": m.method, "percentage": m.percentage}
                for m in module.assessment_methods
            ],
            "course_year": module.course_year,
            "semester": module.semester.value,
            "is_optional": module.is_optional,
        },
    )


def chain_node(module: Module, depth: int) -> GraphNode:
    """Lighter projection used by prerequisite chains."""
    return GraphNode(
        id=module.module_code,
        label=module.title,
        type=NodeType.MODULE,
        depth=depth,
        data={
            "module_code": module.module_code,
            "title": module.title,
            "credit_value": module.credit_value,
            "summary": module.summary,
        },
    )
