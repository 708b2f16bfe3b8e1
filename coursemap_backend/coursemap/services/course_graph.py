import logging
from dataclasses import dataclass, field

from coursemap.core.errors import NotFound
from coursemap.services.graph import (
    EdgeType,
    GraphAssembler,
    GraphEdge,
    GraphNode,
    course_node,
    module_node,
)
from coursemap.services.records import Course, Module, RecordStore

logger = logging.getLogger(__name__)


@dataclass
class CourseGraph:
    course: Course
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)


def build_course_graph(store: RecordStore, course_code: str) -> CourseGraph | NotFound:
    """Build the course-scoped graph for ``course_code``.

    The graph holds one course node, a node per stored module the course
    references, course -> module membership edges, and prerequisite edges
    between member modules. Two store round trips: the course, then every
    referenced module in a single batch.
    """
    course = store.find_course_by_code(course_code)
    if course is None:
        return NotFound("course", course_code)

    core_codes = set(course.modules.core_codes())
    referenced = course.modules.all_codes()

    fetched = {m.module_code: m for m in store.find_modules_by_codes(set(referenced))}
    # Declaration order keeps repeated builds identical.
    modules = [fetched[code] for code in referenced if code in fetched]
    missing = len(referenced) - len(modules)
    if missing:
        logger.debug("Course %s references %d unknown module(s)", course_code, missing)

    assembler = GraphAssembler()
    assembler.add_node(course_node(course))

    members: list[Module] = []
    for module in modules:
        if not assembler.add_node(module_node(module)):
            logger.warning(
                "Module %s shares its code with course %s; skipped",
                module.module_code,
                course_code,
            )
            continue
        members.append(module)

    for module in members:
        kind = EdgeType.CORE if module.module_code in core_codes else EdgeType.OPTIONAL
        assembler.add_edge(course.course_code, module.module_code, kind)

    member_codes = {module.module_code for module in members}
    for module in members:
        for prereq in module.prerequisites:
            if prereq in member_codes:
                assembler.add_edge(prereq, module.module_code, EdgeType.PREREQUISITE)

    graph = assembler.graph()
    logger.info(
        "Built course graph %s: %d nodes, %d edges",
        course_code,
        len(graph.nodes),
        len(graph.edges),
    )
    return CourseGraph(course=course, nodes=graph.nodes, edges=graph.edges)
