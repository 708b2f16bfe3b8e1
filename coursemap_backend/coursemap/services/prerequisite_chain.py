import logging

from coursemap.core.config import settings
from coursemap.core.errors import NotFound
from coursemap.services.graph import EdgeType, Graph, GraphAssembler, chain_node
from coursemap.services.records import RecordStore

logger = logging.getLogger(__name__)


def resolve_prerequisite_chain(
    store: RecordStore,
    module_code: str,
    max_depth: int | None = None,
    *,
    keep_dangling_edges: bool = False,
) -> Graph | NotFound:
    """Walk the prerequisites of ``module_code`` outwards, depth-first.

    Each module is expanded at most once (first visit fixes its depth) and
    nothing deeper than ``max_depth`` is expanded, so cyclic or self-referencing
    prerequisite data always terminates. Edges pointing at modules that were
    never expanded (unknown codes, or cut off by the depth ceiling) are dropped,
    so every edge joins two returned nodes. With ``keep_dangling_edges=True``
    every declared prerequisite edge of an expanded module is emitted
    unconditionally, whether or not its source was ever resolved.

    ``max_depth`` defaults to ``settings.prerequisite_depth``.
    """
    if max_depth is None:
        max_depth = settings.prerequisite_depth
    if max_depth < 0:
        raise ValueError("max_depth must be non-negative")

    root = store.find_module_by_code(module_code)
    if root is None:
        return NotFound("module", module_code)

    assembler = GraphAssembler()
    visited: set[str] = set()
    truncated = 0
    stack: list[tuple[str, int]] = [(module_code, 0)]

    while stack:
        code, depth = stack.pop()
        if code in visited:
            continue
        if depth > max_depth:
            truncated += 1
            continue
        visited.add(code)

        module = root if code == module_code else store.find_module_by_code(code)
        if module is None:
            logger.debug("Prerequisite %s of chain %s is not stored", code, module_code)
            continue

        assembler.add_node(chain_node(module, depth))
        for prereq in module.prerequisites:
            assembler.add_edge(prereq, code, EdgeType.PREREQUISITE)
        # Reversed so the first declared prerequisite is expanded first.
        for prereq in reversed(module.prerequisites):
            if prereq not in visited:
                stack.append((prereq, depth + 1))

    if truncated:
        logger.debug("Chain %s truncated at depth %d", module_code, max_depth)
    if not keep_dangling_edges:
        assembler.prune_dangling_edges()

    graph = assembler.graph()
    logger.info(
        "Resolved prerequisite chain %s: %d nodes, %d edges",
        module_code,
        len(graph.nodes),
        len(graph.edges),
    )
    return graph
