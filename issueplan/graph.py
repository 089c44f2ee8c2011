"""Dependency graph model and adjacency lookups."""

import re
from collections import deque
from typing import Dict, Iterable, KeysView, List, Set, Tuple, Union

from issueplan.exceptions import (
    CycleError,
    DanglingEdgeError,
    DuplicateNodeError,
    IssueNotFoundError,
    SelfLoopError,
)
from issueplan.models import DependencyEdge, IssueNode
from issueplan.utils.logging import get_logger

EdgeLike = Union[DependencyEdge, Tuple[str, str]]

_DIGITS = re.compile(r"(\d+)")


def id_sort_key(issue_id: str) -> Tuple:
    """Ordering key used for every id tie-break.

    Digit runs compare numerically so ``ISS-2`` sorts before ``ISS-10``; the
    raw id is appended so distinct ids never compare equal.
    """
    parts = _DIGITS.split(issue_id)
    natural = tuple(int(part) if i % 2 else part for i, part in enumerate(parts))
    return (natural, issue_id)


def _coerce_edge(edge: EdgeLike) -> DependencyEdge:
    if isinstance(edge, DependencyEdge):
        return edge
    from_id, to_id = edge
    return DependencyEdge(from_id=from_id, to_id=to_id)


class GraphModel:
    """Immutable snapshot of issues and their "depends-on" edges.

    An edge ``(from_id, to_id)`` means ``from_id`` depends on ``to_id``.
    ``dependencies(x)`` are the issues ``x`` waits for; ``dependents(x)``
    are the issues waiting for ``x``. Use ``GraphModel.build`` to construct.
    """

    def __init__(
        self,
        nodes: Dict[str, IssueNode],
        dependencies: Dict[str, Dict[str, None]],
        dependents: Dict[str, Dict[str, None]],
        edges: List[DependencyEdge],
    ):
        self._nodes = nodes
        self._dependencies = dependencies
        self._dependents = dependents
        self._edges = tuple(edges)

    @classmethod
    def build(cls, nodes: Iterable[IssueNode], edges: Iterable[EdgeLike]) -> "GraphModel":
        """Build a graph snapshot.

        Args:
            nodes: Issue records, ids must be unique
            edges: Dependency edges; duplicates are ignored

        Returns:
            New GraphModel

        Raises:
            DuplicateNodeError: Two nodes share an id
            SelfLoopError: An edge has ``from_id == to_id``
            DanglingEdgeError: An edge references an unknown id
        """
        logger = get_logger()
        node_map: Dict[str, IssueNode] = {}
        for node in nodes:
            if node.id in node_map:
                logger.error("Duplicate issue id", issue_id=node.id)
                raise DuplicateNodeError(node.id)
            node_map[node.id] = node

        # dicts keyed by id keep insertion order for deterministic traversal
        dependencies: Dict[str, Dict[str, None]] = {node_id: {} for node_id in node_map}
        dependents: Dict[str, Dict[str, None]] = {node_id: {} for node_id in node_map}
        unique_edges: List[DependencyEdge] = []

        for raw_edge in edges:
            edge = _coerce_edge(raw_edge)
            if edge.from_id == edge.to_id:
                logger.error("Self-dependency rejected", issue_id=edge.from_id)
                raise SelfLoopError(edge.from_id)
            for endpoint in (edge.from_id, edge.to_id):
                if endpoint not in node_map:
                    logger.error(
                        "Edge references unknown issue",
                        from_id=edge.from_id,
                        to_id=edge.to_id,
                        missing=endpoint,
                    )
                    raise DanglingEdgeError(edge.from_id, edge.to_id, endpoint)
            if edge.to_id in dependencies[edge.from_id]:
                continue
            dependencies[edge.from_id][edge.to_id] = None
            dependents[edge.to_id][edge.from_id] = None
            unique_edges.append(edge)

        logger.debug("Dependency graph built", nodes=len(node_map), edges=len(unique_edges))
        return cls(node_map, dependencies, dependents, unique_edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, issue_id: object) -> bool:
        return issue_id in self._nodes

    def __repr__(self) -> str:
        return f"GraphModel(nodes={len(self._nodes)}, edges={len(self._edges)})"

    @property
    def nodes(self) -> Tuple[IssueNode, ...]:
        """Issues in the order supplied to ``build``."""
        return tuple(self._nodes.values())

    @property
    def node_ids(self) -> Tuple[str, ...]:
        return tuple(self._nodes)

    @property
    def edges(self) -> Tuple[DependencyEdge, ...]:
        """Deduplicated edges in the order supplied to ``build``."""
        return self._edges

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def _require(self, issue_id: str, operation: str) -> None:
        if issue_id not in self._nodes:
            raise IssueNotFoundError(issue_id, operation)

    def node(self, issue_id: str) -> IssueNode:
        self._require(issue_id, "node")
        return self._nodes[issue_id]

    def dependencies(self, issue_id: str) -> KeysView[str]:
        """Direct dependencies of an issue (read-only, set-like)."""
        self._require(issue_id, "dependencies")
        return self._dependencies[issue_id].keys()

    def dependents(self, issue_id: str) -> KeysView[str]:
        """Issues that directly depend on ``issue_id`` (read-only, set-like)."""
        self._require(issue_id, "dependents")
        return self._dependents[issue_id].keys()

    def dependency_count(self, issue_id: str) -> int:
        return len(self.dependencies(issue_id))

    def dependent_count(self, issue_id: str) -> int:
        return len(self.dependents(issue_id))

    def roots(self) -> List[str]:
        """Issues with no dependencies."""
        return [node_id for node_id, deps in self._dependencies.items() if not deps]

    def leaves(self) -> List[str]:
        """Issues nothing depends on."""
        return [node_id for node_id, deps in self._dependents.items() if not deps]

    def _walk(self, start: str, adjacency: Dict[str, Dict[str, None]]) -> Set[str]:
        seen: Set[str] = set()
        queue = deque([start])

        while queue:
            current = queue.popleft()
            for neighbour in adjacency[current]:
                if neighbour not in seen:
                    seen.add(neighbour)
                    queue.append(neighbour)

        return seen

    def transitive_dependencies(self, issue_id: str) -> List[str]:
        """All direct and indirect dependencies, sorted by id."""
        self._require(issue_id, "transitive_dependencies")
        return sorted(self._walk(issue_id, self._dependencies), key=id_sort_key)

    def transitive_dependents(self, issue_id: str) -> List[str]:
        """All direct and indirect dependents, sorted by id."""
        self._require(issue_id, "transitive_dependents")
        return sorted(self._walk(issue_id, self._dependents), key=id_sort_key)

    def depends_on(self, issue_a: str, issue_b: str) -> bool:
        """True if ``issue_a`` depends on ``issue_b`` directly or transitively."""
        self._require(issue_a, "depends_on")
        self._require(issue_b, "depends_on")
        return issue_b in self._walk(issue_a, self._dependencies)

    def topological_order(self) -> List[str]:
        """Return issues dependencies-first using Kahn's algorithm.

        Ties follow the order issues were supplied in.

        Raises:
            CycleError: If some issues can never become ready
        """
        remaining = {node_id: len(deps) for node_id, deps in self._dependencies.items()}
        queue = deque(node_id for node_id, count in remaining.items() if count == 0)
        order: List[str] = []

        while queue:
            node_id = queue.popleft()
            order.append(node_id)
            for dependent in self._dependents[node_id]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    queue.append(dependent)

        if len(order) != len(self._nodes):
            raise CycleError([], message="Failed to create topological order (likely cycle)")

        return order

