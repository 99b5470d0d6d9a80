"""
Process graph primitives.

A ProcessGraph is a read-only mapping from node id to Node. It is built
once per invocation (usually by bpmn.parser) and shared by any number of
searches.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class NodeKind(str, Enum):
    """Traversal-relevant node types."""

    PLAIN = "plain"
    EVENT_BASED_GATEWAY = "eventBasedGateway"
    PARALLEL_GATEWAY = "parallelGateway"
    INCLUSIVE_GATEWAY = "inclusiveGateway"

    @property
    def is_join(self) -> bool:
        """Whether the node waits for all incoming flows before it can be passed."""
        return self in (NodeKind.PARALLEL_GATEWAY, NodeKind.INCLUSIVE_GATEWAY)


@dataclass(frozen=True)
class Edge:
    """
    A directed sequence flow.

    Attributes:
        source: Id of the node the flow leaves
        target: Id of the node the flow enters
        flow_id: BPMN sequenceFlow id (informational, ignored by equality)
    """

    source: str
    target: str
    flow_id: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Node:
    """
    A flow node of the process graph.

    Attributes:
        id: Node identifier, unique across the whole graph
        kind: Traversal kind
        outgoing: Outgoing edges in model order
        incoming_count: Number of edges targeting this node, graph-wide
        element_type: BPMN element tag (e.g. "userTask")
        name: Human-readable label from the model, if any
    """

    id: str
    kind: NodeKind = NodeKind.PLAIN
    outgoing: tuple[Edge, ...] = ()
    incoming_count: int = 0
    element_type: str = "task"
    name: str | None = None


class ProcessGraph(Mapping[str, Node]):
    """
    Immutable node-id-keyed process graph.

    Behaves like a read-only dict of Node objects. Edges whose target is
    not a key of the graph are kept as-is; the search skips them.
    """

    def __init__(self, nodes: Mapping[str, Node]) -> None:
        self._nodes = MappingProxyType(dict(nodes))

    @classmethod
    def from_edges(
        cls,
        kinds: Mapping[str, NodeKind],
        edges: Iterable[tuple[str, str]],
    ) -> ProcessGraph:
        """
        Build a graph from node kinds and an ordered list of (source, target) pairs.

        Outgoing edge order follows the order of `edges`. Incoming counts are
        derived from the same list, so parallel edges count twice.

        Raises:
            KeyError: If an edge source is not in `kinds`
        """
        edge_list = [Edge(source, target) for source, target in edges]
        outgoing: dict[str, list[Edge]] = {node_id: [] for node_id in kinds}
        for edge in edge_list:
            if edge.source not in outgoing:
                raise KeyError(f"Edge source '{edge.source}' is not a node")
            outgoing[edge.source].append(edge)

        incoming = Counter(edge.target for edge in edge_list)
        nodes = {
            node_id: Node(
                id=node_id,
                kind=kind,
                outgoing=tuple(outgoing[node_id]),
                incoming_count=incoming[node_id],
                element_type=kind.value if kind is not NodeKind.PLAIN else "task",
            )
            for node_id, kind in kinds.items()
        }
        return cls(nodes)

    def __getitem__(self, node_id: str) -> Node:
        return self._nodes[node_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nodes={len(self._nodes)})"

    def edges(self) -> Iterator[Edge]:
        """Iterate over every edge, grouped by source in node order."""
        for node in self._nodes.values():
            yield from node.outgoing

    def join_gateways(self) -> list[Node]:
        """Return all parallel/inclusive gateways."""
        return [node for node in self._nodes.values() if node.kind.is_join]

    def stats(self) -> dict:
        """Get statistics about the graph."""
        kinds = Counter(node.kind.value for node in self._nodes.values())
        edges = list(self.edges())
        return {
            "nodes": len(self._nodes),
            "edges": len(edges),
            "dangling_edges": sum(1 for e in edges if e.target not in self._nodes),
            **{f"kind_{kind.value}": kinds.get(kind.value, 0) for kind in NodeKind},
        }
