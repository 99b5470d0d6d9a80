"""
Breadth-first shortest path search over a process graph.

Plain BFS with two gateway rules:
- Event-based gateway: only its first outgoing flow is explored (one
  event wins the race).
- Parallel/inclusive gateway: a join is only passed once it has been
  reached as often as it has incoming flows.
"""

from __future__ import annotations

import logging
from collections import deque

from bpmn_pathfinder.graph.model import NodeKind, ProcessGraph

logger = logging.getLogger(__name__)


class NodeNotFoundError(KeyError):
    """Raised when a start or end id is not a node of the graph."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(", ".join(missing))
        self.missing = missing

    def __str__(self) -> str:
        return f"Node IDs not found: {', '.join(self.missing)}"


def find_shortest_path(
    graph: ProcessGraph, start_id: str, end_id: str
) -> list[str] | None:
    """
    Find the shortest path from start_id to end_id.

    Returns:
        List of node ids from start to end, or None if end is unreachable

    Raises:
        NodeNotFoundError: If start_id or end_id is not in the graph
    """
    missing = [node_id for node_id in (start_id, end_id) if node_id not in graph]
    if missing:
        raise NodeNotFoundError(list(dict.fromkeys(missing)))

    if start_id == end_id:
        return [start_id]

    # visited maps node id -> parent id
    queue: deque[str] = deque([start_id])
    visited: dict[str, str | None] = {start_id: None}
    arrivals: dict[str, int] = {}

    def reconstruct(node_id: str) -> list[str]:
        path = []
        current: str | None = node_id
        while current is not None:
            path.append(current)
            current = visited[current]
        return list(reversed(path))

    def extend(current_id: str, next_id: str) -> list[str] | None:
        """Visit next_id from current_id; return the full path if it is the end."""
        if next_id in visited:
            return None
        visited[next_id] = current_id
        if next_id == end_id:
            return reconstruct(next_id)
        queue.append(next_id)
        return None

    while queue:
        current_id = queue.popleft()
        current = graph.get(current_id)
        if current is None:
            continue

        for edge in current.outgoing:
            next_node = graph.get(edge.target)
            if next_node is None:
                logger.debug(f"Skipping flow {current_id} -> {edge.target}: target not in graph")
                if current.kind is NodeKind.EVENT_BASED_GATEWAY:
                    break
                continue

            if current.kind is NodeKind.EVENT_BASED_GATEWAY:
                path = extend(current_id, next_node.id)
                if path is not None:
                    return path
                break

            if next_node.kind.is_join:
                count = arrivals.get(next_node.id, 0) + 1
                arrivals[next_node.id] = count
                if count < next_node.incoming_count:
                    logger.debug(
                        f"Join '{next_node.id}' waiting ({count}/{next_node.incoming_count})"
                    )
                    continue

            path = extend(current_id, next_node.id)
            if path is not None:
                return path

    return None
