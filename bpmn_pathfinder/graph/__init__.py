"""
Graph module.

Provides the process graph representation and the gateway-aware
shortest path search:
- ProcessGraph / Node / Edge / NodeKind: read-only graph primitives
- find_shortest_path: BFS honoring event-based and join gateways
"""

from bpmn_pathfinder.graph.model import Edge, Node, NodeKind, ProcessGraph
from bpmn_pathfinder.graph.pathfinder import NodeNotFoundError, find_shortest_path

__all__ = [
    "Edge",
    "Node",
    "NodeKind",
    "ProcessGraph",
    "NodeNotFoundError",
    "find_shortest_path",
]
