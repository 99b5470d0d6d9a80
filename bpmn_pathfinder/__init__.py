"""
BPMN Process Path Finder.

Finds the shortest route between two nodes of a BPMN process model,
honoring event-based gateway races and parallel/inclusive gateway joins.
"""

__version__ = "0.1.0"
