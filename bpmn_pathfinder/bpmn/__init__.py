"""
BPMN model access module.

Provides fetching of BPMN XML from a Camunda-style REST endpoint and
parsing of that XML into a ProcessGraph.
"""

from bpmn_pathfinder.bpmn.fetcher import BpmnFetcher, BpmnFetchError
from bpmn_pathfinder.bpmn.parser import BpmnParseError, parse_model

__all__ = [
    "BpmnFetcher",
    "BpmnFetchError",
    "BpmnParseError",
    "parse_model",
]
