"""
BPMN 2.0 XML parser producing a flat ProcessGraph.

Uses BeautifulSoup with the lxml XML backend. Flow nodes nested inside
sub-processes are lifted into the same id namespace as top-level nodes.
"""

from __future__ import annotations

import logging
from collections import Counter

from bs4 import BeautifulSoup, Tag
from lxml import etree

from bpmn_pathfinder.graph.model import Edge, Node, NodeKind, ProcessGraph

logger = logging.getLogger(__name__)


class BpmnParseError(ValueError):
    """Raised when the XML cannot be turned into a process graph."""


# BPMN element tags that are flow nodes (sequence flows connect these)
FLOW_NODE_TAGS = {
    # Activities
    "task",
    "userTask",
    "serviceTask",
    "scriptTask",
    "businessRuleTask",
    "sendTask",
    "receiveTask",
    "manualTask",
    "callActivity",
    "subProcess",
    "transaction",
    "adHocSubProcess",
    # Events
    "startEvent",
    "endEvent",
    "intermediateCatchEvent",
    "intermediateThrowEvent",
    "boundaryEvent",
    # Gateways
    "exclusiveGateway",
    "parallelGateway",
    "inclusiveGateway",
    "eventBasedGateway",
    "complexGateway",
}

# Tags with traversal rules; everything else is PLAIN
KIND_BY_TAG = {
    "eventBasedGateway": NodeKind.EVENT_BASED_GATEWAY,
    "parallelGateway": NodeKind.PARALLEL_GATEWAY,
    "inclusiveGateway": NodeKind.INCLUSIVE_GATEWAY,
}


def _local_name(tag: Tag) -> str:
    """Tag name without namespace prefix."""
    return tag.name.split(":")[-1]


def _outgoing_refs(element: Tag) -> list[str]:
    """Flow ids listed in the element's direct <outgoing> children."""
    return [
        child.get_text(strip=True)
        for child in element.children
        if isinstance(child, Tag) and _local_name(child) == "outgoing"
    ]


def parse_model(xml: str) -> ProcessGraph:
    """
    Parse BPMN 2.0 XML into a ProcessGraph.

    Args:
        xml: BPMN definitions document

    Returns:
        Graph containing every flow node of the document, sub-processes flattened

    Raises:
        BpmnParseError: If the document is empty, malformed, or contains no flow nodes
    """
    if not xml or not xml.strip():
        raise BpmnParseError("Empty BPMN document")

    # The soup builder recovers from broken markup, so check well-formedness first
    try:
        etree.fromstring(xml.encode("utf-8"))
    except etree.XMLSyntaxError as e:
        raise BpmnParseError(f"Malformed BPMN XML: {e}") from e

    soup = BeautifulSoup(xml, "xml")

    elements: dict[str, Tag] = {}
    flows: list[Edge] = []
    for tag in soup.find_all(True):
        name = _local_name(tag)
        if name in FLOW_NODE_TAGS:
            node_id = tag.get("id")
            if not node_id:
                logger.debug(f"Skipping <{name}> without id")
                continue
            if node_id in elements:
                logger.debug(f"Duplicate node id '{node_id}', keeping first")
                continue
            elements[node_id] = tag
        elif name == "sequenceFlow":
            source, target = tag.get("sourceRef"), tag.get("targetRef")
            if not source or not target:
                logger.warning(f"Sequence flow '{tag.get('id')}' lacks sourceRef/targetRef")
                continue
            flows.append(Edge(source, target, flow_id=tag.get("id")))

    if not elements:
        raise BpmnParseError("No flow nodes found in BPMN document")

    by_source: dict[str, list[Edge]] = {node_id: [] for node_id in elements}
    for edge in flows:
        if edge.source not in by_source:
            logger.warning(f"Dropping flow '{edge.flow_id}': unknown source '{edge.source}'")
            continue
        by_source[edge.source].append(edge)

    incoming = Counter(edge.target for edge in flows if edge.source in elements)

    nodes: dict[str, Node] = {}
    for node_id, tag in elements.items():
        name = _local_name(tag)
        nodes[node_id] = Node(
            id=node_id,
            kind=KIND_BY_TAG.get(name, NodeKind.PLAIN),
            outgoing=_order_outgoing(by_source[node_id], _outgoing_refs(tag)),
            incoming_count=incoming[node_id],
            element_type=name,
            name=tag.get("name"),
        )

    graph = ProcessGraph(nodes)
    logger.info(f"Parsed BPMN model: {len(graph)} nodes, {sum(1 for _ in graph.edges())} flows")
    return graph


def _order_outgoing(edges: list[Edge], refs: list[str]) -> tuple[Edge, ...]:
    """
    Order a node's flows by its <outgoing> references.

    Flows not referenced by the node follow in document order.
    """
    if not refs:
        return tuple(edges)

    by_id = {edge.flow_id: edge for edge in edges if edge.flow_id}
    ordered: list[Edge] = []
    used: set[int] = set()
    for ref in refs:
        edge = by_id.get(ref)
        if edge is not None and id(edge) not in used:
            ordered.append(edge)
            used.add(id(edge))
    ordered.extend(edge for edge in edges if id(edge) not in used)
    return tuple(ordered)
