"""
Reusable library for finding paths between BPMN nodes.

Usage:
    from bpmn_pathfinder.library import ProcessPathLibrary

    with ProcessPathLibrary.from_defaults() as lib:
        result = lib.find_path("StartEvent_1", "invoiceProcessed")
        print(result.to_json())
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field

from bpmn_pathfinder.bpmn.fetcher import BpmnFetcher
from bpmn_pathfinder.bpmn.parser import parse_model
from bpmn_pathfinder.config import (
    BPMN_URL,
    HTTP_MAX_RETRIES,
    HTTP_RETRY_BACKOFF,
    HTTP_TIMEOUT_MS,
)
from bpmn_pathfinder.graph.model import ProcessGraph
from bpmn_pathfinder.graph.pathfinder import find_shortest_path

logger = logging.getLogger(__name__)

MESSAGE_FOUND = "Path found"
MESSAGE_NOT_FOUND = "No path found"
MESSAGE_INVALID_IDS = "Invalid node IDs"


@dataclass
class PathResult:
    """
    Outcome of a path lookup.

    Attributes:
        success: Whether a path was found
        message: Short human-readable outcome
        path: Node ids from start to end (empty on failure)
    """

    success: bool
    message: str
    path: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        """Pretty-printed JSON representation."""
        return json.dumps(self.to_dict(), indent=2)


class ProcessPathLibrary:
    """
    Fetches a BPMN model, parses it, and answers shortest-path queries.

    Owns a BpmnFetcher; use as a context manager or call close().
    """

    def __init__(
        self,
        url: str = BPMN_URL,
        timeout_ms: int = HTTP_TIMEOUT_MS,
        max_retries: int = HTTP_MAX_RETRIES,
        retry_backoff: float = HTTP_RETRY_BACKOFF,
    ) -> None:
        self._fetcher = BpmnFetcher(
            url,
            timeout_ms=timeout_ms,
            max_retries=max_retries,
            retry_backoff=retry_backoff,
        )

    @classmethod
    def from_defaults(cls) -> ProcessPathLibrary:
        """Create a library configured from environment variables."""
        return cls(BPMN_URL, HTTP_TIMEOUT_MS, HTTP_MAX_RETRIES, HTTP_RETRY_BACKOFF)

    def load_graph(self) -> ProcessGraph:
        """Fetch and parse the model."""
        return parse_model(self._fetcher.fetch_xml())

    def find_path(self, start_id: str, end_id: str) -> PathResult:
        """
        Find the shortest path between two nodes of the remote model.

        Raises:
            BpmnFetchError: If the model cannot be downloaded
            BpmnParseError: If the model cannot be parsed
        """
        graph = self.load_graph()
        return search(graph, start_id, end_id)

    def close(self) -> None:
        self._fetcher.close()

    def __enter__(self) -> ProcessPathLibrary:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def search(graph: ProcessGraph, start_id: str, end_id: str) -> PathResult:
    """Run the search on an already loaded graph and wrap the outcome."""
    if start_id not in graph or end_id not in graph:
        logger.error(f"Node IDs not found: start={start_id}, end={end_id}")
        return PathResult(False, MESSAGE_INVALID_IDS)

    path = find_shortest_path(graph, start_id, end_id)
    if path is None:
        logger.warning(f"No path found from {start_id} to {end_id}")
        return PathResult(False, MESSAGE_NOT_FOUND)

    logger.info(f"Shortest path from {start_id} to {end_id} ({len(path) - 1} flows): {' -> '.join(path)}")
    return PathResult(True, MESSAGE_FOUND, path)


class ProcessPathService:
    """
    Service wrapper for programmatic use without the CLI.

    Returns the bare path and raises on any failed lookup.
    """

    def __init__(
        self,
        url: str = BPMN_URL,
        timeout_ms: int = HTTP_TIMEOUT_MS,
        max_retries: int = HTTP_MAX_RETRIES,
        retry_backoff: float = HTTP_RETRY_BACKOFF,
    ) -> None:
        self._url = url
        self._timeout_ms = timeout_ms
        self._max_retries = max_retries
        self._retry_backoff = retry_backoff

    def find_path(self, start_id: str, end_id: str) -> list[str]:
        """
        Find the path between two nodes.

        Raises:
            ValueError: If the ids are invalid or no path exists
        """
        with ProcessPathLibrary(
            self._url, self._timeout_ms, self._max_retries, self._retry_backoff
        ) as lib:
            result = lib.find_path(start_id, end_id)
        if not result.success:
            raise ValueError(result.message)
        return result.path
