"""
Fetcher for BPMN model XML served by a Camunda-style REST endpoint.

The endpoint answers with JSON of the form {"id": ..., "bpmn20Xml": "<xml>"}.
"""

from __future__ import annotations

import logging
import time

import requests

from bpmn_pathfinder.config import (
    BPMN_XML_FIELD,
    HTTP_MAX_RETRIES,
    HTTP_RETRY_BACKOFF,
    HTTP_TIMEOUT_MS,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


class BpmnFetchError(RuntimeError):
    """Raised when the model cannot be downloaded or the response is unusable."""


class BpmnFetcher:
    """
    Downloads BPMN XML over HTTP.

    Retries connection errors and timeouts with exponential backoff. Other
    request errors are wrapped in BpmnFetchError without retrying.
    HTTP error statuses and malformed bodies are not retried.
    """

    def __init__(
        self,
        url: str,
        timeout_ms: int = HTTP_TIMEOUT_MS,
        max_retries: int = HTTP_MAX_RETRIES,
        retry_backoff: float = HTTP_RETRY_BACKOFF,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            url: Endpoint returning the model definition as JSON
            timeout_ms: Per-attempt connect/read timeout in milliseconds
            max_retries: Additional attempts after the first one
            retry_backoff: Base wait in seconds between attempts
        """
        self._url = url
        self._timeout = timeout_ms / 1000
        self._max_retries = max(0, max_retries)
        self._retry_backoff = retry_backoff
        self._session = requests.Session()
        self._session.headers.update(
            {"User-Agent": USER_AGENT, "Accept": "application/json"}
        )
        self._closed = False

    @property
    def url(self) -> str:
        return self._url

    def _get(self) -> requests.Response:
        """GET the endpoint, retrying transient transport failures."""
        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            if attempt > 0:
                wait_time = self._retry_backoff * 2 ** (attempt - 1)
                logger.warning(
                    f"Fetch failed ({last_error}), retry {attempt}/{self._max_retries} in {wait_time:.1f}s"
                )
                time.sleep(wait_time)
            try:
                return self._session.get(self._url, timeout=self._timeout)
            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                last_error = e
            except requests.exceptions.RequestException as e:
                raise BpmnFetchError(f"Request to {self._url} failed: {e}") from e

        raise BpmnFetchError(
            f"Failed to fetch {self._url} after {self._max_retries + 1} attempts: {last_error}"
        ) from last_error

    def fetch_xml(self) -> str:
        """
        Fetch the BPMN 2.0 XML document.

        Returns:
            The XML text from the response's bpmn20Xml field

        Raises:
            BpmnFetchError: On transport failure, non-200 status, or bad body
        """
        if self._closed:
            raise BpmnFetchError("Fetcher is closed")

        logger.debug(f"Fetching: {self._url}")
        response = self._get()

        if response.status_code != 200:
            raise BpmnFetchError(f"HTTP {response.status_code}")
        if not response.content:
            raise BpmnFetchError("Empty response")

        try:
            data = response.json()
        except ValueError as e:
            raise BpmnFetchError(f"Response is not valid JSON: {e}") from e

        xml = data.get(BPMN_XML_FIELD) if isinstance(data, dict) else None
        if xml is None:
            raise BpmnFetchError(f"Missing {BPMN_XML_FIELD} field")

        logger.info(f"Fetched BPMN model ({len(xml):,} chars) from {self._url}")
        return str(xml)

    def close(self) -> None:
        """Release the HTTP session. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._session.close()

    def __enter__(self) -> BpmnFetcher:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
