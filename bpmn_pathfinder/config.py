"""
Configuration constants for the BPMN path finder.

All endpoints, timeouts and tunable parameters are defined here.
Values are read from environment variables (a .env file is honored).
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


def env_int(key: str, default: int) -> int:
    """Read an integer from the environment, falling back to default if unset or invalid."""
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid value for env {key}: '{raw}'")
        return default


def env_float(key: str, default: float) -> float:
    """Read a float from the environment, falling back to default if unset or invalid."""
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid value for env {key}: '{raw}'")
        return default


# =============================================================================
# Model Source Configuration
# =============================================================================

# Camunda REST endpoint returning {"id": ..., "bpmn20Xml": "..."}
DEFAULT_BPMN_URL = (
    "https://n35ro2ic4d.execute-api.eu-central-1.amazonaws.com"
    "/prod/engine-rest/process-definition/key/invoice/xml"
)
BPMN_URL = os.environ.get("BPMN_URL", DEFAULT_BPMN_URL)

# JSON field carrying the BPMN 2.0 XML document
BPMN_XML_FIELD = "bpmn20Xml"

# =============================================================================
# HTTP Configuration
# =============================================================================

# Per-attempt timeout in milliseconds (connect and read)
HTTP_TIMEOUT_MS = env_int("HTTP_TIMEOUT_MS", 5000)

# Additional attempts after the first one on connection errors/timeouts
HTTP_MAX_RETRIES = env_int("HTTP_MAX_RETRIES", 3)

# Backoff base in seconds: wait = HTTP_RETRY_BACKOFF * 2 ** attempt
HTTP_RETRY_BACKOFF = env_float("HTTP_RETRY_BACKOFF", 0.5)

# User agent for requests
USER_AGENT = "BpmnPathFinder/0.1"

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
