"""
BPMN Path Finder CLI - find the shortest path between two nodes of a process model.

Usage:
    bpmn-path StartEvent_1 invoiceProcessed
    bpmn-path approveInvoice invoiceProcessed --url http://localhost:8080/engine-rest/process-definition/key/invoice/xml
    bpmn-path StartEvent_1 invoiceProcessed --timeout-ms 10000 --max-retries 5 -v

Prints the result as JSON:
    {"success": true, "message": "Path found", "path": ["StartEvent_1", ...]}

Exit codes:
    0   path found
    1   usage error, invalid node ids, or no path
    99  model could not be fetched or parsed
    130 interrupted

Environment:
    BPMN_URL, HTTP_TIMEOUT_MS, HTTP_MAX_RETRIES, HTTP_RETRY_BACKOFF, LOG_LEVEL
"""

from __future__ import annotations

import argparse
import logging
import sys

from bpmn_pathfinder.bpmn import BpmnFetchError, BpmnParseError
from bpmn_pathfinder.config import (
    BPMN_URL,
    HTTP_MAX_RETRIES,
    HTTP_TIMEOUT_MS,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LOG_LEVEL,
)
from bpmn_pathfinder.library import ProcessPathLibrary

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_ERROR = 99
EXIT_INTERRUPTED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="bpmn-path",
        description="Find the shortest path between two BPMN nodes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument("start", help="Start node id")
    parser.add_argument("end", help="End node id")
    parser.add_argument(
        "--url",
        type=str,
        default=BPMN_URL,
        help="Endpoint returning the process definition XML (default: $BPMN_URL)",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=HTTP_TIMEOUT_MS,
        help=f"HTTP timeout in milliseconds (default: {HTTP_TIMEOUT_MS})",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=HTTP_MAX_RETRIES,
        help=f"Retries on connection errors (default: {HTTP_MAX_RETRIES})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    try:
        args = parse_args(argv)
    except SystemExit as e:
        # argparse exits with 2 on usage errors
        return EXIT_OK if e.code == 0 else EXIT_FAILURE

    log_level = logging.DEBUG if args.verbose else LOG_LEVEL
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )

    try:
        with ProcessPathLibrary(args.url, args.timeout_ms, args.max_retries) as lib:
            result = lib.find_path(args.start, args.end)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED
    except (BpmnFetchError, BpmnParseError) as e:
        logger.error(f"Error during path finding: {e}")
        return EXIT_ERROR

    print(result.to_json())
    return EXIT_OK if result.success else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
