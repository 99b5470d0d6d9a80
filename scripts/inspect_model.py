#!/usr/bin/env python3
"""
Fetch a BPMN model and print graph statistics.

Usage:
    python scripts/inspect_model.py
    python scripts/inspect_model.py --url http://localhost:8080/engine-rest/process-definition/key/invoice/xml
    python scripts/inspect_model.py --file model.bpmn --nodes
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Fix Windows console encoding for Unicode output
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bpmn_pathfinder.bpmn import BpmnFetcher, BpmnFetchError, BpmnParseError, parse_model  # noqa: E402
from bpmn_pathfinder.config import BPMN_URL  # noqa: E402
from bpmn_pathfinder.graph import ProcessGraph  # noqa: E402

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Print statistics for a BPMN model")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", type=str, default=BPMN_URL, help="Model endpoint (default: $BPMN_URL)")
    source.add_argument("--file", type=Path, default=None, help="Read BPMN XML from a local file instead")
    parser.add_argument("--nodes", action="store_true", help="List every node with its outgoing flows")
    return parser.parse_args()


def load_graph(args: argparse.Namespace) -> ProcessGraph:
    """Load the graph from a file or the remote endpoint."""
    if args.file is not None:
        print(f"Reading {args.file}...")
        return parse_model(args.file.read_text(encoding="utf-8"))

    print(f"Fetching {args.url}...")
    with BpmnFetcher(args.url) as fetcher:
        return parse_model(fetcher.fetch_xml())


def print_stats(graph: ProcessGraph) -> None:
    """Print node/edge counts and join gateway requirements."""
    print("\n=== Graph Statistics ===\n")
    for key, value in graph.stats().items():
        print(f"  {key}: {value:,}")

    joins = graph.join_gateways()
    if joins:
        print("\n=== Join Gateways ===\n")
        for node in joins:
            print(f"  {node.id} ({node.element_type}): waits for {node.incoming_count} incoming flows")


def print_nodes(graph: ProcessGraph) -> None:
    """Print every node with its outgoing targets in traversal order."""
    print("\n=== Nodes ===\n")
    for node in graph.values():
        label = f" \"{node.name}\"" if node.name else ""
        targets = ", ".join(edge.target for edge in node.outgoing) or "-"
        print(f"  {node.id} [{node.element_type}]{label} -> {targets}")


def main() -> int:
    args = parse_args()
    try:
        graph = load_graph(args)
    except (BpmnFetchError, BpmnParseError, OSError) as e:
        print(f"✗ Could not load model: {e}", file=sys.stderr)
        return 1

    print_stats(graph)
    if args.nodes:
        print_nodes(graph)

    if graph.stats()["dangling_edges"]:
        print("\n✗ Some flows point at unknown nodes; they are skipped during search")
    else:
        print("\n✓ All flows resolve to known nodes")
    return 0


if __name__ == "__main__":
    sys.exit(main())
