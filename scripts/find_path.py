#!/usr/bin/env python3
"""
Find the shortest path between two BPMN nodes from a source checkout.

Usage:
    python scripts/find_path.py StartEvent_1 invoiceProcessed
    python scripts/find_path.py StartEvent_1 invoiceProcessed --url http://localhost:8080/... -v

Same options as the installed `bpmn-path` command.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bpmn_pathfinder.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
