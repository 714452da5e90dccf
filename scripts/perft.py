#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import time
import os
import sys

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `loa/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from loa.engine.board import Board, STARTPOS_LAYOUT
from loa.engine.perft import perft


def main() -> None:
    parser = argparse.ArgumentParser(description="Count leaf positions for a layout and depth")
    parser.add_argument(
        "--layout", type=str, default=STARTPOS_LAYOUT, help="Layout string (default: start position)"
    )
    parser.add_argument("--depth", type=int, default=2, help="Perft depth (default: 2)")
    args = parser.parse_args()

    board = Board.from_layout(args.layout)
    start = time.perf_counter()
    nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
