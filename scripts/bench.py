#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import os
import platform
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, List

# Ensure repo root (which contains `loa/`) is importable when running directly
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from loa.engine.board import Board, STARTPOS_LAYOUT
from loa.search.service import DEFAULT_DEPTH, SearchService


@dataclass
class BenchItem:
    id: str
    layout: str


DEFAULT_POSITIONS = [
    BenchItem("startpos", STARTPOS_LAYOUT),
    BenchItem(
        "midgame",
        "--b-----/w--bb--w/w-b--w-w/--wb---w/w--b-b--/w-----bw/--w-b---/--bb---- w",
    ),
]


def load_positions(path: str) -> List[BenchItem]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return [
        BenchItem(id=str(obj.get("id", "pos")), layout=str(obj["layout"]))
        for obj in data.get("positions", [])
    ]


def bench_position(svc: SearchService, item: BenchItem, depth: int, iterations: int) -> Dict[str, Any]:
    try:
        board = Board.from_layout(item.layout)
    except ValueError as e:
        raise ValueError(f"Invalid layout for {item.id}: {e}")

    total_time = 0
    total_nodes = 0
    res = None
    for _ in range(max(1, iterations)):
        res = svc.search(board, depth=depth)
        total_time += res.time_ms
        total_nodes += res.nodes
    assert res is not None

    avg_time = total_time // max(1, iterations)
    avg_nodes = total_nodes // max(1, iterations)
    return {
        "id": item.id,
        "layout": item.layout,
        "depth": res.depth,
        "best_move": res.best_move.to_str() if res.best_move else None,
        "score": res.score,
        "time_ms": avg_time,
        "nodes": avg_nodes,
        "nps": int(avg_nodes * 1000 / max(1, avg_time)),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Time the search over a set of positions")
    parser.add_argument("--positions", default=None, help="Path to positions.json ({'positions': [{id, layout}]})")
    parser.add_argument("--depth", type=int, default=DEFAULT_DEPTH, help="Search depth per position")
    parser.add_argument("--iterations", type=int, default=1, help="Repeat runs per position and average")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    args = parser.parse_args()

    items = load_positions(args.positions) if args.positions else DEFAULT_POSITIONS
    if not items:
        raise SystemExit("No positions found in positions file")

    svc = SearchService()
    t0 = time.perf_counter()
    results = [bench_position(svc, it, args.depth, args.iterations) for it in items]
    dt_ms = int((time.perf_counter() - t0) * 1000)

    payload = {
        "meta": {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "python": sys.version.split()[0],
            "platform": platform.platform(),
            "depth": args.depth,
            "iterations": max(1, args.iterations),
        },
        "results": results,
        "summary": {
            "positions": len(results),
            "total_time_ms": dt_ms,
            "total_nodes": sum(r["nodes"] for r in results),
        },
    }
    print(json.dumps(payload, indent=2 if args.pretty else None))


if __name__ == "__main__":
    main()
