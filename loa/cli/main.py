from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn

from loa.protocol.http.app import create_app
from loa.search.service import DEFAULT_DEPTH


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the Lines of Action engine over HTTP")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_DEPTH,
        help=f"Default search depth in plies (default: {DEFAULT_DEPTH})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    if args.depth < 1:
        raise SystemExit("--depth must be >= 1")
    uvicorn.run(create_app(search_depth=args.depth), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
