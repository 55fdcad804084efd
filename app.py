"""Unified entrypoint for CLI and HTTP service usage."""

from __future__ import annotations

import argparse
import logging

from logo_metrics.config import load_config
from logo_metrics.main import main as cli_main
from logo_metrics.server import create_app


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Logo metrics launcher")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Service host")
    serve_parser.add_argument("--port", type=int, default=5000, help="Service port")
    serve_parser.add_argument("--config", help="Optional JSON config path")
    serve_parser.add_argument("--directory-root", help="Only allow directory analysis below this path")
    serve_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    cli_parser = subparsers.add_parser("cli", help="Analyze a directory from the command line")
    cli_parser.add_argument("cli_args", nargs=argparse.REMAINDER, help="Arguments passed to the CLI")

    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    if args.command in (None, "serve"):
        host = getattr(args, "host", "127.0.0.1")
        port = getattr(args, "port", 5000)
        debug = bool(getattr(args, "debug", False))
        logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
        app = create_app(load_config(getattr(args, "config", None)), getattr(args, "directory_root", None))
        app.run(host=host, port=port, debug=debug)
        return

    if args.command == "cli":
        cli_main(args.cli_args)
        return

    raise SystemExit(f"Unknown command: {args.command}")


if __name__ == "__main__":
    main()
