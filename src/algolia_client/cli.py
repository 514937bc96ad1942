"""CLI entry point for the Algolia client."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="algolia-client",
        description="Algolia client — query indexes and wait for indexing tasks",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["json", "console"],
        default=None,
        help="Log format (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"algolia-client {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-indexes", help="List all indexes")

    search = subparsers.add_parser("search", help="Search a single index")
    search.add_argument("index", help="Index name")
    search.add_argument("query", help="Full-text query")
    search.add_argument("--hits-per-page", type=int, default=None, help="Number of hits per page")

    wait_task = subparsers.add_parser("wait-task", help="Wait until an indexing task is published")
    wait_task.add_argument("index", help="Index name")
    wait_task.add_argument("task_id", help="Task ID returned by a write operation")
    wait_task.add_argument("--poll-interval", type=float, default=None, help="Seconds between status checks")

    args = parser.parse_args(argv)

    # Load settings
    from algolia_client.config.settings import Settings

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    # Apply CLI overrides
    if args.log_level:
        settings.observability.log_level = args.log_level
    if args.log_format:
        settings.observability.log_format = args.log_format

    from algolia_client.observability.logging import setup_logging

    setup_logging(settings.observability)

    from algolia_client.client.client import AlgoliaClient
    from algolia_client.exceptions import AlgoliaError

    try:
        client = AlgoliaClient(settings=settings)
        result = _run_command(client, args)
    except AlgoliaError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2, ensure_ascii=False))


def _run_command(client: Any, args: argparse.Namespace) -> Any:
    if args.command == "list-indexes":
        return client.list_indexes()
    if args.command == "search":
        params: dict[str, Any] = {}
        if args.hits_per_page is not None:
            params["hitsPerPage"] = args.hits_per_page
        return client.search(args.index, args.query, **params)
    if args.command == "wait-task":
        return client.wait_task(args.index, args.task_id, poll_interval=args.poll_interval)
    raise ValueError(f"Unknown command: {args.command}")


def _get_version() -> str:
    """Get the package version."""
    try:
        from algolia_client import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
