#!/usr/bin/env python3
"""
Command-line interface for the registration lifecycle notifier.

Usage:
    uv run python cli.py [command] [options]

Commands:
    run         Execute the trigger over a host batch file
    demo        Run the demo scenario
    labels      Show the state label table
    test        Run the test suite
    serve       Start the API server

Examples:
    uv run python cli.py run data/sample_batch.json
    uv run python cli.py demo
    uv run python cli.py labels
    uv run python cli.py serve
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path

from pydantic import ValidationError


def run_batch(batch_file: Path, users_file: Path = None) -> None:
    """Execute the trigger over a JSON batch document."""
    from lifecycle_trigger.events import batch_from_records
    from lifecycle_trigger.trigger import RegistrationLifecycleTrigger
    from registry.directory import UserDirectory
    from registry.settings import configure_logging, get_settings
    from registry.transport import InMemoryTransport

    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        with open(batch_file, "r") as f:
            document = json.load(f)
        events = batch_from_records(document, field_map=settings.field_map)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"Cannot read batch {batch_file}: {e}")
        sys.exit(1)

    trigger = RegistrationLifecycleTrigger(
        settings=settings,
        directory=UserDirectory(users_file=users_file or settings.users_file),
        transport=InMemoryTransport(),
    )
    report = trigger.execute(events)

    print("\nOutcomes:")
    for outcome in report.outcomes:
        print(f"  {outcome}")
    print(f"\n{report.sent} sent, {report.failed} failed, {len(report.outcomes)} processed")


def run_demo() -> None:
    """Run the demo scenario."""
    from lifecycle_trigger.demo import run_lifecycle_demo
    run_lifecycle_demo()


def show_labels() -> None:
    """Print the state label table in effect."""
    from registry.settings import get_settings

    labels = get_settings().state_labels
    width = max(len(code) for code in labels)
    for code, label in labels.items():
        print(f"  {code:<{width}}  {label}")


def run_tests(args: list[str]) -> None:
    """Run the test suite."""
    cmd = ["uv", "run", "pytest"] + args
    subprocess.run(cmd)


def run_server(host: str, port: int, reload: bool) -> None:
    """Start the API server."""
    cmd = ["uv", "run", "uvicorn", "api.main:app", f"--host={host}", f"--port={port}"]
    if reload:
        cmd.append("--reload")

    print(f"Starting server at http://{host}:{port}")
    print(f"API docs available at http://{host}:{port}/docs")
    subprocess.run(cmd)


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Registration Lifecycle Notifier CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s run data/sample_batch.json
  %(prog)s run batch.json --users-file users.json
  %(prog)s demo
  %(prog)s labels
  %(prog)s test -v
  %(prog)s serve --reload
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Run command
    run_parser = subparsers.add_parser("run", help="Execute the trigger over a batch file")
    run_parser.add_argument("batch_file", type=Path, help="JSON batch of record changes")
    run_parser.add_argument(
        "--users-file",
        type=Path,
        default=None,
        help="JSON user directory (defaults to LIFECYCLE_USERS_FILE)",
    )

    # Demo command
    subparsers.add_parser("demo", help="Run the demo scenario")

    # Labels command
    subparsers.add_parser("labels", help="Show the state label table")

    # Test command
    test_parser = subparsers.add_parser("test", help="Run the test suite")
    test_parser.add_argument(
        "pytest_args",
        nargs="*",
        default=[],
        help="Arguments to pass to pytest",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    if args.command == "run":
        run_batch(args.batch_file, args.users_file)
    elif args.command == "demo":
        run_demo()
    elif args.command == "labels":
        show_labels()
    elif args.command == "test":
        run_tests(args.pytest_args)
    elif args.command == "serve":
        run_server(args.host, args.port, args.reload)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
