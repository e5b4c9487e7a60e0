from __future__ import annotations

import argparse
import sys
from typing import Sequence

# Registers built-in components
import snowflow.servicenow  # noqa: F401
from snowflow.config.settings import get_settings
from snowflow.logging import configure_logging

# (flag, configuration key, help)
_FILTER_ARGS = (
    ("--assignment-group", "assignmentGroup", "Assignment group sys_id"),
    ("--assigned-to", "assignedTo", "Assigned user sys_id"),
    ("--caller", "caller", "Caller user sys_id"),
    ("--category", "category", "Incident category"),
    ("--subcategory", "subcategory", "Incident subcategory"),
    ("--service", "service", "Business service sys_id"),
    ("--state", "state", "State values, comma-separated (e.g. 1,2)"),
    ("--urgency", "urgency", "Urgency values, comma-separated"),
    ("--impact", "impact", "Impact values, comma-separated"),
    ("--priority", "priority", "Priority values, comma-separated"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snowflow", description="snowflow CLI")
    parser.add_argument("--config", dest="config_path", help="Path to contexts file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # context management
    context_parser = subparsers.add_parser("context", help="Manage ServiceNow connection contexts")
    context_subparsers = context_parser.add_subparsers(dest="context_command")

    add_parser = context_subparsers.add_parser("add", help="Add a context and make it current")
    add_parser.add_argument("--url", required=True, help="ServiceNow instance URL")
    add_parser.add_argument("--token", required=True, help="OAuth access token")
    add_parser.add_argument("--name", default="", help="Context name")

    use_parser = context_subparsers.add_parser("use", help="Switch the current context")
    use_parser.add_argument("selector", help="Context selector (url/name)")

    context_subparsers.add_parser("list", help="List configured contexts")

    # describe
    describe_parser = subparsers.add_parser("describe", help="Describe registered components")
    describe_parser.add_argument("component", nargs="?", help="Component name")

    # incidents
    incidents_parser = subparsers.add_parser("incidents", help="Query incidents and route by urgency")
    for flag, key, help_text in _FILTER_ARGS:
        incidents_parser.add_argument(flag, dest=key, help=help_text)
    incidents_parser.add_argument("--limit", type=int, default=10, help="Maximum incidents to return")
    incidents_parser.add_argument("--output", choices=["text", "json"], default="text", help="Output format")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level, json_format=settings.log_json)

    if args.command == "context":
        from snowflow.cli.context import (
            add_context_command,
            list_contexts_command,
            use_context_command,
        )

        if args.context_command == "add":
            sys.exit(add_context_command(args.url, args.token, name=args.name, config_path=args.config_path))
        if args.context_command == "use":
            sys.exit(use_context_command(args.selector, config_path=args.config_path))
        if args.context_command == "list":
            sys.exit(list_contexts_command(config_path=args.config_path))

    if args.command == "describe":
        from snowflow.cli.describe import describe_component_command

        sys.exit(describe_component_command(args.component))

    if args.command == "incidents":
        from snowflow.cli.incidents import get_incidents_command

        filters = {key: getattr(args, key) for _, key, _ in _FILTER_ARGS}
        filters["limit"] = args.limit
        sys.exit(get_incidents_command(filters, output_format=args.output, config_path=args.config_path))

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
