"""
Run the Get Incidents component against the current connection context.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from snowflow.cli.ux import console, error, header, info, print_key_value, print_table, success, warning
from snowflow.config.contexts import ContextStore
from snowflow.config.settings import get_settings
from snowflow.core.errors import ContextError, main_with_error_handling
from snowflow.core.memory import StaticIntegration
from snowflow.core.registry import create_component
from snowflow.core.runner import ComponentRunner
from snowflow.servicenow.get_incidents import COMPONENT_NAME
from snowflow.servicenow.routing import CHANNEL_NAME_CLEAR, CHANNEL_NAME_HIGH

_CHANNEL_STYLES = {
    CHANNEL_NAME_CLEAR: success,
    CHANNEL_NAME_HIGH: error,
}


@main_with_error_handling()
def get_incidents_command(
    filters: dict[str, Any],
    output_format: str = "text",
    config_path: str | None = None,
) -> int:
    """
    Query incidents and report which output channel the result routes to.

    Args:
        filters: Component configuration (camelCase keys, empty values dropped)
        output_format: "text" or "json"
        config_path: Optional contexts file path

    Returns:
        Exit code (0 = success)
    """
    context = ContextStore(config_path).current()
    if context is None:
        raise ContextError("no current context; run 'snowflow context add' first")

    configuration = {key: value for key, value in filters.items() if value not in (None, "")}
    settings = get_settings()

    with httpx.Client(timeout=settings.http_timeout) as http:
        runner = ComponentRunner(
            create_component(COMPONENT_NAME),
            configuration,
            http=http,
            integration=StaticIntegration.oauth(context.url, context.api_token),
        )
        runner.setup()
        result = runner.execute()

    payload = result.payloads[0] if result.payloads else {"incidents": [], "total": 0}

    if output_format == "json":
        console.print_json(json.dumps({"channel": result.channel, **payload}))
        return 0

    header("ServiceNow Incidents")
    print_key_value({"Instance": context.url, "Filters": json.dumps(configuration)})
    console.print()

    if payload["incidents"]:
        rows = [
            [
                incident["number"],
                incident["short_description"],
                incident["state"],
                incident["urgency"],
                incident["impact"],
            ]
            for incident in payload["incidents"]
        ]
        print_table("Incidents", ["Number", "Description", "State", "Urgency", "Impact"], rows)
    else:
        info("No incidents matched the filters")

    console.print()
    report = _CHANNEL_STYLES.get(result.channel or "", warning)
    report(f"{payload['total']} incident(s), routed to '{result.channel}'")
    return 0
