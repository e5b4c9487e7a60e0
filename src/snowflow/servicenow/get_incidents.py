"""Get Incidents component: query ServiceNow and route on urgency."""

from __future__ import annotations

import uuid
from http import HTTPStatus
from typing import Any

import structlog

from snowflow.core.component import (
    Action,
    ActionContext,
    ExecutionContext,
    OutputChannel,
    ProcessQueueContext,
    SetupContext,
    WebhookRequestContext,
)
from snowflow.core.errors import ClientConstructionError, ExternalCallError
from snowflow.core.fields import Field, FieldType, resource_field
from snowflow.core.registry import register_component
from snowflow.servicenow.client import ServiceNowAPIError, ServiceNowClient
from snowflow.servicenow.examples import example_output
from snowflow.servicenow.metadata import decode_node_metadata, should_resolve
from snowflow.servicenow.models import (
    PAYLOAD_TYPE_INCIDENTS,
    ResourceSpec,
    decode_spec,
)
from snowflow.servicenow.query import DEFAULT_LIMIT, build_query, effective_limit
from snowflow.servicenow.resolver import resolve_resource_metadata
from snowflow.servicenow.routing import OUTPUT_CHANNELS, determine_output_channel

logger = structlog.get_logger()

COMPONENT_NAME = "servicenow.getIncidents"

DOCUMENTATION = """The Get Incidents component queries ServiceNow for incidents and routes execution based on urgency levels.

## Use Cases

- **Health checks**: Check for active incidents and route based on severity
- **Incident monitoring**: Monitor incident status across assignment groups
- **Automated response**: Trigger workflows based on incident presence
- **Reporting**: Collect incident data for reporting or analysis

## Configuration

All filters are optional. Leave empty to query all incidents.

- **Assignment Group**: Filter by assignment group
- **Assigned To**: Filter by assigned user
- **Caller**: Filter by caller
- **Category**: Filter by category
- **Subcategory**: Filter by subcategory (depends on category)
- **Service**: Filter by business service
- **State**: Filter by incident state (comma-separated values allowed)
- **Urgency**: Filter by urgency level (comma-separated values allowed)
- **Impact**: Filter by impact level (comma-separated values allowed)
- **Priority**: Filter by priority level (comma-separated values allowed)
- **Limit**: Maximum number of incidents to return (default 10)

## Output Channels

- **Clear**: No incidents matched the filters
- **Low**: Incidents found, but none are high urgency
- **High**: At least one high-urgency incident found

## Output

Returns a list of incidents with:
- **sys_id**: Unique identifier
- **number**: Human-readable incident number
- **short_description**: Incident summary
- **state**: Current state
- **urgency**: Urgency level
- **impact**: Impact level"""


def _client(ctx: SetupContext | ExecutionContext) -> ServiceNowClient:
    try:
        return ServiceNowClient.from_integration(ctx.http, ctx.integration)
    except ClientConstructionError as exc:
        raise ClientConstructionError("error creating client", details=exc.details) from exc


class GetIncidents:
    """Query ServiceNow for incidents and emit to clear / low / high."""

    def name(self) -> str:
        return COMPONENT_NAME

    def label(self) -> str:
        return "Get Incidents"

    def description(self) -> str:
        return "Query ServiceNow for incidents matching the specified filters"

    def documentation(self) -> str:
        return DOCUMENTATION

    def icon(self) -> str:
        return "servicenow"

    def color(self) -> str:
        return "gray"

    def output_channels(self, configuration: Any) -> list[OutputChannel]:
        return list(OUTPUT_CHANNELS)

    def configuration(self) -> list[Field]:
        return [
            resource_field(
                "assignmentGroup",
                "Assignment Group",
                "assignment_group",
                description="Filter incidents by assignment group",
                placeholder="Select an assignment group",
            ),
            resource_field(
                "assignedTo",
                "Assigned To",
                "user",
                description="Filter incidents by assigned user",
                placeholder="Select a user",
                scoped_by=("assignmentGroup",),
            ),
            resource_field(
                "caller",
                "Caller",
                "user",
                description="Filter incidents by caller",
                placeholder="Select a user",
            ),
            resource_field(
                "category",
                "Category",
                "category",
                description="Filter incidents by category",
                placeholder="Select a category",
            ),
            resource_field(
                "subcategory",
                "Subcategory",
                "subcategory",
                description="Filter incidents by subcategory",
                placeholder="Select a subcategory",
                scoped_by=("category",),
            ),
            resource_field(
                "service",
                "Service",
                "service",
                description="Filter incidents by business service",
                placeholder="Select a service",
            ),
            resource_field(
                "state",
                "State",
                "state",
                description="Filter incidents by state",
                placeholder="Select a state",
            ),
            resource_field(
                "urgency",
                "Urgency",
                "urgency",
                description="Filter incidents by urgency",
                placeholder="Select an urgency",
            ),
            resource_field(
                "impact",
                "Impact",
                "impact",
                description="Filter incidents by impact",
                placeholder="Select an impact",
            ),
            resource_field(
                "priority",
                "Priority",
                "priority",
                description="Filter incidents by priority",
                placeholder="Select a priority",
            ),
            Field(
                name="limit",
                label="Limit",
                type=FieldType.NUMBER,
                required=False,
                default=DEFAULT_LIMIT,
                description="Maximum number of incidents to return",
            ),
        ]

    def example_output(self) -> dict[str, Any]:
        return example_output("example_output_get_incidents.json")

    def setup(self, ctx: SetupContext) -> None:
        existing = decode_node_metadata(ctx.metadata.get())
        if not should_resolve(existing):
            logger.debug("setup_skipped", component=COMPONENT_NAME, instance_url=existing.instance_url)
            return

        spec = decode_spec(ctx.configuration)
        client = _client(ctx)

        metadata = resolve_resource_metadata(
            client,
            ResourceSpec(
                assignment_group=spec.assignment_group,
                assigned_to=spec.assigned_to,
                caller=spec.caller,
            ),
        )

        ctx.metadata.set(metadata.to_metadata())
        logger.info("setup_completed", component=COMPONENT_NAME, instance_url=metadata.instance_url)

    def execute(self, ctx: ExecutionContext) -> None:
        spec = decode_spec(ctx.configuration)
        client = _client(ctx)

        query = build_query(spec)
        limit = effective_limit(spec.limit)
        log = logger.bind(component=COMPONENT_NAME, execution_id=ctx.execution_id)

        try:
            incidents = client.get_incidents(query, limit)
        except ServiceNowAPIError as exc:
            log.warning("incidents_fetch_failed", status=exc.status_code)
            raise ExternalCallError(
                "failed to get incidents",
                details={"status": exc.status_code} if exc.status_code else None,
            ) from exc

        channel = determine_output_channel(incidents)
        log.info("incidents_fetched", total=len(incidents), channel=channel, limit=limit)

        response_data = {
            "incidents": [incident.model_dump() for incident in incidents],
            "total": len(incidents),
        }
        ctx.execution_state.emit(channel, PAYLOAD_TYPE_INCIDENTS, [response_data])

    def cancel(self, ctx: ExecutionContext) -> None:
        return None

    def process_queue_item(self, ctx: ProcessQueueContext) -> uuid.UUID | None:
        return ctx.default_processing()

    def actions(self) -> list[Action]:
        return []

    def handle_action(self, ctx: ActionContext) -> None:
        return None

    def handle_webhook(self, ctx: WebhookRequestContext) -> int:
        return HTTPStatus.OK

    def cleanup(self, ctx: SetupContext) -> None:
        return None


register_component(
    COMPONENT_NAME,
    GetIncidents,
    description="Query ServiceNow incidents and route on urgency",
)

__all__ = ["COMPONENT_NAME", "GetIncidents"]
