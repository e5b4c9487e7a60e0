"""
Resource resolution.

Verifies the raw identifiers a user picked (assignment group, assigned-to
user, caller) against ServiceNow and returns their canonical ``{id, name}``.
Lookups run in order group -> assignee -> caller and stop at the first
failure; a failure means nothing is returned, so nothing gets persisted.
"""

from __future__ import annotations

from typing import Callable

import structlog

from snowflow.core.errors import ResourceVerificationError
from snowflow.servicenow.client import ServiceNowAPIError, ServiceNowClient
from snowflow.servicenow.models import NodeMetadata, ResourceInfo, ResourceSpec

logger = structlog.get_logger()


def _verify(
    lookup: Callable[[str], ResourceInfo],
    identifier: str | None,
    *,
    field: str,
    label: str,
) -> ResourceInfo | None:
    if not identifier:
        return None

    try:
        resource = lookup(identifier)
    except ServiceNowAPIError as exc:
        logger.warning(
            "resource_verification_failed",
            field=field,
            identifier=identifier,
            status=exc.status_code,
        )
        raise ResourceVerificationError(f"error verifying {label}", field=field) from exc

    logger.debug("resource_verified", field=field, id=resource.id, name=resource.name)
    return resource


def resolve_resource_metadata(client: ServiceNowClient, spec: ResourceSpec) -> NodeMetadata:
    """Verify every supplied identifier and build the metadata snapshot."""
    assignment_group = _verify(
        client.get_assignment_group,
        spec.assignment_group,
        field="assignmentGroup",
        label="assignment group",
    )
    assigned_to = _verify(
        client.get_user,
        spec.assigned_to,
        field="assignedTo",
        label="assigned to user",
    )
    caller = _verify(
        client.get_user,
        spec.caller,
        field="caller",
        label="caller",
    )

    return NodeMetadata(
        instance_url=client.instance_url,
        assignment_group=assignment_group,
        assigned_to=assigned_to,
        caller=caller,
    )
