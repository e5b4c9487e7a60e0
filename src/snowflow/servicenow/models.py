"""Typed records exchanged with the host and with ServiceNow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from snowflow.core.errors import ConfigurationDecodeError

PAYLOAD_TYPE_INCIDENTS = "servicenow.incidents"


class ResourceInfo(BaseModel):
    """Canonical identity and display label of a resolved ServiceNow record."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str = ""


class NodeMetadata(BaseModel):
    """Host-persisted metadata of one component instance."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    webhook_url: str | None = Field(None, alias="webhookUrl")
    instance_url: str = Field("", alias="instanceUrl")
    assignment_group: ResourceInfo | None = Field(None, alias="assignmentGroup")
    assigned_to: ResourceInfo | None = Field(None, alias="assignedTo")
    caller: ResourceInfo | None = Field(None, alias="caller")

    def to_metadata(self) -> dict[str, Any]:
        """Host-storable form; unset references are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class GetIncidentsSpec(BaseModel):
    """Filters for one Get Incidents execution. Never persisted."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    assignment_group: str | None = Field(None, alias="assignmentGroup")
    assigned_to: str | None = Field(None, alias="assignedTo")
    caller: str | None = None
    category: str | None = None
    subcategory: str | None = None
    service: str | None = None
    state: str | None = None
    urgency: str | None = None
    impact: str | None = None
    priority: str | None = None
    limit: int | None = None


class IncidentRecord(BaseModel):
    """Read-only projection of a ServiceNow incident.

    Missing or null fields decode to empty strings; no further validation.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    sys_id: str = ""
    number: str = ""
    short_description: str = ""
    state: str = ""
    urgency: str = ""
    impact: str = ""
    sys_created_on: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


@dataclass(frozen=True)
class ResourceSpec:
    """Raw identifiers the resolver verifies."""

    assignment_group: str | None = None
    assigned_to: str | None = None
    caller: str | None = None


def decode_spec(configuration: Mapping[str, Any] | None) -> GetIncidentsSpec:
    """Decode host configuration into typed filters, rejecting shape mismatches."""
    if configuration is None:
        configuration = {}
    if not isinstance(configuration, Mapping):
        raise ConfigurationDecodeError(
            "error decoding configuration",
            details={"type": type(configuration).__name__},
        )
    try:
        return GetIncidentsSpec.model_validate(dict(configuration))
    except ValidationError as exc:
        raise ConfigurationDecodeError("error decoding configuration") from exc
