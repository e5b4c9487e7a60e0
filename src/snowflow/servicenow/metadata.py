"""
Metadata cache gate.

Resolving referenced ServiceNow records is costly and Setup may run many
times for the same component instance. The first successful Setup writes a
snapshot anchored on the instance URL; while that anchor is present, Setup
does nothing.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from snowflow.core.errors import ConfigurationDecodeError
from snowflow.servicenow.models import NodeMetadata


def decode_node_metadata(raw: Any) -> NodeMetadata:
    """Decode whatever the host metadata store holds for this instance."""
    if raw is None:
        return NodeMetadata()
    if isinstance(raw, NodeMetadata):
        return raw
    if not isinstance(raw, Mapping):
        raise ConfigurationDecodeError(
            "failed to decode node metadata",
            details={"type": type(raw).__name__},
        )
    try:
        return NodeMetadata.model_validate(dict(raw))
    except ValidationError as exc:
        raise ConfigurationDecodeError("failed to decode node metadata") from exc


def should_resolve(existing: NodeMetadata) -> bool:
    """True until a snapshot with an instance URL has been stored."""
    return not existing.instance_url
