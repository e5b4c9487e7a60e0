"""
Component execution contract.

A component is a pluggable unit the workflow host drives through
``setup`` / ``execute`` / ``cancel``. The host owns scheduling, persistence,
credentials and webhook delivery; it hands the component small context
objects that expose exactly those collaborators.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence

import httpx

from snowflow.core.fields import Field


@dataclass(frozen=True)
class OutputChannel:
    """Named output a component can emit to."""

    name: str
    label: str
    description: str = ""


@dataclass(frozen=True)
class Action:
    """User-triggerable action exposed by a component."""

    name: str
    description: str = ""


class MetadataContext(Protocol):
    """Host-persisted, component-instance-scoped metadata."""

    def get(self) -> Any:
        ...

    def set(self, value: Any) -> None:
        ...


class ExecutionStateContext(Protocol):
    """Host sink for execution results."""

    def emit(self, channel: str, payload_type: str, payloads: Sequence[Any]) -> None:
        ...


class IntegrationContext(Protocol):
    """Host-managed connection to an external system."""

    def get_config(self, name: str) -> str:
        ...

    def get_secret(self, name: str) -> str | None:
        ...


class ProcessQueueContext(Protocol):
    def default_processing(self) -> uuid.UUID | None:
        ...


@dataclass
class SetupContext:
    configuration: Mapping[str, Any]
    http: httpx.Client
    integration: IntegrationContext
    metadata: MetadataContext


@dataclass
class ExecutionContext:
    configuration: Mapping[str, Any]
    http: httpx.Client
    integration: IntegrationContext
    execution_state: ExecutionStateContext
    metadata: MetadataContext | None = None
    execution_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class ActionContext:
    name: str
    parameters: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class WebhookRequestContext:
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)


class Component(Protocol):
    """Contract every pluggable component implements."""

    def name(self) -> str:
        ...

    def label(self) -> str:
        ...

    def description(self) -> str:
        ...

    def documentation(self) -> str:
        ...

    def icon(self) -> str:
        ...

    def color(self) -> str:
        ...

    def output_channels(self, configuration: Any) -> list[OutputChannel]:
        ...

    def configuration(self) -> list[Field]:
        ...

    def example_output(self) -> dict[str, Any]:
        ...

    def setup(self, ctx: SetupContext) -> None:
        ...

    def execute(self, ctx: ExecutionContext) -> None:
        ...

    def cancel(self, ctx: ExecutionContext) -> None:
        ...

    def process_queue_item(self, ctx: ProcessQueueContext) -> uuid.UUID | None:
        ...

    def actions(self) -> list[Action]:
        ...

    def handle_action(self, ctx: ActionContext) -> None:
        ...

    def handle_webhook(self, ctx: WebhookRequestContext) -> int:
        ...

    def cleanup(self, ctx: SetupContext) -> None:
        ...
