"""
Local lifecycle driver for a single component instance.

Mirrors what the workflow host does: Setup once per configuration change,
Execute per trigger, Cancel to stop further scheduling. Used by the CLI and
by tests that exercise the whole lifecycle.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Mapping

import httpx
import structlog

from snowflow.core.component import (
    Component,
    ExecutionContext,
    IntegrationContext,
    SetupContext,
)
from snowflow.core.errors import LifecycleError
from snowflow.core.memory import ExecutionStateRecorder, MetadataStore
from snowflow.logging import bind_context

logger = structlog.get_logger()


class LifecycleState(StrEnum):
    """States a component instance moves through."""

    uninitialized = "uninitialized"
    configured = "configured"
    executing = "executing"
    completed = "completed"
    failed = "failed"
    cancelled = "cancelled"


_EXECUTABLE_STATES = (LifecycleState.configured, LifecycleState.completed, LifecycleState.failed)


@dataclass
class RunResult:
    """Outcome of one Execute call."""

    execution_id: str
    channel: str | None = None
    payload_type: str | None = None
    payloads: list[Any] = field(default_factory=list)
    duration_seconds: float = 0.0


class ComponentRunner:
    """Drives Setup / Execute / Cancel for one component instance."""

    def __init__(
        self,
        component: Component,
        configuration: Mapping[str, Any],
        *,
        http: httpx.Client,
        integration: IntegrationContext,
        metadata: MetadataStore | None = None,
    ) -> None:
        self._component = component
        self._configuration = dict(configuration)
        self._http = http
        self._integration = integration
        self.metadata = metadata or MetadataStore()
        self.state = LifecycleState.uninitialized

    def setup(self) -> None:
        if self.state is LifecycleState.cancelled:
            raise LifecycleError("component instance was cancelled")

        self._component.setup(
            SetupContext(
                configuration=self._configuration,
                http=self._http,
                integration=self._integration,
                metadata=self.metadata,
            )
        )
        if self.state is LifecycleState.uninitialized:
            self.state = LifecycleState.configured
        logger.debug("component_configured", component=self._component.name())

    def execute(self) -> RunResult:
        if self.state not in _EXECUTABLE_STATES:
            raise LifecycleError(
                f"cannot execute component in state '{self.state}'",
                details={"component": self._component.name()},
            )

        recorder = ExecutionStateRecorder()
        ctx = ExecutionContext(
            configuration=self._configuration,
            http=self._http,
            integration=self._integration,
            execution_state=recorder,
            metadata=self.metadata,
        )
        log = bind_context(component=self._component.name(), execution_id=ctx.execution_id)

        self.state = LifecycleState.executing
        start_ts = time.monotonic()
        try:
            self._component.execute(ctx)
        except Exception as exc:
            self.state = LifecycleState.failed
            log.error("execution_failed", error=str(exc))
            raise

        self.state = LifecycleState.completed
        result = RunResult(
            execution_id=ctx.execution_id,
            channel=recorder.channel,
            payload_type=recorder.payload_type,
            payloads=recorder.payloads,
            duration_seconds=time.monotonic() - start_ts,
        )
        log.info("execution_completed", channel=result.channel, duration=result.duration_seconds)
        return result

    def cancel(self) -> None:
        self._component.cancel(
            ExecutionContext(
                configuration=self._configuration,
                http=self._http,
                integration=self._integration,
                execution_state=ExecutionStateRecorder(),
                metadata=self.metadata,
            )
        )
        self.state = LifecycleState.cancelled
