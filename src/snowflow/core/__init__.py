"""Component contract, host contexts and error taxonomy."""

from snowflow.core.component import (
    Action,
    ActionContext,
    Component,
    ExecutionContext,
    OutputChannel,
    SetupContext,
    WebhookRequestContext,
)
from snowflow.core.errors import (
    ClientConstructionError,
    ConfigurationDecodeError,
    ExternalCallError,
    ResourceVerificationError,
    SnowflowError,
)

__all__ = [
    "Action",
    "ActionContext",
    "ClientConstructionError",
    "Component",
    "ConfigurationDecodeError",
    "ExecutionContext",
    "ExternalCallError",
    "OutputChannel",
    "ResourceVerificationError",
    "SetupContext",
    "SnowflowError",
    "WebhookRequestContext",
]
