"""
CLI commands for snowflow.
"""

from snowflow.cli.context import (
    add_context_command,
    list_contexts_command,
    use_context_command,
)
from snowflow.cli.describe import describe_component_command
from snowflow.cli.incidents import get_incidents_command

__all__ = [
    "add_context_command",
    "describe_component_command",
    "get_incidents_command",
    "list_contexts_command",
    "use_context_command",
]
