"""
Unified error handling for snowflow components and CLI commands.

Every error carries a static, human-readable message describing the
operation that failed. Causes are chained with ``raise ... from exc`` so the
host sees both the context and the underlying failure. Nothing here retries;
retry policy belongs to the host.

Exit Codes (CLI only):
- 0: Success
- 10: Configuration error (decode failures, missing CLI context)
- 11: Provider error (ServiceNow call or client construction failed)
- 12: Validation error (a referenced resource could not be verified)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    PROVIDER_ERROR = 11
    VALIDATION_ERROR = 12
    UNKNOWN_ERROR = 127


class SnowflowError(Exception):
    """Base exception for snowflow errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        cause = self.__cause__
        if cause is not None and str(cause):
            return f"{self.message}: {cause}"
        return self.message


class ConfigurationDecodeError(SnowflowError):
    """Supplied configuration or metadata does not match the expected shape."""

    exit_code = ExitCode.CONFIG_ERROR


class ResourceVerificationError(SnowflowError):
    """A referenced identifier could not be confirmed to exist."""

    exit_code = ExitCode.VALIDATION_ERROR

    def __init__(self, message: str, field: str, details: dict[str, Any] | None = None):
        super().__init__(message, {"field": field, **(details or {})})
        self.field = field


class ExternalCallError(SnowflowError):
    """The incident list call failed."""

    exit_code = ExitCode.PROVIDER_ERROR


class ClientConstructionError(SnowflowError):
    """The integration connection could not produce a usable client."""

    exit_code = ExitCode.PROVIDER_ERROR


class ContextError(SnowflowError):
    """Raised for CLI connection context problems."""

    exit_code = ExitCode.CONFIG_ERROR


class LifecycleError(SnowflowError):
    """Raised when a component operation is invoked in the wrong state."""

    exit_code = ExitCode.UNKNOWN_ERROR


F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI commands that converts exceptions to exit codes.

    Usage:
        @main_with_error_handling()
        def my_command() -> int:
            return 0

    Exit codes:
        - SnowflowError subclasses: uses the error's exit_code
        - KeyboardInterrupt: returns 130
        - Other exceptions: returns 127
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except SnowflowError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=e.exit_code,
                        **e.details,
                    )
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: SnowflowError) -> str:
    """Format an error message for display to users."""
    msg = str(error)
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
