"""Root test configuration."""

import logging

import httpx
import pytest
import structlog

from snowflow.core.memory import ExecutionStateRecorder, MetadataStore, StaticIntegration
from snowflow.servicenow.get_incidents import GetIncidents

INSTANCE_URL = "https://dev12345.service-now.com"
ACCESS_TOKEN = "test-access-token"


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def http():
    """Host-owned HTTP client."""
    with httpx.Client() as client:
        yield client


@pytest.fixture
def integration():
    return StaticIntegration.oauth(INSTANCE_URL, ACCESS_TOKEN)


@pytest.fixture
def metadata():
    return MetadataStore()


@pytest.fixture
def execution_state():
    return ExecutionStateRecorder()


@pytest.fixture
def component():
    return GetIncidents()
