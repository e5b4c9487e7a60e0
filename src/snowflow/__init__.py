"""snowflow: ServiceNow components for workflow-orchestration hosts."""

__version__ = "0.1.0"
