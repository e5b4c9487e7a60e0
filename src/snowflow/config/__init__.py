"""
snowflow configuration.

- Pydantic-based runtime settings (environment variables, .env files)
- YAML-backed CLI connection contexts
"""

from snowflow.config.contexts import ConfigContext, ContextStore, get_config_path
from snowflow.config.settings import Settings, get_settings

__all__ = [
    "ConfigContext",
    "ContextStore",
    "Settings",
    "get_config_path",
    "get_settings",
]
