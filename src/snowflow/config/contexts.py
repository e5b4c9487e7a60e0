"""
CLI connection contexts.

A context names one ServiceNow instance plus the API token used to reach it.
Contexts live in a YAML file:

    contexts:
      - url: https://dev12345.service-now.com
        name: dev
        apiToken: ...
    currentContext: https://dev12345.service-now.com/dev

Search order for the file:
1. Explicit path
2. SNOWFLOW_CONFIG_PATH
3. ~/.snowflow/config.yaml
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
import yaml

from snowflow.config.settings import get_settings
from snowflow.core.errors import ContextError

logger = structlog.get_logger()

CONTEXTS_KEY = "contexts"
CURRENT_CONTEXT_KEY = "currentContext"


@dataclass(frozen=True)
class ConfigContext:
    url: str
    name: str = ""
    api_token: str = ""

    def normalized(self) -> ConfigContext:
        return ConfigContext(
            url=normalize_base_url(self.url),
            name=self.name.strip(),
            api_token=self.api_token.strip(),
        )

    @property
    def selector(self) -> str:
        context = self.normalized()
        return f"{context.url}/{context.name}"

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "name": self.name, "apiToken": self.api_token}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConfigContext:
        return cls(
            url=str(data.get("url") or ""),
            name=str(data.get("name") or ""),
            api_token=str(data.get("apiToken") or ""),
        )


def normalize_base_url(raw: str) -> str:
    return raw.strip().rstrip("/")


def normalize_selector(raw: str) -> str:
    """Normalize a ``url/name`` selector the same way contexts are normalized."""
    selector = raw.strip().rstrip("/")

    split_index = selector.rfind("/")
    if split_index <= 0 or split_index == len(selector) - 1:
        return selector

    base_url = normalize_base_url(selector[:split_index])
    name = selector[split_index + 1 :].strip()
    return f"{base_url}/{name}"


def get_config_path(explicit_path: str | Path | None = None) -> Path:
    if explicit_path:
        return Path(explicit_path)
    configured = get_settings().config_path
    if configured:
        return Path(configured)
    return Path.home() / ".snowflow" / "config.yaml"


class ContextStore:
    """Loads, normalizes and saves CLI connection contexts."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = get_config_path(path)
        self._data = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ContextError(f"failed to read configuration file {self.path}") from exc
        if not isinstance(data, dict):
            raise ContextError(f"configuration file {self.path} must contain a mapping")
        logger.debug("loaded_contexts", path=str(self.path))
        return data

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self.path, "w") as f:
                yaml.dump(self._data, f, default_flow_style=False, sort_keys=False)
        except OSError as exc:
            raise ContextError("failed to write configuration") from exc
        logger.info("saved_contexts", path=str(self.path))

    def contexts(self) -> list[ConfigContext]:
        """Configured contexts, normalized; entries without url or token are skipped."""
        raw = self._data.get(CONTEXTS_KEY) or []
        if not isinstance(raw, list):
            return []

        contexts = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            context = ConfigContext.from_dict(item).normalized()
            if not context.url or not context.api_token:
                continue
            contexts.append(context)
        return contexts

    def current(self) -> ConfigContext | None:
        selector = normalize_selector(str(self._data.get(CURRENT_CONTEXT_KEY) or ""))
        if not selector:
            return None
        for context in self.contexts():
            if context.selector == selector:
                return context
        return None

    def use(self, selector: str) -> ConfigContext:
        contexts = self.contexts()
        if not contexts:
            raise ContextError("no contexts configured")

        normalized = normalize_selector(selector)
        if not normalized:
            raise ContextError("context selector is required")

        for context in contexts:
            if context.selector == normalized:
                self._data[CURRENT_CONTEXT_KEY] = context.selector
                self.save()
                return context

        raise ContextError(f"context '{normalized}' not found")

    def upsert(self, context: ConfigContext) -> ConfigContext:
        """Add or replace a context and make it current."""
        context = context.normalized()
        if not context.url:
            raise ContextError("instance URL is required")
        if not context.api_token:
            raise ContextError("API token is required")

        contexts = self.contexts()
        for i, existing in enumerate(contexts):
            if existing.selector == context.selector:
                contexts[i] = context
                break
        else:
            contexts.append(context)

        self._data[CONTEXTS_KEY] = [c.to_dict() for c in contexts]
        self._data[CURRENT_CONTEXT_KEY] = context.selector
        self.save()
        return context
