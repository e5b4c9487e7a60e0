"""In-memory host contexts for local runs and tests."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence


class MetadataStore:
    """Process-local stand-in for host-persisted component metadata."""

    def __init__(self, initial: Any = None) -> None:
        self._value = copy.deepcopy(initial)
        self.write_count = 0

    def get(self) -> Any:
        return copy.deepcopy(self._value)

    def set(self, value: Any) -> None:
        self._value = copy.deepcopy(value)
        self.write_count += 1

    @property
    def value(self) -> Any:
        return self._value


@dataclass
class Emission:
    channel: str
    payload_type: str
    payloads: list[Any]


class ExecutionStateRecorder:
    """Records everything a component emits during execution."""

    def __init__(self) -> None:
        self.emissions: list[Emission] = []

    def emit(self, channel: str, payload_type: str, payloads: Sequence[Any]) -> None:
        self.emissions.append(Emission(channel, payload_type, list(payloads)))

    @property
    def passed(self) -> bool:
        return bool(self.emissions)

    @property
    def channel(self) -> str | None:
        return self.emissions[-1].channel if self.emissions else None

    @property
    def payload_type(self) -> str | None:
        return self.emissions[-1].payload_type if self.emissions else None

    @property
    def payloads(self) -> list[Any]:
        return self.emissions[-1].payloads if self.emissions else []


@dataclass
class StaticIntegration:
    """Integration connection backed by fixed config values and secrets."""

    config: Mapping[str, str] = field(default_factory=dict)
    secrets: Mapping[str, str] = field(default_factory=dict)

    def get_config(self, name: str) -> str:
        return self.config.get(name, "")

    def get_secret(self, name: str) -> str | None:
        return self.secrets.get(name)

    @classmethod
    def oauth(cls, instance_url: str, access_token: str) -> StaticIntegration:
        return cls(
            config={"instanceUrl": instance_url, "authType": "oauth"},
            secrets={"accessToken": access_token},
        )

    @classmethod
    def basic(cls, instance_url: str, username: str, password: str) -> StaticIntegration:
        return cls(
            config={"instanceUrl": instance_url, "authType": "basic", "username": username},
            secrets={"password": password},
        )
