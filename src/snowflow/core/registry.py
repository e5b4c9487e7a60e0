from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List

from snowflow.core.component import Component

ComponentFactory = Callable[[], Component]


@dataclass(frozen=True)
class ComponentSpec:
    """Metadata describing a registered component."""

    name: str
    factory: ComponentFactory
    description: str | None = None


class ComponentRegistry:
    """Simple in-memory registry for host-pluggable components."""

    def __init__(self) -> None:
        self._components: Dict[str, ComponentSpec] = {}

    def register(
        self,
        name: str,
        factory: ComponentFactory,
        *,
        description: str | None = None,
    ) -> None:
        if not name:
            raise ValueError("Component name is required")
        self._components[name] = ComponentSpec(name=name, factory=factory, description=description)

    def create(self, name: str) -> Component:
        spec = self._components.get(name)
        if spec is None:
            raise KeyError(f"Component '{name}' is not registered")
        return spec.factory()

    def list(self) -> List[ComponentSpec]:
        return sorted(self._components.values(), key=lambda spec: spec.name)


component_registry = ComponentRegistry()


def register_component(
    name: str,
    factory: ComponentFactory,
    *,
    description: str | None = None,
) -> None:
    component_registry.register(name, factory, description=description)


def create_component(name: str) -> Component:
    return component_registry.create(name)


def list_components() -> List[ComponentSpec]:
    return component_registry.list()
