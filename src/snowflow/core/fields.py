"""
Declarative configuration field metadata.

Components describe their configuration form as a list of ``Field`` values.
The host renders them and resolves cross-field parameter dependencies (for
example, user options scoped by the selected assignment group). Components
only ever receive the already-selected leaf values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Iterable


class FieldType(StrEnum):
    """Field kinds understood by the host UI."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    INTEGRATION_RESOURCE = "integration-resource"


@dataclass(frozen=True)
class ParameterValueFrom:
    """Reads a parameter value from another configuration field."""

    field: str


@dataclass(frozen=True)
class ParameterRef:
    """Named parameter passed to a resource lookup."""

    name: str
    value_from: ParameterValueFrom | None = None
    value: str | None = None


@dataclass(frozen=True)
class ResourceTypeOptions:
    """Options for fields whose values are integration resources."""

    type: str
    parameters: tuple[ParameterRef, ...] = ()


@dataclass(frozen=True)
class TypeOptions:
    resource: ResourceTypeOptions | None = None


@dataclass(frozen=True)
class Field:
    """A single configuration field declaration."""

    name: str
    label: str
    type: FieldType
    required: bool = False
    default: Any = None
    description: str = ""
    placeholder: str = ""
    type_options: TypeOptions | None = None

    def depends_on(self) -> list[str]:
        """Names of the fields this field's options are scoped by."""
        if self.type_options is None or self.type_options.resource is None:
            return []
        return [
            param.value_from.field
            for param in self.type_options.resource.parameters
            if param.value_from is not None
        ]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "type": str(self.type),
            "required": self.required,
        }
        if self.default is not None:
            data["default"] = self.default
        if self.description:
            data["description"] = self.description
        if self.placeholder:
            data["placeholder"] = self.placeholder
        if self.type_options is not None and self.type_options.resource is not None:
            resource = self.type_options.resource
            data["typeOptions"] = {
                "resource": {
                    "type": resource.type,
                    "parameters": [
                        {
                            "name": param.name,
                            **({"valueFrom": {"field": param.value_from.field}} if param.value_from else {}),
                            **({"value": param.value} if param.value is not None else {}),
                        }
                        for param in resource.parameters
                    ],
                }
            }
        return data


def resource_field(
    name: str,
    label: str,
    resource_type: str,
    *,
    description: str = "",
    placeholder: str = "",
    scoped_by: Iterable[str] = (),
) -> Field:
    """Build an optional integration-resource field."""
    parameters = tuple(
        ParameterRef(name=dependency, value_from=ParameterValueFrom(field=dependency))
        for dependency in scoped_by
    )
    return Field(
        name=name,
        label=label,
        type=FieldType.INTEGRATION_RESOURCE,
        required=False,
        description=description,
        placeholder=placeholder,
        type_options=TypeOptions(
            resource=ResourceTypeOptions(type=resource_type, parameters=parameters)
        ),
    )


def field_dependencies(fields: Iterable[Field]) -> dict[str, list[str]]:
    """
    Directed dependency graph over configuration fields.

    Maps each field name to the fields it depends on. Raises ``ValueError``
    when a dependency references an undeclared field.
    """
    fields = list(fields)
    declared = {f.name for f in fields}
    graph: dict[str, list[str]] = {}
    for f in fields:
        dependencies = f.depends_on()
        missing = [d for d in dependencies if d not in declared]
        if missing:
            raise ValueError(f"Field '{f.name}' depends on undeclared field(s): {', '.join(missing)}")
        graph[f.name] = dependencies
    return graph


__all__ = [
    "Field",
    "FieldType",
    "ParameterRef",
    "ParameterValueFrom",
    "ResourceTypeOptions",
    "TypeOptions",
    "field_dependencies",
    "resource_field",
]
