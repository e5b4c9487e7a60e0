"""
Describe a registered component: channels, fields and field dependencies.
"""

from __future__ import annotations

from snowflow.cli.ux import console, header, print_table
from snowflow.core.errors import SnowflowError, main_with_error_handling
from snowflow.core.fields import field_dependencies
from snowflow.core.registry import create_component, list_components


@main_with_error_handling()
def describe_component_command(name: str | None = None) -> int:
    if name is None:
        rows = [[spec.name, spec.description or ""] for spec in list_components()]
        print_table("Components", ["Name", "Description"], rows)
        return 0

    try:
        component = create_component(name)
    except KeyError as exc:
        raise SnowflowError(f"unknown component '{name}'") from exc

    header(component.label())
    console.print(component.description())
    console.print()

    print_table(
        "Output channels",
        ["Name", "Label", "Description"],
        [[c.name, c.label, c.description] for c in component.output_channels(None)],
    )

    fields = component.configuration()
    dependencies = field_dependencies(fields)
    print_table(
        "Configuration",
        ["Field", "Type", "Default", "Depends on"],
        [
            [
                f.name,
                str(f.type),
                "" if f.default is None else str(f.default),
                ", ".join(dependencies[f.name]),
            ]
            for f in fields
        ],
    )
    return 0
