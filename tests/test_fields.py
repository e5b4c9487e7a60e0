"""Tests for core/fields.py."""

import pytest

from snowflow.core.fields import (
    Field,
    FieldType,
    field_dependencies,
    resource_field,
)


class TestResourceField:
    """Tests for resource_field."""

    def test_builds_optional_resource_field(self):
        f = resource_field("caller", "Caller", "user", placeholder="Select a user")

        assert f.type is FieldType.INTEGRATION_RESOURCE
        assert f.required is False
        assert f.type_options.resource.type == "user"
        assert f.depends_on() == []

    def test_scoped_field_reads_parameter_from_other_field(self):
        f = resource_field("assignedTo", "Assigned To", "user", scoped_by=("assignmentGroup",))

        param = f.type_options.resource.parameters[0]
        assert param.name == "assignmentGroup"
        assert param.value_from.field == "assignmentGroup"
        assert f.depends_on() == ["assignmentGroup"]


class TestToDict:
    """Tests for Field.to_dict."""

    def test_plain_field(self):
        f = Field(name="limit", label="Limit", type=FieldType.NUMBER, default=10)

        assert f.to_dict() == {
            "name": "limit",
            "label": "Limit",
            "type": "number",
            "required": False,
            "default": 10,
        }

    def test_resource_field_includes_type_options(self):
        f = resource_field(
            "subcategory",
            "Subcategory",
            "subcategory",
            description="Filter incidents by subcategory",
            scoped_by=("category",),
        )

        data = f.to_dict()
        assert data["type"] == "integration-resource"
        assert data["description"] == "Filter incidents by subcategory"
        assert data["typeOptions"] == {
            "resource": {
                "type": "subcategory",
                "parameters": [{"name": "category", "valueFrom": {"field": "category"}}],
            }
        }
        assert "placeholder" not in data


class TestFieldDependencies:
    """Tests for field_dependencies."""

    def test_builds_graph(self):
        fields = [
            resource_field("category", "Category", "category"),
            resource_field("subcategory", "Subcategory", "subcategory", scoped_by=("category",)),
        ]

        assert field_dependencies(fields) == {"category": [], "subcategory": ["category"]}

    def test_undeclared_dependency_raises(self):
        fields = [resource_field("assignedTo", "Assigned To", "user", scoped_by=("assignmentGroup",))]

        with pytest.raises(ValueError, match="assignmentGroup"):
            field_dependencies(fields)
