"""ServiceNow encoded-query construction."""

from __future__ import annotations

from snowflow.servicenow.models import GetIncidentsSpec

DEFAULT_LIMIT = 10

# (spec attribute, ServiceNow column, operator), in clause order.
_CLAUSES: tuple[tuple[str, str, str], ...] = (
    ("assignment_group", "assignment_group", "="),
    ("assigned_to", "assigned_to", "="),
    ("caller", "caller_id", "="),
    ("category", "category", "="),
    ("subcategory", "subcategory", "="),
    ("service", "business_service", "="),
    ("state", "state", "IN"),
    ("urgency", "urgency", "IN"),
    ("impact", "impact", "IN"),
    ("priority", "priority", "IN"),
)


def build_query(spec: GetIncidentsSpec) -> str:
    """
    Render filters as a ServiceNow encoded query.

    Equality filters become ``column=value``; list filters become
    ``columnINvalue`` with the value passed through untouched (``1,2``).
    Clauses are ANDed with ``^``; empty filters contribute nothing.
    """
    parts = []
    for attribute, column, operator in _CLAUSES:
        value = getattr(spec, attribute)
        if value:
            parts.append(f"{column}{operator}{value}")
    return "^".join(parts)


def effective_limit(limit: int | None) -> int:
    if limit is None or limit <= 0:
        return DEFAULT_LIMIT
    return limit
