"""Model – SearchQuery, FilterSpec and SortSpec value objects."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = [
    "FilterKind",
    "FilterOperator",
    "FilterSpec",
    "SearchQuery",
    "SortOrder",
    "SortSpec",
]


class FilterKind(str, Enum):
    TERM = "term"
    TERMS = "terms"
    RANGE = "range"
    MATCH = "match"
    EXISTS = "exists"
    CUSTOM = "custom"


class FilterOperator(str, Enum):
    AND = "AND"
    OR = "OR"
    NOT = "NOT"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class FilterSpec:
    """A backend filter expression; at most one is active per ``field``."""

    field: str
    kind: FilterKind
    value: Any
    operator: FilterOperator | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "kind": self.kind.value,
            "value": self.value,
            "operator": self.operator.value if self.operator is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FilterSpec:
        operator = data.get("operator")
        return cls(
            field=data["field"],
            kind=FilterKind(data["kind"]),
            value=data.get("value"),
            operator=FilterOperator(operator) if operator else None,
        )


@dataclass(frozen=True)
class SortSpec:
    field: str
    order: SortOrder = SortOrder.ASC

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "order": self.order.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SortSpec:
        return cls(field=data["field"], order=SortOrder(data.get("order", "asc")))


@dataclass(frozen=True)
class SearchQuery:
    """Backend-facing query composed from the container's state.

    Instances compare by value, which is what the coordinator relies on to
    detect whether an auto-triggered query actually changed.
    """

    text: str = ""
    size: int = 10
    offset: int = 0
    sort: tuple[SortSpec, ...] = ()
    filters: tuple[FilterSpec, ...] = ()
    fields: tuple[str, ...] = ()

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "size": self.size,
            "offset": self.offset,
            "sort": [s.to_dict() for s in self.sort],
            "filters": [f.to_dict() for f in self.filters],
            "fields": list(self.fields),
        }
