"""Facets – configuration, option, value and state types."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from mp_search.config.validation import InvalidSettingValueError
from mp_search.model import AggregationStats, FilterOperator, FilterSpec

__all__ = [
    "DEFAULT_VISIBLE_COUNT",
    "FacetChangeEvent",
    "FacetConfig",
    "FacetKey",
    "FacetKind",
    "FacetOption",
    "FacetSort",
    "FacetState",
    "FacetValue",
]

FacetKey = Union[str, int, float]

DEFAULT_VISIBLE_COUNT = 10


class FacetKind(str, Enum):
    """Kinds with a built-in filter strategy; ``FacetConfig.kind`` is open."""

    TEXT = "text"
    TEXT_TYPEAHEAD = "text-typeahead"
    NUMBER = "number"
    NUMBER_RANGE = "number-range"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    TOGGLE = "toggle"
    RANGE = "range"
    SLIDER = "slider"
    DATE_RANGE = "date-range"
    HIERARCHICAL = "hierarchical"
    CUSTOM = "custom"


class FacetSort(str, Enum):
    COUNT = "count"
    KEY = "key"
    CUSTOM = "custom"


@dataclass(frozen=True)
class FacetOption:
    """A statically configured choice shown before any aggregation arrives."""

    key: FacetKey
    label: str
    count: int = 0
    disabled: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FacetValue:
    key: FacetKey
    label: str
    count: int = 0
    selected: bool = False
    disabled: bool = False


@dataclass(frozen=True)
class FacetConfig:
    """Declarative description of one facet.

    ``kind`` accepts a :class:`FacetKind` or any string; it is stored as a
    plain string so custom kinds and built-in kinds look up the same way.

    Raises:
        InvalidSettingValueError: When ``id``, ``field`` or ``label`` is
            empty or ``max_values`` is below 1.
    """

    id: str
    field: str
    label: str
    kind: str = FacetKind.CHECKBOX.value
    collapsible: bool = True
    collapsed: bool = False
    sort_by: FacetSort = FacetSort.COUNT
    max_values: int | None = None
    static_options: tuple[FacetOption, ...] = ()
    operator: FilterOperator = FilterOperator.OR

    def __post_init__(self) -> None:
        for name in ("id", "field", "label"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidSettingValueError(name, value, "must be a non-empty string")
        if self.max_values is not None and self.max_values < 1:
            raise InvalidSettingValueError("max_values", self.max_values, "must be at least 1")
        kind = self.kind.value if isinstance(self.kind, Enum) else str(self.kind)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "sort_by", FacetSort(self.sort_by))
        object.__setattr__(self, "operator", FilterOperator(self.operator))
        object.__setattr__(self, "static_options", tuple(self.static_options))


@dataclass(frozen=True)
class FacetState:
    """Current values and selection of one registered facet.

    ``selected_values`` is ordered and duplicate-free; range facets rely on
    the order (``(min, max)``). Keys absent from ``values`` are inert: they
    stay selected but are not displayed.
    """

    config: FacetConfig
    values: tuple[FacetValue, ...] = ()
    selected_values: tuple[FacetKey, ...] = ()
    collapsed: bool = False
    loading: bool = False
    visible_count: int = DEFAULT_VISIBLE_COUNT
    stats: AggregationStats | None = None

    @property
    def has_selection(self) -> bool:
        return bool(self.selected_values)

    @property
    def selection_count(self) -> int:
        return len(self.selected_values)

    @property
    def inert_selections(self) -> tuple[FacetKey, ...]:
        keys = {v.key for v in self.values}
        return tuple(k for k in self.selected_values if k not in keys)

    def is_selected(self, key: FacetKey) -> bool:
        return key in self.selected_values


@dataclass(frozen=True)
class FacetChangeEvent:
    facet_id: str
    selected_values: tuple[FacetKey, ...]
    previous_values: tuple[FacetKey, ...]
    config: FacetConfig
    derived_filter: FilterSpec | None
