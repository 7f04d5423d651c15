"""Unit tests for InMemorySearchAdapter."""

from __future__ import annotations

import asyncio

from mp_search.adapters import (
    InMemorySearchAdapter,
    SearchAdapter,
    SuggestOptions,
    SupportsDestroy,
    SupportsGetById,
    SupportsReadiness,
    SupportsSuggest,
)
from mp_search.model import (
    FilterKind,
    FilterOperator,
    FilterSpec,
    SearchQuery,
    SortOrder,
    SortSpec,
)

DOCS = [
    {"id": "1", "title": "Red Shoes", "price": 50, "brand": "Nike", "tags": ["sport", "red"]},
    {"id": "2", "title": "Blue Bag", "price": 120, "brand": "Adidas", "tags": ["travel"]},
    {"id": "3", "title": "Red Hat", "price": 30, "brand": "Nike", "tags": ["red"], "sale": True},
    {"id": "4", "title": "Green Jacket", "price": 200, "brand": "Puma", "tags": ["sport"]},
]


def _adapter(**kwargs) -> InMemorySearchAdapter[dict]:
    return InMemorySearchAdapter(DOCS, **kwargs)


def _ids(query: SearchQuery, **kwargs) -> list[str]:
    response = asyncio.run(_adapter(**kwargs).search(query))
    return [r.id for r in response.results]


class TestProtocols:
    def test_supports_every_capability(self) -> None:
        adapter = _adapter()
        assert isinstance(adapter, SearchAdapter)
        assert isinstance(adapter, SupportsSuggest)
        assert isinstance(adapter, SupportsGetById)
        assert isinstance(adapter, SupportsReadiness)
        assert isinstance(adapter, SupportsDestroy)


class TestText:
    def test_case_insensitive_match(self) -> None:
        assert _ids(SearchQuery(text="RED")) == ["1", "3"]

    def test_empty_text_returns_all(self) -> None:
        response = asyncio.run(_adapter().search(SearchQuery()))
        assert response.total == 4

    def test_fields_restrict_match(self) -> None:
        assert _ids(SearchQuery(text="nike", fields=("title",))) == []
        assert _ids(SearchQuery(text="nike", fields=("brand",))) == ["1", "3"]


class TestFilters:
    def test_term(self) -> None:
        assert _ids(SearchQuery(filters=(FilterSpec("brand", FilterKind.TERM, "Nike"),))) == ["1", "3"]

    def test_term_against_list_field(self) -> None:
        assert _ids(SearchQuery(filters=(FilterSpec("tags", FilterKind.TERM, "sport"),))) == ["1", "4"]

    def test_terms_or(self) -> None:
        spec = FilterSpec("brand", FilterKind.TERMS, ["Nike", "Puma"], FilterOperator.OR)
        assert _ids(SearchQuery(filters=(spec,))) == ["1", "3", "4"]

    def test_terms_and(self) -> None:
        spec = FilterSpec("tags", FilterKind.TERMS, ["sport", "red"], FilterOperator.AND)
        assert _ids(SearchQuery(filters=(spec,))) == ["1"]

    def test_terms_not(self) -> None:
        spec = FilterSpec("brand", FilterKind.TERMS, ["Nike"], FilterOperator.NOT)
        assert _ids(SearchQuery(filters=(spec,))) == ["2", "4"]

    def test_range(self) -> None:
        spec = FilterSpec("price", FilterKind.RANGE, {"gte": 50, "lte": 120})
        assert _ids(SearchQuery(filters=(spec,))) == ["1", "2"]

    def test_exclusive_range(self) -> None:
        spec = FilterSpec("price", FilterKind.RANGE, {"gt": 50, "lt": 200})
        assert _ids(SearchQuery(filters=(spec,))) == ["2"]

    def test_match(self) -> None:
        assert _ids(SearchQuery(filters=(FilterSpec("title", FilterKind.MATCH, "jack"),))) == ["4"]

    def test_exists(self) -> None:
        assert _ids(SearchQuery(filters=(FilterSpec("sale", FilterKind.EXISTS, True),))) == ["3"]
        assert len(_ids(SearchQuery(filters=(FilterSpec("sale", FilterKind.EXISTS, False),)))) == 3

    def test_custom_callable(self) -> None:
        spec = FilterSpec("price", FilterKind.CUSTOM, lambda doc: doc["price"] % 100 == 0)
        assert _ids(SearchQuery(filters=(spec,))) == ["4"]

    def test_filters_combine(self) -> None:
        query = SearchQuery(
            text="red",
            filters=(FilterSpec("price", FilterKind.RANGE, {"lte": 40}),),
        )
        assert _ids(query) == ["3"]


class TestSortAndPagination:
    def test_sort_desc(self) -> None:
        assert _ids(SearchQuery(sort=(SortSpec("price", SortOrder.DESC),))) == ["4", "2", "1", "3"]

    def test_multi_field_sort(self) -> None:
        query = SearchQuery(sort=(SortSpec("brand"), SortSpec("price", SortOrder.DESC)))
        assert _ids(query) == ["2", "1", "3", "4"]

    def test_missing_values_sort_last(self) -> None:
        assert _ids(SearchQuery(sort=(SortSpec("sale"),)))[-1] != "3"
        assert _ids(SearchQuery(sort=(SortSpec("sale"),)))[0] == "3"

    def test_offset_and_size(self) -> None:
        response = asyncio.run(_adapter().search(SearchQuery(size=2, offset=2, sort=(SortSpec("price"),))))
        assert [r.id for r in response.results] == ["2", "4"]
        assert response.total == 4
        assert response.took is not None


class TestAggregations:
    def test_terms_for_facet_fields(self) -> None:
        adapter = _adapter(facet_fields=("brand", "tags"))
        response = asyncio.run(adapter.search(SearchQuery(text="red")))
        brand = response.aggregations["brand"]
        assert [(b.key, b.count) for b in brand.buckets] == [("Nike", 2)]
        tags = {b.key: b.count for b in response.aggregations["tags"].buckets}
        assert tags == {"sport": 1, "red": 2}

    def test_no_facet_fields_means_no_aggregations(self) -> None:
        assert asyncio.run(_adapter().search(SearchQuery())).aggregations is None


class TestSuggestAndLookup:
    def test_fuzzy_suggestions(self) -> None:
        adapter = _adapter(suggestion_fields=("title",))
        suggestions = asyncio.run(adapter.suggest("ed", SuggestOptions()))
        assert [s.text for s in suggestions] == ["Red Shoes", "Red Hat"]

    def test_prefix_suggestions(self) -> None:
        adapter = _adapter(suggestion_fields=("title",))
        suggestions = asyncio.run(adapter.suggest("ed", SuggestOptions(fuzzy=False)))
        assert suggestions == []

    def test_max_suggestions_and_counts(self) -> None:
        adapter = _adapter(suggestion_fields=("brand",))
        suggestions = asyncio.run(adapter.suggest("n", SuggestOptions(max_suggestions=1)))
        assert [(s.text, s.count) for s in suggestions] == [("Nike", 2)]

    def test_blank_text_gives_nothing(self) -> None:
        assert asyncio.run(_adapter().suggest("  ", SuggestOptions())) == []

    def test_get_by_id(self) -> None:
        adapter = _adapter()
        assert asyncio.run(adapter.get_by_id("2"))["title"] == "Blue Bag"
        assert asyncio.run(adapter.get_by_id("99")) is None

    def test_latency_is_simulated(self) -> None:
        adapter = _adapter(latency_ms=5)
        response = asyncio.run(adapter.search(SearchQuery()))
        assert response.took >= 4

    def test_objects_with_attributes(self) -> None:
        class Doc:
            def __init__(self, id: str, title: str) -> None:
                self.id = id
                self.title = title

        adapter = InMemorySearchAdapter([Doc("a", "Alpha"), Doc("b", "Beta")])
        response = asyncio.run(adapter.search(SearchQuery(text="bet")))
        assert [r.id for r in response.results] == ["b"]
