"""Tests for the generic search engine."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterator

import pytest

from sentinel.backend.core import search
from sentinel.backend.core.errors import ValidationError
from sentinel.backend.core.search import PageRequest, PageResult

T0 = datetime(2025, 3, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Item:
    key: str
    label: str
    kind: str
    at: datetime


@dataclass(frozen=True)
class ItemFilter:
    label: str | None = None
    kind: str | None = None
    start: datetime | None = None
    end: datetime | None = None

    def predicates(self) -> Iterator[search.Predicate[Item]]:
        if self.label:
            yield search.contains_text(lambda i: i.label, self.label)
        if self.kind:
            yield search.equals(lambda i: i.kind, self.kind)
        if self.start or self.end:
            yield search.within(lambda i: i.at, self.start, self.end)


def by_time(item: Item) -> datetime:
    return item.at


def make_items(count: int, kind: str = "a") -> list[Item]:
    return [
        Item(key=f"{kind}{i}", label=f"Item {i}", kind=kind, at=T0 + timedelta(hours=i))
        for i in range(count)
    ]


class TestPageRequest:
    def test_defaults(self):
        request = PageRequest()
        assert request.page == 1
        assert request.per_page == 20
        assert request.offset == 0

    def test_offset(self):
        assert PageRequest(page=3, per_page=10).offset == 20

    @pytest.mark.parametrize("page", [0, -1])
    def test_page_must_be_positive(self, page: int):
        with pytest.raises(ValidationError, match="Page must be greater than 0"):
            PageRequest(page=page, per_page=10).validate()

    @pytest.mark.parametrize("per_page", [0, 101, -5])
    def test_per_page_bounds(self, per_page: int):
        with pytest.raises(ValidationError, match="PerPage must be between 1 and 100"):
            PageRequest(page=1, per_page=per_page).validate()

    @pytest.mark.parametrize("per_page", [1, 100])
    def test_per_page_boundaries_accepted(self, per_page: int):
        PageRequest(page=1, per_page=per_page).validate()


class TestPagination:
    def test_second_page_of_25(self):
        result = search.search(make_items(25), ItemFilter(), PageRequest(2, 10), by_time)

        assert len(result.items) == 10
        assert result.total == 25
        assert result.page == 2
        assert result.per_page == 10
        assert result.last_page == 3

    def test_last_partial_page(self):
        result = search.search(make_items(25), ItemFilter(), PageRequest(3, 10), by_time)
        assert len(result.items) == 5

    def test_page_past_the_end_is_empty(self):
        result = search.search(make_items(5), ItemFilter(), PageRequest(4, 10), by_time)
        assert result.items == []
        assert result.total == 5
        assert result.last_page == 1

    def test_empty_collection(self):
        result = search.search([], ItemFilter(), PageRequest(1, 10), by_time)
        assert result.items == []
        assert result.total == 0
        assert result.last_page == 0

    def test_invalid_page_raises_before_filtering(self):
        with pytest.raises(ValidationError):
            search.search(make_items(3), ItemFilter(), PageRequest(0, 10), by_time)
        with pytest.raises(ValidationError):
            search.search(make_items(3), ItemFilter(), PageRequest(1, 101), by_time)


class TestOrdering:
    def test_newest_first(self):
        result = search.search(make_items(5), ItemFilter(), PageRequest(1, 10), by_time)
        assert [i.key for i in result.items] == ["a4", "a3", "a2", "a1", "a0"]

    def test_equal_keys_keep_input_order(self):
        items = [Item(key=str(i), label="x", kind="a", at=T0) for i in range(6)]

        first = search.search(items, ItemFilter(), PageRequest(1, 10), by_time)
        second = search.search(items, ItemFilter(), PageRequest(1, 10), by_time)

        assert [i.key for i in first.items] == ["0", "1", "2", "3", "4", "5"]
        assert [i.key for i in second.items] == [i.key for i in first.items]

    def test_input_is_not_mutated(self):
        items = make_items(4)
        snapshot = list(items)
        search.search(items, ItemFilter(), PageRequest(1, 2), by_time)
        assert items == snapshot


class TestFiltering:
    def test_categorical_filter_total_ignores_window(self):
        items = make_items(2, kind="running") + make_items(3, kind="completed")

        result = search.search(items, ItemFilter(kind="running"), PageRequest(1, 1), by_time)

        assert result.total == 2
        assert len(result.items) == 1
        assert all(i.kind == "running" for i in result.items)

    def test_substring_is_case_insensitive(self):
        items = make_items(12)
        result = search.search(items, ItemFilter(label="ITEM 1"), PageRequest(1, 50), by_time)
        assert sorted(i.key for i in result.items) == ["a1", "a10", "a11"]

    def test_date_range_is_inclusive(self):
        items = make_items(5)
        flt = ItemFilter(start=T0 + timedelta(hours=1), end=T0 + timedelta(hours=3))

        result = search.search(items, flt, PageRequest(1, 10), by_time)

        assert [i.key for i in result.items] == ["a3", "a2", "a1"]

    def test_open_ended_range(self):
        result = search.search(
            make_items(5), ItemFilter(start=T0 + timedelta(hours=3)), PageRequest(1, 10), by_time
        )
        assert [i.key for i in result.items] == ["a4", "a3"]

    def test_naive_bounds_are_treated_as_utc(self):
        naive_start = datetime(2025, 3, 1, 2, 0)
        result = search.search(
            make_items(5), ItemFilter(start=naive_start), PageRequest(1, 10), by_time
        )
        assert result.total == 3

    def test_predicates_are_combined_with_and(self):
        items = make_items(3, kind="a") + make_items(3, kind="b")
        result = search.search(
            items, ItemFilter(kind="b", label="item 2"), PageRequest(1, 10), by_time
        )
        assert [i.key for i in result.items] == ["b2"]


def test_page_result_map_keeps_metadata():
    page = PageResult(items=[1, 2], total=7, page=2, per_page=2, last_page=4)

    mapped = page.map(str)

    assert mapped.items == ["1", "2"]
    assert (mapped.total, mapped.page, mapped.per_page, mapped.last_page) == (7, 2, 2, 4)
