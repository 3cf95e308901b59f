# sentinel/backend/core/search.py
"""Filtered, sorted, paginated search over a collection snapshot.

One algorithm serves every collection (simulation runs, recent projects).
Collections differ only in the predicates their filter produces and in the
sort key they pass in:

1. validate the page request
2. AND together every predicate of the filter
3. sort descending by ``sort_key`` (stable: equal keys keep input order)
4. count, then slice ``[(page - 1) * per_page, page * per_page)``

The engine is pure; it never touches storage and holds no state.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Generic, Iterable, Protocol, Sequence, TypeVar

from sentinel.backend.core.errors import ValidationError
from sentinel.backend.core.utils import ensure_utc

T = TypeVar("T")
U = TypeVar("U")
T_contra = TypeVar("T_contra", contravariant=True)

Predicate = Callable[[T], bool]

MAX_PER_PAGE = 100


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    per_page: int = 20

    def validate(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be greater than 0")
        if self.per_page < 1 or self.per_page > MAX_PER_PAGE:
            raise ValidationError(f"PerPage must be between 1 and {MAX_PER_PAGE}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass(frozen=True)
class PageResult(Generic[T]):
    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: int = 20
    last_page: int = 0

    def map(self, fn: Callable[[T], U]) -> PageResult[U]:
        """Return the same page with every item converted by ``fn``."""
        return PageResult(
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            per_page=self.per_page,
            last_page=self.last_page,
        )


class FilterSpec(Protocol[T_contra]):
    """A set of optional constraints; each present one yields a predicate."""

    def predicates(self) -> Iterable[Callable[[T_contra], bool]]: ...


# -- Predicate builders --------------------------------------------------------


def contains_text(get: Callable[[T], str | None], needle: str) -> Predicate[T]:
    """Case-insensitive substring match."""
    lowered = needle.lower()

    def _match(item: T) -> bool:
        value = get(item)
        return value is not None and lowered in value.lower()

    return _match


def equals(get: Callable[[T], Any], expected: Any) -> Predicate[T]:
    return lambda item: get(item) == expected


def within(
    get: Callable[[T], datetime],
    start: datetime | None,
    end: datetime | None,
) -> Predicate[T]:
    """Inclusive date range; either bound may be open."""
    lower = ensure_utc(start) if start is not None else None
    upper = ensure_utc(end) if end is not None else None

    def _match(item: T) -> bool:
        value = ensure_utc(get(item))
        if lower is not None and value < lower:
            return False
        if upper is not None and value > upper:
            return False
        return True

    return _match


# -- Engine --------------------------------------------------------------------


def search(
    items: Sequence[T],
    filter_spec: FilterSpec[T],
    page: PageRequest,
    sort_key: Callable[[T], Any],
) -> PageResult[T]:
    page.validate()

    predicates = list(filter_spec.predicates())
    matched = [item for item in items if all(p(item) for p in predicates)]
    # sorted() is stable with reverse=True as well
    matched = sorted(matched, key=sort_key, reverse=True)

    total = len(matched)
    window = matched[page.offset : page.offset + page.per_page]

    return PageResult(
        items=window,
        total=total,
        page=page.page,
        per_page=page.per_page,
        last_page=math.ceil(total / page.per_page),
    )
