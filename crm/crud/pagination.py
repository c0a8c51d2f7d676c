# crm/crud/pagination.py
"""
The paginated query engine shared by every list view.

Callers build a filtered `Query`, then hand it to `paginate` together with the
allow-list of columns their entity may be sorted by. The engine counts the
filtered rows first and only then orders and slices, so `total` and
`totalPages` are correct even for pages past the end.
"""
import math
from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar

from sqlalchemy import and_, or_
from sqlalchemy.orm import Query

from crm.core.config import get_settings
from crm.core.errors import ValidationError

T = TypeVar("T")

SORT_ORDERS = ("asc", "desc")


@dataclass
class PageResult(Generic[T]):
    data: list[T]
    total: int
    page: int
    limit: int
    total_pages: int


def contains(column, value: str | None):
    """
    Case-insensitive substring predicate for `column`, or None when no value was given.
    LIKE wildcards typed by the caller are matched literally.
    """
    if value is None or not value.strip():
        return None
    return column.icontains(value.strip(), autoescape=True)


def all_of(*predicates):
    """AND of the predicates that are not None, or None if there are none."""
    clauses = [predicate for predicate in predicates if predicate is not None]
    return and_(*clauses) if clauses else None


def any_of(*predicates):
    """OR of the predicates that are not None, or None if there are none."""
    clauses = [predicate for predicate in predicates if predicate is not None]
    return or_(*clauses) if clauses else None


def apply_filters(query: Query, *predicates) -> Query:
    """ANDs together every predicate that is not None. Absent filters are simply left out."""
    clause = all_of(*predicates)
    if clause is not None:
        query = query.filter(clause)
    return query


def _resolve_sort(sort_columns: Mapping[str, Any], sort_by: str | None, sort_order: str | None,
                  default_sort: str):
    sort_key = sort_by or default_sort
    if sort_key not in sort_columns:
        allowed = ", ".join(sort_columns)
        raise ValidationError(f"Cannot sort by '{sort_key}'. Allowed values: {allowed}")

    direction = (sort_order or "asc").lower()
    if direction not in SORT_ORDERS:
        raise ValidationError("Sort order must be 'asc' or 'desc'")

    column = sort_columns[sort_key]
    ordering = [column.desc() if direction == "desc" else column.asc()]
    if sort_key != default_sort:
        # Tiebreaker keeps rows with equal sort values from moving between pages
        ordering.append(sort_columns[default_sort].asc())
    return ordering


def paginate(
        query: Query,
        *,
        sort_columns: Mapping[str, Any],
        page: int = 1,
        limit: int | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        default_sort: str = "id",
) -> PageResult:
    """
    Returns one page of `query` plus the total number of matching rows.

    Raises ValidationError for a page below 1, a limit outside
    1..MAX_PAGE_SIZE, a sort key that is not in `sort_columns`, or a sort
    order other than asc/desc.
    """
    settings = get_settings()
    if limit is None:
        limit = settings.DEFAULT_PAGE_SIZE

    if page < 1:
        raise ValidationError("Page must be a positive integer")
    if not 1 <= limit <= settings.MAX_PAGE_SIZE:
        raise ValidationError(f"Limit must be between 1 and {settings.MAX_PAGE_SIZE}")

    ordering = _resolve_sort(sort_columns, sort_by, sort_order, default_sort)

    total = query.order_by(None).count()
    offset = (page - 1) * limit
    rows = []
    # Pages past the end are empty; their offset may not even fit in a database integer
    if offset < total:
        rows = query.order_by(None).order_by(*ordering).offset(offset).limit(limit).all()

    return PageResult(
        data=rows,
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )
