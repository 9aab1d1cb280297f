"""Generic filter/sort/pagination query building.

Only column and table names that come from code-owned column maps ever reach
the SQL text; every caller-supplied value is bound as a positional argument.
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from ansiversa_db.db.connection import Database

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
WILDCARD = "%"
SORT_DIRECTIONS = ("ASC", "DESC")


class SortSpec(BaseModel):
    column: Optional[str] = None
    direction: Optional[str] = None


class ListOptions(BaseModel):
    """Logical filters, sort and page request for a ``list_*`` call."""
    model_config = ConfigDict(populate_by_name=True)

    filters: Dict[str, Any] = Field(default_factory=dict)
    sort: Optional[SortSpec] = None
    page: Any = None
    page_size: Any = Field(default=None, alias="pageSize")


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    page_size: int


@dataclass(frozen=True)
class ListQuery:
    sql: str
    args: Tuple[Any, ...]
    count_sql: str
    count_args: Tuple[Any, ...]
    page: int
    page_size: int


OptionsInput = Union[ListOptions, Mapping[str, Any], None]


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def with_camel_aliases(column_map: Mapping[str, str]) -> Dict[str, str]:
    """Also accept ``topicId`` wherever ``topic_id`` is a logical key."""
    aliased = dict(column_map)
    for key, column in column_map.items():
        aliased.setdefault(_camel(key), column)
    return aliased


def coerce_options(options: OptionsInput) -> ListOptions:
    if options is None:
        return ListOptions()
    if isinstance(options, ListOptions):
        return options
    return ListOptions.model_validate(dict(options))


def _finite_floor(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return math.floor(number)


def normalize_page(value: Any) -> int:
    """``max(1, floor(value))``; missing or non-finite means page 1."""
    page = _finite_floor(value)
    return 1 if page is None else max(1, page)


def normalize_page_size(value: Any, default: int = DEFAULT_PAGE_SIZE) -> int:
    """``clamp(floor(value), 1, 100)``; missing or non-finite means ``default``."""
    size = _finite_floor(value)
    if size is None:
        return default
    return min(MAX_PAGE_SIZE, max(1, size))


def is_pattern(value: Any) -> bool:
    """True when a filter value is matched with LIKE rather than equality."""
    return isinstance(value, str) and WILDCARD in value


def normalize_filter_value(value: Any) -> Any:
    if isinstance(value, bool):
        return 1 if value else 0
    return value


def build_where(filters: Mapping[str, Any], column_map: Mapping[str, str]) -> Tuple[str, List[Any]]:
    """Render recognised, non-null filters as an AND-joined WHERE clause."""
    clauses: List[str] = []
    args: List[Any] = []

    for key, raw in filters.items():
        column = column_map.get(key)
        if column is None or raw is None:
            continue
        value = normalize_filter_value(raw)
        if is_pattern(value):
            clauses.append(f"{column} LIKE ?")
        else:
            clauses.append(f"{column} = ?")
        args.append(value)

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, args


def build_order_by(
    sort: Optional[SortSpec],
    column_map: Mapping[str, str],
    default_sort: str,
    default_direction: str = "ASC",
) -> str:
    column = column_map.get(sort.column) if sort and sort.column else None
    if column is None:
        column = column_map.get(default_sort, default_sort)

    direction = (sort.direction or "").upper() if sort else ""
    if direction not in SORT_DIRECTIONS:
        direction = default_direction.upper()
    return f"ORDER BY {column} {direction}"


def build_list_query(
    table: str,
    columns: Sequence[str],
    column_map: Mapping[str, str],
    options: OptionsInput,
    default_sort: str,
    default_direction: str = "ASC",
) -> ListQuery:
    """Build the windowed SELECT and its matching COUNT(*) statement.

    Args:
        table: Physical table name.
        columns: Physical columns to select.
        column_map: Logical field name -> physical column name.
        options: Filters, sort and page request.
        default_sort: Logical (or physical) column used when the requested
            sort column is absent or unknown.
        default_direction: ``ASC`` or ``DESC``.
    """
    opts = coerce_options(options)
    page = normalize_page(opts.page)
    page_size = normalize_page_size(opts.page_size)
    offset = (page - 1) * page_size

    where, filter_args = build_where(opts.filters, column_map)
    order_by = build_order_by(opts.sort, column_map, default_sort, default_direction)

    where_sql = f" {where}" if where else ""
    sql = (
        f"SELECT {', '.join(columns)} FROM {table}{where_sql} "
        f"{order_by} LIMIT ? OFFSET ?"
    )
    count_sql = f"SELECT COUNT(*) AS total FROM {table}{where_sql}"

    return ListQuery(
        sql=sql,
        args=tuple(filter_args) + (page_size, offset),
        count_sql=count_sql,
        count_args=tuple(filter_args),
        page=page,
        page_size=page_size,
    )


async def _gather_or_cancel(*coros):
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise


async def paginate(
    db: Database,
    query: ListQuery,
    mapper: Callable[[Mapping[str, Any]], T],
) -> Page[T]:
    """Run the list and count statements concurrently and join the results."""
    logger.debug("Paginated query: %s %s", query.sql, query.args)
    rows, count_row = await _gather_or_cancel(
        db.fetch_all(query.sql, query.args),
        db.fetch_one(query.count_sql, query.count_args),
    )
    total = int(count_row["total"]) if count_row else 0
    return Page(
        items=[mapper(row) for row in rows],
        total=total,
        page=query.page,
        page_size=query.page_size,
    )
