# store_rating/core/pagination.py
"""
Search, sort and offset-pagination helpers shared by every list endpoint.
"""
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from tortoise.expressions import Q
from tortoise.queryset import QuerySet

from store_rating.core.errors import ValidationFailed


@dataclass
class ListParams:
    """Parsed list query parameters (page, limit, sortBy, sortOrder, search)."""
    page: int = 1
    limit: int = 10
    sort_by: Optional[str] = None
    sort_order: str = "ASC"
    search: Optional[str] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def resolve_ordering(
    sort_by: Optional[str],
    sort_order: str,
    allowed: dict[str, str],
    default: str,
) -> list[str]:
    """
    Translate an API sort column and direction into Tortoise order_by terms.

    Args:
        sort_by: Public column name (None falls back to default)
        sort_order: "ASC" or "DESC", case-insensitive
        allowed: Mapping of public column name -> model field name
        default: Public column name used when sort_by is empty

    Raises:
        ValidationFailed: For unknown columns or directions
    """
    column = sort_by or default
    if column not in allowed:
        raise ValidationFailed.for_field(
            "sortBy", f"sortBy must be one of: {', '.join(sorted(allowed))}"
        )
    direction = (sort_order or "ASC").upper()
    if direction not in ("ASC", "DESC"):
        raise ValidationFailed.for_field("sortOrder", "sortOrder must be ASC or DESC")

    field = allowed[column]
    prefix = "-" if direction == "DESC" else ""
    # id breaks ties between equal sort values
    return [f"{prefix}{field}", f"{prefix}id"]


def search_filter(term: Optional[str], fields: Sequence[str]) -> Optional[Q]:
    """Build a case-insensitive OR substring filter over fields, or None for no search."""
    term = (term or "").strip()
    if not term:
        return None
    return Q(*[Q(**{f"{field}__icontains": term}) for field in fields], join_type="OR")


def page_info(page: int, limit: int, total: int) -> dict:
    return {
        "currentPage": page,
        "totalPages": math.ceil(total / limit) if limit else 0,
        "totalItems": total,
        "itemsPerPage": limit,
    }


async def paginate(qs: QuerySet, params: ListParams) -> tuple[list, dict]:
    """Run count + page queries for qs and return (rows, page_info)."""
    total = await qs.count()
    rows = await qs.offset(params.offset).limit(params.limit)
    return rows, page_info(params.page, params.limit, total)
