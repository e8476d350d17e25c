"""Page parameter normalization and page descriptors."""

import math
from dataclasses import dataclass

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int
    search: str | None = None


@dataclass(frozen=True)
class PageDescriptor:
    """Navigation metadata for one page of a listing."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool
    skip: int


def _to_int(value: int | str | None) -> int | None:
    if value is None or isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        return None


def normalize_page_params(
    page: int | str | None = None,
    limit: int | str | None = None,
    search: str | None = None,
) -> PageParams:
    """Apply defaults and bounds to raw listing parameters.

    Values that are not integers fall back to the defaults.
    """
    page = _to_int(page)
    limit = _to_int(limit)
    if page is None or page < 1:
        page = 1
    if limit is None or limit < 1:
        limit = DEFAULT_LIMIT
    limit = min(limit, MAX_LIMIT)
    search = search.strip() if search else None
    return PageParams(page=page, limit=limit, search=search or None)


def paginate(page: int, limit: int, total_items: int) -> PageDescriptor:
    """Build the page descriptor for a listing.

    ``limit`` must already be normalized to at least 1. Pages past the end are
    not clamped: they describe an empty page with no next page.
    """
    total_pages = math.ceil(total_items / limit) if total_items > 0 else 0
    return PageDescriptor(
        current_page=page,
        total_pages=total_pages,
        total_items=total_items,
        items_per_page=limit,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
        skip=(page - 1) * limit,
    )
