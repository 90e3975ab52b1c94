"""Query Pipeline — filter, then paginate, the in-memory dataset.

Steps:
  1. year filter: parsed calendar year equals the requested year
  2. mass filter: numeric mass strictly greater than the threshold
  3. pagination: half-open slice [(page - 1) * limit, page * limit)

Malformed values are never rejected. An unparseable filter value matches
nothing, an unparseable page or limit yields an empty page.
"""

import logging
import math
from collections.abc import Sequence

from pydantic import BaseModel

from meteor_api.models.meteor import MeteorRecord
from meteor_api.schemas import MeteorPage
from meteor_api.services.coercion import parse_number, parse_year, to_slice_index

logger = logging.getLogger(__name__)


class MeteorQuery(BaseModel):
    """Raw listing parameters as they arrive on the query string."""

    year: str | None = None
    mass: str | None = None
    page: str | None = None
    limit: str | None = None


def filter_by_year(records: Sequence[MeteorRecord], year: str) -> list[MeteorRecord]:
    wanted = parse_number(year)
    if wanted is None:
        return []
    return [r for r in records if parse_year(r.year) == wanted]


def filter_by_mass(records: Sequence[MeteorRecord], mass: str) -> list[MeteorRecord]:
    threshold = parse_number(mass)
    if threshold is None:
        return []
    matched = []
    for record in records:
        value = parse_number(record.mass)
        if value is not None and value > threshold:
            matched.append(record)
    return matched


def _bound(raw: str | None, default: int) -> float:
    if raw is None:
        return float(default)
    value = parse_number(raw)
    return math.nan if value is None else value


def paginate(
    records: Sequence[MeteorRecord],
    page: str | None,
    limit: str | None,
    default_page: int = 1,
    default_limit: int = 10,
) -> list[MeteorRecord]:
    page_n = _bound(page, default_page)
    limit_n = _bound(limit, default_limit)

    start = (page_n - 1) * limit_n
    end = start + limit_n
    n = len(records)
    return list(records[to_slice_index(start, n):to_slice_index(end, n)])


def run_query(
    records: Sequence[MeteorRecord],
    query: MeteorQuery,
    default_page: int = 1,
    default_limit: int = 10,
) -> MeteorPage:
    """Filter and paginate ``records``; ``total`` is the pre-pagination count."""
    filtered: Sequence[MeteorRecord] = records

    if query.year:
        filtered = filter_by_year(filtered, query.year)
    if query.mass:
        filtered = filter_by_mass(filtered, query.mass)

    paged = paginate(filtered, query.page, query.limit, default_page, default_limit)
    return MeteorPage(data=paged, total=len(filtered))


def distinct_years(records: Sequence[MeteorRecord]) -> list[str]:
    """Distinct calendar years as strings, sorted as strings ("10" < "2")."""
    years = {str(year) for year in (parse_year(r.year) for r in records) if year is not None}
    result = sorted(years)
    logger.debug("Unique years | count=%d", len(result))
    return result
