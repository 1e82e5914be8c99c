from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from ..api.models import Room, WireModel


class SortBy(str, Enum):
    price = "price"
    rating = "rating"
    name = "name"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


# Sort presets offered by the sort sheet
SORT_PRESETS: dict[str, tuple[SortBy, SortOrder]] = {
    "price_asc": (SortBy.price, SortOrder.asc),
    "price_desc": (SortBy.price, SortOrder.desc),
    "rating_asc": (SortBy.rating, SortOrder.asc),
    "rating_desc": (SortBy.rating, SortOrder.desc),
}


class FilterCriteria(WireModel):
    city: str | None = None
    country: str | None = None
    min_price: float | None = Field(default=None, ge=0.0)
    max_price: float | None = Field(default=None, ge=0.0)
    capacity: int | None = Field(default=None, ge=1)
    sort_by: SortBy | None = None
    sort_order: SortOrder | None = None

    @property
    def has_city(self) -> bool:
        return bool(self.city and self.city.strip())

    @property
    def is_active(self) -> bool:
        """False for the "cleared filters" case: no city, no price bound, no sort."""
        return (
            self.has_city
            or self.min_price is not None
            or self.max_price is not None
            or self.sort_by is not None
        )

    def to_backend_payload(self) -> dict[str, Any]:
        """
        Translate to the body of ``POST /api/rooms/filter``.

        The single capacity value is sent as both bounds, so the backend
        matches it exactly. Unset values are omitted.
        """
        sort_by = self.sort_by.value if self.sort_by in (SortBy.price, SortBy.rating) else "price"
        payload = {
            "city": self.city,
            "country": self.country,
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "minCapacity": self.capacity,
            "maxCapacity": self.capacity,
            "sortBy": sort_by,
            "sortDirection": (self.sort_order or SortOrder.asc).value.upper(),
        }
        return {k: v for k, v in payload.items() if v is not None}

    @classmethod
    def from_query_params(cls, params: dict[str, str]) -> FilterCriteria:
        """Build criteria from deep-link params (``city``, ``minPrice``, ``maxPrice``, ``sort``)."""
        sort_by, sort_order = SORT_PRESETS.get(params.get("sort") or "", (None, None))
        return cls(
            city=params.get("city") or None,
            min_price=_parse_price(params.get("minPrice")),
            max_price=_parse_price(params.get("maxPrice")),
            sort_by=sort_by,
            sort_order=sort_order,
        )


def _parse_price(raw: str | None) -> float | None:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    # float() accepts "nan" and "inf"
    if value != value or value in (float("inf"), float("-inf")) or value < 0:
        return None
    return value


class FilterResponse(WireModel):
    rooms: list[Room]
    source: str
    token: int | None = None
    superseded: bool = False
