from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class WireModel(BaseModel):
    """Base for payloads exchanged with the mobile app and the hotel backend (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Administrative divisions ─────────────────────────────────────────────


class Province(WireModel):
    code: str
    name: str
    name_en: str | None = None

    @field_validator("code", mode="before")
    @classmethod
    def _code_as_str(cls, v: Any) -> Any:
        # provinces.open-api.vn returns numeric codes
        return str(v) if isinstance(v, int) else v


class District(Province):
    province_code: str


class Ward(Province):
    district_code: str


# ── Rooms ────────────────────────────────────────────────────────────────


class HotelInfo(WireModel):
    hotel_id: int | None = None
    hotel_name: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    description: str | None = None
    images: list[str] = Field(default_factory=list)


class Room(WireModel):
    room_id: int = Field(..., gt=0)
    hotel: HotelInfo | None = None
    room_type: str = ""
    price: float = Field(default=0.0, ge=0.0)
    capacity: int | None = None
    description: str | None = None
    images: list[str] = Field(default_factory=list)
    thumbnail_image: str | None = None

    # Denormalized copies of the hotel fields
    hotel_id: int | None = None
    hotel_name: str | None = None
    hotel_city: str | None = None
    hotel_location: str | None = None
    image_urls: list[str] = Field(default_factory=list)

    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    review_count: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _denormalize_hotel(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        hotel = data.get("hotel")
        if isinstance(hotel, HotelInfo):
            hotel = hotel.model_dump(by_alias=True)
        if isinstance(hotel, dict):
            data["hotelId"] = hotel.get("hotelId", hotel.get("hotel_id"))
            data["hotelName"] = hotel.get("hotelName", hotel.get("hotel_name"))
            data["hotelCity"] = hotel.get("city")
            data["hotelLocation"] = hotel.get("address")
        images = data.get("images") or []
        data["images"] = images
        if images:
            data.setdefault("imageUrls", images)
            if not data.get("thumbnailImage") and not data.get("thumbnail_image"):
                data["thumbnailImage"] = images[0]
        return data

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, v: Any) -> float:
        price = _as_float(v)
        if price is None or price < 0:
            return 0.0
        return price

    @field_validator("rating", mode="before")
    @classmethod
    def _clamp_rating(cls, v: Any) -> float | None:
        rating = _as_float(v)
        if rating is None:
            return None
        return min(max(rating, 0.0), 5.0)


def _as_float(v: Any) -> float | None:
    if v is None or v == "" or isinstance(v, bool):
        return None
    try:
        value = float(v)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def parse_rooms(records: list[Any]) -> list[Room]:
    """Validate backend room records, skipping (and logging) the ones that cannot be read."""
    rooms = []
    for record in records:
        try:
            rooms.append(Room.model_validate(record))
        except ValidationError:
            logger.warning("Skipping malformed room record: %r", record, exc_info=True)
    return rooms


class RoomListResponse(WireModel):
    rooms: list[Room] = Field(default_factory=list)
    page: int = 0
    total_pages: int = 1
    total_elements: int = 0
    size: int = 0
    first: bool = True
    last: bool = True

    @classmethod
    def from_payload(cls, data: Any) -> "RoomListResponse":
        """Build an envelope from whatever the backend returned (envelope dict or bare list)."""
        if isinstance(data, dict) and isinstance(data.get("rooms"), list):
            rooms = parse_rooms(data["rooms"])
            return cls(
                rooms=rooms,
                page=data.get("page") or 0,
                total_pages=data.get("totalPages") or 1,
                total_elements=data.get("totalElements") or len(rooms),
                size=data.get("size") or len(rooms),
                first=data.get("first", True),
                last=data.get("last", True),
            )

        raw = data if isinstance(data, list) else []
        rooms = parse_rooms(raw)
        return cls(rooms=rooms, total_elements=len(rooms), size=len(rooms))


class RoomSearchRequest(WireModel):
    keyword: str | None = None
    city: str | None = None
    country: str | None = None
    hotel_id: int | None = None
    page: int | None = Field(default=None, ge=0)
    size: int | None = Field(default=None, ge=1)
