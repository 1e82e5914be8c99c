from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from typing import Any

from ..api.models import Room


def _candidate_cities(room: Room | dict[str, Any]) -> tuple[str | None, str | None]:
    """Return ``(hotel.city, hotelCity)`` for a room model or a raw backend record."""
    if isinstance(room, Room):
        return (room.hotel.city if room.hotel else None), room.hotel_city
    hotel = room.get("hotel") or {}
    hotel_city = room.get("hotelCity", room.get("hotel_city"))
    return hotel.get("city") if isinstance(hotel, dict) else None, hotel_city


def extract_cities(rooms: Iterable[Room | dict[str, Any]]) -> set[str]:
    """
    Collect the distinct city strings present in a room inventory.

    Both the nested hotel's ``city`` and the denormalized ``hotelCity`` are
    checked independently; any non-empty value is kept verbatim.
    """
    cities: set[str] = set()
    for room in rooms:
        for city in _candidate_cities(room):
            if city:
                cities.add(city)
    return cities


def _fold(text: str) -> str:
    # "đ" has no decomposition, fold it by hand
    decomposed = unicodedata.normalize("NFD", text.lower().replace("đ", "d"))
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def sorted_cities(cities: Iterable[str]) -> list[str]:
    """Sort city names for display, ignoring case and Vietnamese diacritics."""
    return sorted(cities, key=lambda c: (_fold(c), c))
