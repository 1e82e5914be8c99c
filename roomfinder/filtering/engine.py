from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from ..api.models import Room
from ..api.rooms import RoomsClient
from .models import FilterCriteria, SortBy, SortOrder
from .tracker import RequestSequence

logger = logging.getLogger(__name__)

SOURCE_ALL = "all"
SOURCE_REMOTE = "remote"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class FilterOutcome:
    rooms: Sequence[Room]
    source: str
    token: int | None = None
    superseded: bool = False


def _rooms_frame(rooms: Sequence[Room]) -> pd.DataFrame:
    df = pd.DataFrame({
        "hotel_city": [r.hotel_city or "" for r in rooms],
        "hotel_location": [r.hotel_location or "" for r in rooms],
        "hotel_name": [r.hotel_name or "" for r in rooms],
        "price": [r.price for r in rooms],
        "rating": [r.rating for r in rooms],
    })
    # Unrated rooms sort as 0
    df["rating"] = pd.to_numeric(df["rating"], errors="coerce").fillna(0.0)
    df["price"] = pd.to_numeric(df["price"], errors="coerce").fillna(0.0)
    return df


def local_filter(criteria: FilterCriteria, all_rooms: Sequence[Room]) -> list[Room]:
    """
    Recompute a filter result over an already-fetched room list.

    City matches case-insensitively as a substring of the hotel's city,
    address or name; price bounds are inclusive; sorting is stable.
    The result is always a subset of ``all_rooms`` (same objects).
    """
    if not all_rooms:
        return []

    df = _rooms_frame(all_rooms)
    mask = pd.Series(True, index=df.index)

    if criteria.has_city:
        city_lower = criteria.city.strip().lower()
        mask = mask & (
            df["hotel_city"].str.lower().str.contains(city_lower, regex=False)
            | df["hotel_location"].str.lower().str.contains(city_lower, regex=False)
            | df["hotel_name"].str.lower().str.contains(city_lower, regex=False)
        )

    if criteria.min_price is not None:
        mask = mask & (df["price"] >= criteria.min_price)

    if criteria.max_price is not None:
        mask = mask & (df["price"] <= criteria.max_price)

    result = df.loc[mask]

    if criteria.sort_by in (SortBy.price, SortBy.rating):
        result = result.sort_values(
            criteria.sort_by.value,
            ascending=criteria.sort_order != SortOrder.desc,
            kind="mergesort",
        )

    return [all_rooms[i] for i in result.index]


class RoomFilterEngine:
    """
    Server-first room filtering with a local fallback.

    Filtering is a convenience, so a failing backend call never surfaces as
    an error: the same criteria are recomputed over the room list the
    caller already holds, and if even that fails the unfiltered list is
    returned.
    """

    def __init__(self, rooms_client: RoomsClient) -> None:
        self.rooms_client = rooms_client

    def apply_filter(
        self,
        criteria: FilterCriteria,
        all_rooms: Sequence[Room],
        sequence: RequestSequence | None = None,
    ) -> FilterOutcome:
        token = sequence.issue() if sequence is not None else None

        if not criteria.is_active:
            rooms, source = all_rooms, SOURCE_ALL
        else:
            try:
                rooms = self.rooms_client.filter_rooms(criteria.to_backend_payload()).rooms
                source = SOURCE_REMOTE
            except Exception:
                logger.warning("Remote room filter failed, filtering locally", exc_info=True)
                rooms, source = self._fallback(criteria, all_rooms), SOURCE_FALLBACK

        superseded = sequence is not None and not sequence.is_latest(token)
        if superseded:
            logger.info("Discarding filter result %s, request %s is newer", token, sequence.latest)
        return FilterOutcome(rooms=rooms, source=source, token=token, superseded=superseded)

    @staticmethod
    def _fallback(criteria: FilterCriteria, all_rooms: Sequence[Room]) -> Sequence[Room]:
        try:
            return local_filter(criteria, all_rooms)
        except Exception:
            logger.warning("Local room filter failed, returning all rooms", exc_info=True)
            return all_rooms
