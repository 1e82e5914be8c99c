"""
Client for the public Vietnam administrative-division API
(https://provinces.open-api.vn/).

Every call degrades instead of raising: provinces fall back to a short
list of common provinces, districts and wards to an empty list.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..locations.discovery import extract_cities, sorted_cities
from .config import DEFAULT_API_CONFIG, ApiConfig
from .models import District, Province, Ward
from .rooms import RoomsClient

logger = logging.getLogger(__name__)

FALLBACK_PROVINCES: list[Province] = [
    Province(code="79", name="Thành phố Hồ Chí Minh"),
    Province(code="01", name="Thành phố Hà Nội"),
    Province(code="48", name="Thành phố Đà Nẵng"),
    Province(code="92", name="Thành phố Cần Thơ"),
    Province(code="31", name="Tỉnh Hải Phòng"),
    Province(code="36", name="Tỉnh Thái Nguyên"),
    Province(code="75", name="Tỉnh Đồng Nai"),
    Province(code="77", name="Tỉnh Bà Rịa - Vũng Tàu"),
    Province(code="56", name="Tỉnh Khánh Hòa"),
    Province(code="34", name="Tỉnh Quảng Ninh"),
]


class ProvincesClient:
    def __init__(
        self,
        config: ApiConfig = DEFAULT_API_CONFIG,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config
        self._client = client or httpx.Client(
            base_url=config.provinces_base_url, timeout=config.timeout,
        )

    def close(self) -> None:
        self._client.close()

    def _get_json(self, path: str, **params: Any) -> Any:
        resp = self._client.get(path, params=params or None)
        resp.raise_for_status()
        return resp.json()

    def get_provinces(self) -> list[Province]:
        try:
            data = self._get_json("/p/")
            return [
                Province(code=item["code"], name=item["name"], name_en=item.get("name_en"))
                for item in data
            ]
        except (httpx.HTTPError, ValueError, KeyError, TypeError):
            logger.warning("Province list unavailable, using fallback provinces", exc_info=True)
            return list(FALLBACK_PROVINCES)

    def get_districts(self, province_code: str) -> list[District]:
        try:
            data = self._get_json(f"/p/{province_code}", depth=2)
            items = data.get("districts") if isinstance(data, dict) else None
            if not isinstance(items, list):
                return []
            return [
                District(
                    code=item["code"],
                    name=item["name"],
                    name_en=item.get("name_en"),
                    province_code=province_code,
                )
                for item in items
            ]
        except (httpx.HTTPError, ValueError, KeyError, TypeError):
            logger.warning("Districts unavailable for province %s", province_code, exc_info=True)
            return []

    def get_wards(self, district_code: str) -> list[Ward]:
        try:
            data = self._get_json(f"/d/{district_code}", depth=2)
            items = data.get("wards") if isinstance(data, dict) else None
            if not isinstance(items, list):
                return []
            return [
                Ward(
                    code=item["code"],
                    name=item["name"],
                    name_en=item.get("name_en"),
                    district_code=district_code,
                )
                for item in items
            ]
        except (httpx.HTTPError, ValueError, KeyError, TypeError):
            logger.warning("Wards unavailable for district %s", district_code, exc_info=True)
            return []


def get_cities_from_rooms(rooms_client: RoomsClient) -> list[str]:
    """Cities present in the room inventory, sorted for display. Empty on any failure."""
    try:
        return sorted_cities(extract_cities(rooms_client.get_all_rooms()))
    except Exception:
        logger.warning("Could not load cities from rooms", exc_info=True)
        return []
