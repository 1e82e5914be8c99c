from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel

from ..api.models import District, Province
from .matching import find_best_matching_city, find_city_for_district


class LocalityLevel(str, Enum):
    province = "province"
    district = "district"
    ward = "ward"


class LocalityState(BaseModel):
    """
    Selection state of the province -> district -> ward location picker.

    ``selected_city`` is what actually gets applied as the room filter; the
    administrative codes only drive which list is shown. Transitions return
    a new state.
    """

    level: LocalityLevel = LocalityLevel.province
    selected_province: str | None = None
    selected_district: str | None = None
    selected_city: str | None = None
    show_all: bool = False

    def select_province(
        self,
        code: str,
        provinces: Sequence[Province],
        known_cities: Sequence[str],
    ) -> LocalityState:
        province = next((p for p in provinces if p.code == code), None)
        city = find_best_matching_city(province.name, known_cities) if province else self.selected_city
        return self.model_copy(update={
            "level": LocalityLevel.district,
            "selected_province": code,
            "selected_district": None,
            "selected_city": city,
        })

    def select_district(
        self,
        code: str,
        districts: Sequence[District],
        known_cities: Sequence[str],
    ) -> LocalityState:
        district = next((d for d in districts if d.code == code), None)
        city = find_city_for_district(district.name, known_cities) if district else None
        return self.model_copy(update={
            "level": LocalityLevel.ward,
            "selected_district": code,
            "selected_city": city or self.selected_city,
        })

    def select_ward(self) -> LocalityState:
        # Wards carry no inventory city; keep the current one and start over
        return self.model_copy(update={"level": LocalityLevel.province})

    def select_city(self, city: str) -> LocalityState:
        return self.model_copy(update={"selected_city": city})

    def toggle_show_all(self) -> LocalityState:
        return self.model_copy(update={"show_all": not self.show_all})

    def clear(self) -> LocalityState:
        return LocalityState()
