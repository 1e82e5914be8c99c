from __future__ import annotations

from pydantic import Field

from ..api.models import WireModel


class CityMatchRequest(WireModel):
    city_name: str = Field(default="", max_length=200)


class CityMatchResponse(WireModel):
    code: str | None = None


class BestCityRequest(WireModel):
    province_name: str = Field(..., min_length=1, max_length=200)


class BestCityResponse(WireModel):
    city: str | None = None
