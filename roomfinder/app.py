from __future__ import annotations

import logging
import os
import uuid
from functools import lru_cache

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request
from starlette.middleware.sessions import SessionMiddleware

from .api.config import DEFAULT_API_CONFIG
from .api.http import ApiError
from .api.models import District, Province, Room, RoomListResponse, RoomSearchRequest, Ward
from .api.provinces import ProvincesClient, get_cities_from_rooms
from .api.rooms import RoomsClient
from .filtering.engine import RoomFilterEngine
from .filtering.models import FilterCriteria, FilterResponse
from .filtering.tracker import get_sequence
from .locations.matching import (
    ProvinceOption,
    find_best_matching_city,
    match_city_to_province,
    province_options,
)
from .locations.models import (
    BestCityRequest,
    BestCityResponse,
    CityMatchRequest,
    CityMatchResponse,
)
from .storage.tokens import TokenStore

logger = logging.getLogger(__name__)

app = FastAPI(title="Room Finder API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "roomfinder-secret-change-in-production"),
)


# ── Collaborators ────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_backend_http() -> httpx.Client:
    return httpx.Client(base_url=DEFAULT_API_CONFIG.base_url, timeout=DEFAULT_API_CONFIG.timeout)


def get_token_store(request: Request) -> TokenStore:
    """Per-request token store holding the caller's bearer token, if one was sent."""
    store = TokenStore()
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        store.save_access_token(token.strip())
    return store


def get_rooms_client(
    token_store: TokenStore = Depends(get_token_store),
    http: httpx.Client = Depends(get_backend_http),
) -> RoomsClient:
    return RoomsClient(token_store=token_store, client=http)


@lru_cache(maxsize=1)
def get_provinces_client() -> ProvincesClient:
    return ProvincesClient()


def get_filter_engine(rooms_client: RoomsClient = Depends(get_rooms_client)) -> RoomFilterEngine:
    return RoomFilterEngine(rooms_client)


def _session_id(request: Request) -> str:
    sid = request.session.get("sid")
    if not sid:
        sid = request.session["sid"] = uuid.uuid4().hex
    return sid


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata(rooms_client: RoomsClient = Depends(get_rooms_client)) -> dict:
    return {"cities": get_cities_from_rooms(rooms_client)}


# ── Locations ────────────────────────────────────────────────────────────


@app.get("/locations/provinces", response_model=list[Province])
def provinces(client: ProvincesClient = Depends(get_provinces_client)) -> list[Province]:
    return client.get_provinces()


@app.get("/locations/provinces/{code}/districts", response_model=list[District])
def districts(code: str, client: ProvincesClient = Depends(get_provinces_client)) -> list[District]:
    return client.get_districts(code)


@app.get("/locations/districts/{code}/wards", response_model=list[Ward])
def wards(code: str, client: ProvincesClient = Depends(get_provinces_client)) -> list[Ward]:
    return client.get_wards(code)


@app.get("/locations/options", response_model=list[ProvinceOption])
def location_options(
    show_all: bool = False,
    client: ProvincesClient = Depends(get_provinces_client),
    rooms_client: RoomsClient = Depends(get_rooms_client),
) -> list[ProvinceOption]:
    return province_options(
        client.get_provinces(), get_cities_from_rooms(rooms_client), show_all=show_all,
    )


@app.post("/locations/match", response_model=CityMatchResponse)
def match_city(
    body: CityMatchRequest,
    client: ProvincesClient = Depends(get_provinces_client),
) -> CityMatchResponse:
    return CityMatchResponse(code=match_city_to_province(body.city_name, client.get_provinces()))


@app.post("/locations/best-city", response_model=BestCityResponse)
def best_city(
    body: BestCityRequest,
    rooms_client: RoomsClient = Depends(get_rooms_client),
) -> BestCityResponse:
    cities = get_cities_from_rooms(rooms_client)
    return BestCityResponse(city=find_best_matching_city(body.province_name, cities))


# ── Rooms ────────────────────────────────────────────────────────────────


@app.post("/rooms/search", response_model=RoomListResponse)
def search_rooms(
    body: RoomSearchRequest,
    rooms_client: RoomsClient = Depends(get_rooms_client),
) -> RoomListResponse:
    try:
        return rooms_client.search_rooms(body)
    except ApiError as exc:
        raise HTTPException(status_code=502, detail=exc.message) from exc


@app.get("/rooms/{room_id}", response_model=Room)
def room_detail(room_id: int, rooms_client: RoomsClient = Depends(get_rooms_client)) -> Room:
    try:
        return rooms_client.get_room(room_id)
    except ApiError as exc:
        status = 404 if exc.status == 404 else 502
        raise HTTPException(status_code=status, detail=exc.message) from exc


@app.post("/rooms/filter", response_model=FilterResponse)
def filter_rooms(
    body: FilterCriteria,
    request: Request,
    rooms_client: RoomsClient = Depends(get_rooms_client),
    engine: RoomFilterEngine = Depends(get_filter_engine),
) -> FilterResponse:
    sequence = get_sequence(_session_id(request))

    try:
        all_rooms = rooms_client.get_all_rooms()
    except ApiError:
        logger.warning("Room inventory unavailable, filtering an empty list", exc_info=True)
        all_rooms = []

    outcome = engine.apply_filter(body, all_rooms, sequence)
    return FilterResponse(
        rooms=list(outcome.rooms),
        source=outcome.source,
        token=outcome.token,
        superseded=outcome.superseded,
    )
