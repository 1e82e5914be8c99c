from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from ..storage.tokens import TokenStore
from .config import DEFAULT_API_CONFIG, ApiConfig
from .http import ApiError, auth_headers, send
from .models import Room, RoomListResponse, RoomSearchRequest


class RoomsClient:
    """Thin wrapper over the hotel backend's ``/api/rooms`` endpoints."""

    def __init__(
        self,
        config: ApiConfig = DEFAULT_API_CONFIG,
        token_store: TokenStore | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config
        self.token_store = token_store
        self._client = client or httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def _post(self, path: str, body: dict[str, Any]) -> Any:
        return send(self._client, "POST", path, json=body, headers=auth_headers(self.token_store))

    def get_all_rooms(self) -> list[Room]:
        """Fetch the full room inventory (an unfiltered search)."""
        return _room_list(self._post("/api/rooms/search", {})).rooms

    def search_rooms(self, request: RoomSearchRequest) -> RoomListResponse:
        body = request.model_dump(by_alias=True, exclude_none=True)
        return _room_list(self._post("/api/rooms/search", body))

    def filter_rooms(self, payload: dict[str, Any]) -> RoomListResponse:
        """Run a backend-side filter; ``payload`` is already in the backend's shape."""
        return _room_list(self._post("/api/rooms/filter", payload))

    def get_room(self, room_id: int) -> Room:
        data = send(
            self._client, "GET", f"/api/rooms/{room_id}",
            headers=auth_headers(self.token_store),
        )
        try:
            return Room.model_validate(data)
        except ValidationError as exc:
            raise ApiError(f"Unreadable room {room_id} from the server", details=str(exc)) from exc


def _room_list(data: Any) -> RoomListResponse:
    try:
        return RoomListResponse.from_payload(data)
    except ValidationError as exc:
        raise ApiError("Unreadable room list from the server", details=str(exc)) from exc
