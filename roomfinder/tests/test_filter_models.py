from __future__ import annotations

import pytest
from pydantic import ValidationError

from roomfinder.filtering.models import FilterCriteria, SortBy, SortOrder
from roomfinder.filtering import tracker
from roomfinder.filtering.tracker import RequestSequence, clear_sequences, get_sequence, tracked_sessions


class TestFilterCriteria:
    def test_empty_is_inactive(self):
        assert not FilterCriteria().is_active

    def test_blank_city_is_inactive(self):
        assert not FilterCriteria(city="   ").is_active

    @pytest.mark.parametrize("kwargs", [
        {"city": "Huế"},
        {"min_price": 0},
        {"max_price": 500},
        {"sort_by": "rating"},
    ])
    def test_active_fields(self, kwargs):
        assert FilterCriteria(**kwargs).is_active

    def test_accepts_camel_case_body(self):
        criteria = FilterCriteria.model_validate({"minPrice": 10, "sortBy": "price", "sortOrder": "desc"})
        assert criteria.min_price == 10
        assert criteria.sort_by is SortBy.price
        assert criteria.sort_order is SortOrder.desc

    def test_rejects_negative_price(self):
        with pytest.raises(ValidationError):
            FilterCriteria(min_price=-1)

    def test_rejects_unknown_sort(self):
        with pytest.raises(ValidationError):
            FilterCriteria(sort_by="distance")


class TestBackendPayload:
    def test_full_payload(self):
        payload = FilterCriteria(
            city="Đà Nẵng",
            country="Vietnam",
            min_price=100,
            max_price=900,
            capacity=3,
            sort_by=SortBy.price,
            sort_order=SortOrder.desc,
        ).to_backend_payload()
        assert payload == {
            "city": "Đà Nẵng",
            "country": "Vietnam",
            "minPrice": 100,
            "maxPrice": 900,
            "minCapacity": 3,
            "maxCapacity": 3,
            "sortBy": "price",
            "sortDirection": "DESC",
        }

    def test_defaults_to_price_ascending(self):
        payload = FilterCriteria(city="Huế").to_backend_payload()
        assert payload == {"city": "Huế", "sortBy": "price", "sortDirection": "ASC"}

    def test_name_sort_maps_to_price(self):
        payload = FilterCriteria(sort_by=SortBy.name, sort_order=SortOrder.desc).to_backend_payload()
        assert payload["sortBy"] == "price"
        assert payload["sortDirection"] == "DESC"


class TestQueryParams:
    def test_parses_all_params(self):
        criteria = FilterCriteria.from_query_params(
            {"city": "Hà Nội", "minPrice": "100", "maxPrice": "250.5", "sort": "rating_desc"},
        )
        assert criteria.city == "Hà Nội"
        assert criteria.min_price == 100
        assert criteria.max_price == 250.5
        assert criteria.sort_by is SortBy.rating
        assert criteria.sort_order is SortOrder.desc

    @pytest.mark.parametrize("raw", ["abc", "", "nan", "-5"])
    def test_ignores_bad_prices(self, raw):
        assert FilterCriteria.from_query_params({"minPrice": raw}).min_price is None

    def test_ignores_unknown_sort_preset(self):
        criteria = FilterCriteria.from_query_params({"sort": "distance_asc"})
        assert criteria.sort_by is None
        assert not criteria.is_active


class TestRequestSequence:
    def test_tokens_increase(self):
        seq = RequestSequence()
        assert [seq.issue() for _ in range(3)] == [1, 2, 3]
        assert seq.is_latest(3)
        assert not seq.is_latest(2)

    def test_sequences_are_per_session(self):
        clear_sequences()
        a = get_sequence("a")
        assert get_sequence("a") is a
        assert get_sequence("b") is not a
        a.issue()
        assert get_sequence("b").latest == 0

    def test_session_map_is_bounded(self, monkeypatch):
        clear_sequences()
        monkeypatch.setattr(tracker, "MAX_TRACKED_SESSIONS", 3)
        first = get_sequence("s0")
        for i in range(1, 6):
            get_sequence(f"s{i}")
        assert tracked_sessions() == 3
        assert get_sequence("s0") is not first

    def test_recently_used_session_survives_eviction(self, monkeypatch):
        clear_sequences()
        monkeypatch.setattr(tracker, "MAX_TRACKED_SESSIONS", 2)
        a = get_sequence("a")
        get_sequence("b")
        get_sequence("a")
        get_sequence("c")
        assert get_sequence("a") is a
