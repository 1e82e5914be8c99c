from __future__ import annotations

from roomfinder.api.models import Room
from roomfinder.locations.discovery import extract_cities, sorted_cities


def _room(room_id, city=None, hotel_city=None):
    data = {"roomId": room_id, "price": 100}
    if city is not None:
        data["hotel"] = {"hotelId": 1, "hotelName": "H", "city": city}
    if hotel_city is not None:
        data["hotelCity"] = hotel_city
    return data


def test_empty_input():
    assert extract_cities([]) == set()


def test_collects_nested_hotel_city():
    rooms = [Room.model_validate(_room(1, city="Hà Nội"))]
    assert extract_cities(rooms) == {"Hà Nội"}


def test_collects_hotel_city_without_hotel_object():
    rooms = [Room(room_id=1, hotel_city="Đà Nẵng")]
    assert extract_cities(rooms) == {"Đà Nẵng"}


def test_deduplicates():
    rooms = [
        Room.model_validate(_room(1, city="Hà Nội")),
        Room.model_validate(_room(2, city="Hà Nội")),
        Room(room_id=3, hotel_city="Hà Nội"),
    ]
    assert extract_cities(rooms) == {"Hà Nội"}


def test_skips_empty_values():
    rooms = [Room(room_id=1), Room(room_id=2, hotel_city="")]
    assert extract_cities(rooms) == set()


def test_raw_records_with_both_fields():
    records = [_room(1, city="Hồ Chí Minh", hotel_city="HCM")]
    assert extract_cities(records) == {"Hồ Chí Minh", "HCM"}


def test_raw_record_with_only_hotel_city():
    assert extract_cities([_room(1, hotel_city="Huế")]) == {"Huế"}


def test_does_not_modify_city_strings():
    rooms = [Room(room_id=1, hotel_city="  Thành phố Hà Nội ")]
    assert extract_cities(rooms) == {"  Thành phố Hà Nội "}


def test_sorted_cities_ignores_diacritics_and_case():
    cities = {"Đà Nẵng", "hà Nội", "Cần Thơ", "Bắc Ninh"}
    assert sorted_cities(cities) == ["Bắc Ninh", "Cần Thơ", "Đà Nẵng", "hà Nội"]
