"""
Heuristic matching between free-text city names and administrative divisions.

Hotel records carry city labels written however the hotel owner typed them
("Thành phố Hồ Chí Minh", "Hồ Chí Minh", "HCM"), while the location picker
works with the official province list. The functions here bridge the two.

Each direction is an ordered chain of small rules. A rule takes the
(unnormalized) needle and the candidate list and returns a match or
``None``; the first rule that returns something wins, and within a rule the
first candidate in list order wins. Substring containment is deliberately
loose: a short province name can match an unrelated longer city string.
Nothing here raises; "no match" is ``None``.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence

from ..api.models import Province, WireModel

_ADMIN_PREFIX_RE = re.compile(r"^(thành phố|tỉnh|tp\.?)\s*", re.IGNORECASE)

# Canonical province name -> spellings seen in hotel records
DEFAULT_CITY_ALIASES: dict[str, tuple[str, ...]] = {
    "hồ chí minh": ("ho chi minh", "hcm", "sài gòn", "saigon"),
    "hà nội": ("hanoi", "ha noi"),
    "đà nẵng": ("da nang", "danang"),
}

ProvinceRule = Callable[[str, Sequence[Province]], "str | None"]
CityRule = Callable[[str, Sequence[str]], "str | None"]


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def normalize_name(name: str) -> str:
    return name.lower().strip()


def strip_prefix(name: str) -> str:
    """Lowercase, trim and drop leading "Thành phố" / "Tỉnh" / "TP." prefixes (repeated ones too)."""
    stripped = normalize_name(name)
    while True:
        shorter = _ADMIN_PREFIX_RE.sub("", stripped, count=1).strip()
        if shorter == stripped:
            return stripped
        stripped = shorter


def _contains_either_way(a: str, b: str) -> bool:
    if not a or not b:
        return False
    return a in b or b in a


# ---------------------------------------------------------------------------
# City -> province
# ---------------------------------------------------------------------------


def exact_province_rule(city_name: str, provinces: Sequence[Province]) -> str | None:
    city = normalize_name(city_name)
    for province in provinces:
        if city == normalize_name(province.name):
            return province.code
    return None


def containment_province_rule(city_name: str, provinces: Sequence[Province]) -> str | None:
    city = normalize_name(city_name)
    for province in provinces:
        if _contains_either_way(city, normalize_name(province.name)):
            return province.code
    return None


def stripped_province_rule(city_name: str, provinces: Sequence[Province]) -> str | None:
    city = strip_prefix(city_name)
    for province in provinces:
        if city and city == strip_prefix(province.name):
            return province.code
    for province in provinces:
        if _contains_either_way(city, strip_prefix(province.name)):
            return province.code
    return None


PROVINCE_RULES: tuple[ProvinceRule, ...] = (
    exact_province_rule,
    containment_province_rule,
    stripped_province_rule,
)


def match_city_to_province(
    city_name: str,
    provinces: Sequence[Province],
    rules: Sequence[ProvinceRule] = PROVINCE_RULES,
) -> str | None:
    """Return the code of the province ``city_name`` refers to, or ``None``."""
    if not city_name:
        return None
    for rule in rules:
        code = rule(city_name, provinces)
        if code is not None:
            return code
    return None


# ---------------------------------------------------------------------------
# Province -> known city
# ---------------------------------------------------------------------------


def exact_city_rule(province_name: str, cities: Sequence[str]) -> str | None:
    full = normalize_name(province_name)
    stripped = strip_prefix(province_name)
    for city in cities:
        normalized = normalize_name(city)
        if normalized and normalized in (full, stripped):
            return city
    return None


def containment_city_rule(province_name: str, cities: Sequence[str]) -> str | None:
    stripped = strip_prefix(province_name)
    for city in cities:
        if _contains_either_way(normalize_name(city), stripped):
            return city
    return None


def alias_city_rule(
    province_name: str,
    cities: Sequence[str],
    aliases: Mapping[str, Sequence[str]] = DEFAULT_CITY_ALIASES,
) -> str | None:
    stripped = strip_prefix(province_name)
    for canonical, variants in aliases.items():
        if canonical not in stripped:
            continue
        for city in cities:
            normalized = normalize_name(city)
            if any(v in normalized for v in variants):
                return city
    return None


def find_best_matching_city(
    province_name: str,
    known_cities: Sequence[str],
    aliases: Mapping[str, Sequence[str]] = DEFAULT_CITY_ALIASES,
) -> str | None:
    """
    Pick the city string from the room inventory that best represents a province.

    Exact and containment matches on prefix-stripped names are tried first;
    the alias table is only consulted when neither finds anything.
    """
    rules: tuple[CityRule, ...] = (
        exact_city_rule,
        containment_city_rule,
        lambda name, cities: alias_city_rule(name, cities, aliases),
    )
    for rule in rules:
        city = rule(province_name, known_cities)
        if city is not None:
            return city
    return None


def find_city_for_district(district_name: str, known_cities: Sequence[str]) -> str | None:
    district = normalize_name(district_name)
    for city in known_cities:
        if _contains_either_way(normalize_name(city), district):
            return city
    return None


# ---------------------------------------------------------------------------
# Province picker options
# ---------------------------------------------------------------------------


class ProvinceOption(WireModel):
    code: str
    name: str
    has_data: bool
    matched_city: str | None = None


def province_options(
    provinces: Sequence[Province],
    known_cities: Sequence[str],
    show_all: bool = False,
    aliases: Mapping[str, Sequence[str]] = DEFAULT_CITY_ALIASES,
) -> list[ProvinceOption]:
    """Provinces annotated with their matching inventory city; only those with rooms unless ``show_all``."""
    options = []
    for province in provinces:
        matched = find_best_matching_city(province.name, known_cities, aliases)
        options.append(ProvinceOption(
            code=province.code,
            name=province.name,
            has_data=matched is not None,
            matched_city=matched,
        ))
    if show_all:
        return options
    return [o for o in options if o.has_data]
