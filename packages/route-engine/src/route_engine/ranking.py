"""Relevance ordering for pincode and place-name searches."""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import IntEnum

from route_engine.models import LocationRecord

_NUMERIC_QUERY = re.compile(r"^[0-9]+$")


class MatchTier(IntEnum):
    EXACT_CITY = 1
    EXACT_DISTRICT = 2
    CITY_PREFIX = 3
    DISTRICT_PREFIX = 4
    SUBSTRING = 5


def is_numeric_query(query: str) -> bool:
    return bool(_NUMERIC_QUERY.match(query))


def normalize_query(query: str) -> str:
    return query.strip().lower()


def match_tier(record: LocationRecord, term: str) -> MatchTier | None:
    city = (record.city or "").lower()
    district = record.district.lower()
    if city == term:
        return MatchTier.EXACT_CITY
    if district == term:
        return MatchTier.EXACT_DISTRICT
    if city.startswith(term):
        return MatchTier.CITY_PREFIX
    if district.startswith(term):
        return MatchTier.DISTRICT_PREFIX
    if term in city or term in district:
        return MatchTier.SUBSTRING
    return None


def rank_text_matches(records: Iterable[LocationRecord], query: str, limit: int) -> list[LocationRecord]:
    if limit <= 0:
        raise ValueError("limit must be > 0")
    term = normalize_query(query)
    scored = []
    for record in records:
        tier = match_tier(record, term)
        if tier is not None:
            scored.append((tier, record.code, record))
    scored.sort(key=lambda item: (item[0], item[1]))
    return [record for _, _, record in scored[:limit]]


def rank_prefix_matches(records: Iterable[LocationRecord], prefix: str, limit: int) -> list[LocationRecord]:
    if limit <= 0:
        raise ValueError("limit must be > 0")
    matched = sorted((record for record in records if record.code.startswith(prefix)), key=lambda r: r.code)
    return matched[:limit]
