from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from route_engine.errors import NotFoundError, RouteSide, ValidationError
from route_engine.estimates import estimate_road_route
from route_engine.models import Coordinate, LocationRecord
from route_engine.ranking import is_numeric_query, rank_text_matches

from api.repositories.pincode_repository import PincodeRepositoryLike
from api.schemas.pincode import PincodeSearchItem, PincodeSearchResult

logger = logging.getLogger(__name__)

_PREFIX_PATTERN = re.compile(r"^[0-9]{4,6}$")
_PINCODE_PATTERN = re.compile(r"^[0-9]{6}$")


@dataclass(frozen=True)
class SearchMode:
    name: str
    limit: int
    min_length: int


class LocationService:
    """Resolves pincodes to locations and runs ranked pincode/place searches.

    When a search names an origin pincode with coordinates, every result that
    has coordinates carries a road-adjusted route estimate from that origin.
    """

    def __init__(
        self,
        repository: PincodeRepositoryLike,
        search_limit: int = 10,
        prefix_limit: int = 100,
    ) -> None:
        self._repository = repository
        self.combined_mode = SearchMode(name="combined", limit=search_limit, min_length=3)
        self.prefix_mode = SearchMode(name="prefix", limit=prefix_limit, min_length=4)

    async def lookup(self, code: str, side: RouteSide | None = None) -> LocationRecord:
        if not _PINCODE_PATTERN.match(code):
            raise ValidationError("Pincode must be exactly 6 digits")
        record = await self._repository.get(code)
        if record is None:
            raise NotFoundError(f"Pincode {code} not found", side=side)
        return record

    @staticmethod
    def require_coordinate(record: LocationRecord, side: RouteSide | None = None) -> Coordinate:
        if record.coordinate is None:
            raise NotFoundError(
                f"Coordinates not available for pincode {record.code}",
                side=side,
                missing_coordinates=True,
            )
        return record.coordinate

    async def get_pincode(self, code: str) -> PincodeSearchItem:
        return PincodeSearchItem.from_record(await self.lookup(code))

    async def search(self, query: str, origin_code: str | None = None) -> PincodeSearchResult:
        term = query.strip()
        mode = self.combined_mode
        if len(term) < mode.min_length:
            raise ValidationError(f"Minimum {mode.min_length} characters required")
        if is_numeric_query(term):
            records = await self._repository.search_prefix(term, mode.limit)
        else:
            candidates = await self._repository.search_text(term)
            records = rank_text_matches(candidates, term, mode.limit)
        return await self._build_result(term, records, mode, origin_code)

    async def search_prefix(self, prefix: str, origin_code: str | None = None) -> PincodeSearchResult:
        term = prefix.strip()
        mode = self.prefix_mode
        if not _PREFIX_PATTERN.match(term):
            raise ValidationError(f"Prefix must be {mode.min_length} to 6 digits")
        records = await self._repository.search_prefix(term, mode.limit)
        return await self._build_result(term, records, mode, origin_code)

    async def _build_result(
        self,
        term: str,
        records: list[LocationRecord],
        mode: SearchMode,
        origin_code: str | None,
    ) -> PincodeSearchResult:
        origin = await self._origin_coordinate(origin_code)
        items = []
        for record in records[: mode.limit]:
            estimate = None
            if origin is not None and record.coordinate is not None:
                estimate = estimate_road_route(origin, record.coordinate)
            items.append(PincodeSearchItem.from_record(record, estimate))
        logger.info(
            "pincode_search",
            extra={
                "mode": mode.name,
                "result_count": len(items),
                "augmented": origin is not None,
            },
        )
        return PincodeSearchResult(query=term, count=len(items), results=items)

    async def _origin_coordinate(self, origin_code: str | None) -> Coordinate | None:
        if not origin_code:
            return None
        record = await self._repository.get(origin_code)
        if record is None or record.coordinate is None:
            logger.info(
                "route_augmentation_skipped",
                extra={"origin_code": origin_code, "reason": "unknown" if record is None else "no_coordinates"},
            )
            return None
        return record.coordinate
