from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, Protocol

from devkit.db import AsyncDatabaseManager, Base
from sqlalchemy import Float, Integer, String, case, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, mapped_column

from route_engine.errors import UpstreamUnavailable
from route_engine.models import LocationRecord
from route_engine.ranking import rank_prefix_matches

TEXT_CANDIDATE_LIMIT = 1000
BULK_LOAD_BATCH_SIZE = 500
PINCODE_COLUMNS = ("pincode", "city", "district", "state_name", "state_code", "latitude", "longitude")


class PincodeORM(Base):
    __tablename__ = "pincodes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pincode: Mapped[str] = mapped_column(String(10), unique=True, index=True, nullable=False)
    city: Mapped[str | None] = mapped_column(String(100), index=True, nullable=True)
    district: Mapped[str | None] = mapped_column(String(100), index=True, nullable=True)
    state_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)


class PincodeRepositoryLike(Protocol):
    async def get(self, code: str) -> LocationRecord | None: ...

    async def search_prefix(self, prefix: str, limit: int) -> list[LocationRecord]: ...

    async def search_text(self, term: str) -> list[LocationRecord]: ...


def record_from_row(row: Any) -> LocationRecord:
    return LocationRecord.from_fields(
        code=str(row["pincode"]),
        city=row.get("city") or None,
        district=row.get("district") or None,
        state=row.get("state_name") or None,
        latitude=_optional_float(row.get("latitude")),
        longitude=_optional_float(row.get("longitude")),
    )


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def read_pincode_csv(path: str | Path) -> Iterator[dict[str, Any]]:
    """Yield pincode rows from a CSV export of the pincode master table.

    Extra columns are ignored; empty cells become ``None``.
    """
    with open(path, newline="", encoding="utf-8") as handle:
        for raw in csv.DictReader(handle):
            if not (raw.get("pincode") or "").strip():
                continue
            yield {column: (raw.get(column) or "").strip() or None for column in PINCODE_COLUMNS}


SEED_PINCODES: tuple[dict[str, Any], ...] = (
    {"pincode": "110001", "city": "New Delhi", "district": "New Delhi", "state_name": "Delhi", "latitude": 28.6328, "longitude": 77.2197},
    {"pincode": "400001", "city": "Mumbai", "district": "Mumbai", "state_name": "Maharashtra", "latitude": 18.9388, "longitude": 72.8354},
    {"pincode": "411001", "city": "Pune", "district": "Pune", "state_name": "Maharashtra", "latitude": 18.5204, "longitude": 73.8567},
    {"pincode": "411045", "city": None, "district": "Pune", "state_name": "Maharashtra", "latitude": 18.5590, "longitude": 73.7868},
    {"pincode": "412105", "city": "Alandi", "district": "Pune", "state_name": "Maharashtra", "latitude": 18.6770, "longitude": 73.8986},
    {"pincode": "560001", "city": "Bengaluru", "district": "Bengaluru Urban", "state_name": "Karnataka", "latitude": 12.9716, "longitude": 77.5946},
    {"pincode": "560050", "city": "Bengaluru", "district": "Bengaluru Urban", "state_name": "Karnataka", "latitude": 12.9260, "longitude": 77.5640},
    {"pincode": "560300", "city": "Bengaluru", "district": "Bengaluru Urban", "state_name": "Karnataka", "latitude": None, "longitude": None},
    {"pincode": "562110", "city": "Doddaballapur", "district": "Bengaluru Rural", "state_name": "Karnataka", "latitude": 13.2923, "longitude": 77.5431},
    {"pincode": "600001", "city": "Chennai", "district": "Chennai", "state_name": "Tamil Nadu", "latitude": 13.0827, "longitude": 80.2707},
    {"pincode": "613001", "city": "Thanjavur", "district": "Thanjavur", "state_name": "Tamil Nadu", "latitude": 10.78523, "longitude": 79.13909},
    {"pincode": "682001", "city": "Kochi", "district": "Ernakulam", "state_name": "Kerala", "latitude": 9.9312, "longitude": 76.2673},
    {"pincode": "700001", "city": "Kolkata", "district": "Kolkata", "state_name": "West Bengal", "latitude": 22.5726, "longitude": 88.3639},
)


class InMemoryPincodeRepository:
    def __init__(self, rows: Iterable[dict[str, Any]] | None = None) -> None:
        self._records: dict[str, LocationRecord] = {}
        self.bulk_load(SEED_PINCODES if rows is None else rows)

    def bulk_load(self, rows: Iterable[dict[str, Any]]) -> int:
        loaded = 0
        for row in rows:
            record = record_from_row(row)
            self._records[record.code] = record
            loaded += 1
        return loaded

    async def get(self, code: str) -> LocationRecord | None:
        return self._records.get(code)

    async def search_prefix(self, prefix: str, limit: int) -> list[LocationRecord]:
        return rank_prefix_matches(self._records.values(), prefix, limit)

    async def search_text(self, term: str) -> list[LocationRecord]:
        needle = term.lower()
        return [
            record
            for record in self._records.values()
            if needle in (record.city or "").lower() or needle in record.district.lower()
        ]


class SqlPincodeRepository:
    def __init__(self, db: AsyncDatabaseManager, candidate_limit: int = TEXT_CANDIDATE_LIMIT) -> None:
        self._db = db
        self._candidate_limit = candidate_limit

    async def get(self, code: str) -> LocationRecord | None:
        async def _run(session):
            row = await session.scalar(select(PincodeORM).where(PincodeORM.pincode == code))
            return self._to_record(row) if row is not None else None

        return await self._run(_run)

    async def search_prefix(self, prefix: str, limit: int) -> list[LocationRecord]:
        async def _run(session):
            stmt = (
                select(PincodeORM)
                .where(PincodeORM.pincode.like(f"{prefix}%"))
                .order_by(PincodeORM.pincode)
                .limit(limit)
            )
            rows = (await session.scalars(stmt)).all()
            return [self._to_record(row) for row in rows]

        return await self._run(_run)

    async def search_text(self, term: str) -> list[LocationRecord]:
        needle = term.lower()
        city = func.lower(func.coalesce(PincodeORM.city, ""))
        district = func.lower(func.coalesce(PincodeORM.district, ""))

        async def _run(session):
            relevance = case(
                (city == needle, 1),
                (district == needle, 2),
                (city.like(f"{needle}%"), 3),
                (district.like(f"{needle}%"), 4),
                else_=5,
            )
            stmt = (
                select(PincodeORM)
                .where(or_(city.like(f"%{needle}%"), district.like(f"%{needle}%")))
                .order_by(relevance, PincodeORM.pincode)
                .limit(self._candidate_limit)
            )
            rows = (await session.scalars(stmt)).all()
            return [self._to_record(row) for row in rows]

        return await self._run(_run)

    async def bulk_load(self, rows: Iterable[dict[str, Any]], batch_size: int = BULK_LOAD_BATCH_SIZE) -> int:
        loaded = 0
        batch: list[PincodeORM] = []
        for row in rows:
            record = record_from_row(row)
            batch.append(
                PincodeORM(
                    pincode=record.code,
                    city=record.city,
                    district=record.district or None,
                    state_name=record.state or None,
                    state_code=row.get("state_code") or None,
                    latitude=record.coordinate.latitude if record.coordinate else None,
                    longitude=record.coordinate.longitude if record.coordinate else None,
                )
            )
            if len(batch) >= batch_size:
                loaded += await self._insert_batch(batch)
                batch = []
        if batch:
            loaded += await self._insert_batch(batch)
        return loaded

    async def _insert_batch(self, batch: list[PincodeORM]) -> int:
        async def _run(session):
            session.add_all(batch)
            return len(batch)

        return await self._run(_run)

    async def _run(self, fn):
        try:
            return await self._db.run_with_session(fn)
        except SQLAlchemyError as exc:
            raise UpstreamUnavailable("pincode store is unavailable") from exc
        except OSError as exc:
            raise UpstreamUnavailable("pincode store is unreachable") from exc

    def _to_record(self, row: PincodeORM) -> LocationRecord:
        return LocationRecord.from_fields(
            code=row.pincode,
            city=row.city,
            district=row.district,
            state=row.state_name,
            latitude=row.latitude,
            longitude=row.longitude,
        )
