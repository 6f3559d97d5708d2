from __future__ import annotations

import pytest
from route_engine.errors import UpstreamUnavailable
from sqlalchemy.exc import SQLAlchemyError

from api.repositories.pincode_repository import (
    InMemoryPincodeRepository,
    SqlPincodeRepository,
    read_pincode_csv,
    record_from_row,
)


class FailingDatabase:
    async def run_with_session(self, fn):
        raise SQLAlchemyError("connection refused")


class RecordingSession:
    def __init__(self) -> None:
        self.added: list = []

    def add_all(self, rows) -> None:
        self.added.extend(rows)


class RecordingDatabase:
    def __init__(self) -> None:
        self.sessions: list[RecordingSession] = []

    async def run_with_session(self, fn):
        session = RecordingSession()
        self.sessions.append(session)
        return await fn(session)


def test_record_from_row_prefers_city_for_display_name() -> None:
    record = record_from_row(
        {"pincode": "411045", "city": "", "district": "Pune", "state_name": "Maharashtra", "latitude": "18.559", "longitude": "73.7868"}
    )

    assert record.display_name == "Pune"
    assert record.city is None
    assert record.coordinate is not None
    assert record.coordinate.latitude == 18.559


def test_record_from_row_without_place_names_is_unknown() -> None:
    record = record_from_row({"pincode": "123456", "latitude": None, "longitude": None})

    assert record.display_name == "Unknown"
    assert record.coordinate is None


@pytest.mark.asyncio
async def test_in_memory_bulk_load_replaces_existing_codes() -> None:
    repository = InMemoryPincodeRepository(rows=[])

    loaded = repository.bulk_load(
        [
            {"pincode": "400001", "city": "Mumbai", "district": "Mumbai", "state_name": "Maharashtra"},
            {"pincode": "400001", "city": "Fort", "district": "Mumbai", "state_name": "Maharashtra"},
        ]
    )
    record = await repository.get("400001")

    assert loaded == 2
    assert record is not None
    assert record.display_name == "Fort"


@pytest.mark.asyncio
async def test_in_memory_prefix_search_is_ordered_and_capped() -> None:
    repository = InMemoryPincodeRepository()

    records = await repository.search_prefix("41", limit=2)

    assert [record.code for record in records] == ["411001", "411045"]


def test_read_pincode_csv_skips_blank_codes(tmp_path) -> None:
    path = tmp_path / "pincodes.csv"
    path.write_text(
        "pincode,city,district,state_name,state_code,latitude,longitude,provider\n"
        "613001,Thanjavur,Thanjavur,Tamil Nadu,TN,10.78523,79.13909,google\n"
        ",Nowhere,,,,,,google\n"
        "560300,,Bengaluru Urban,Karnataka,KA,,,google\n",
        encoding="utf-8",
    )

    rows = list(read_pincode_csv(path))

    assert [row["pincode"] for row in rows] == ["613001", "560300"]
    assert rows[0]["latitude"] == "10.78523"
    assert rows[1]["city"] is None
    assert "provider" not in rows[0]


@pytest.mark.asyncio
async def test_sql_repository_wraps_driver_errors() -> None:
    repository = SqlPincodeRepository(FailingDatabase())

    with pytest.raises(UpstreamUnavailable):
        await repository.get("560001")


@pytest.mark.asyncio
async def test_sql_bulk_load_inserts_in_batches() -> None:
    database = RecordingDatabase()
    repository = SqlPincodeRepository(database)
    rows = [
        {"pincode": f"56000{index}", "city": "Bengaluru", "district": "Bengaluru Urban", "state_name": "Karnataka"}
        for index in range(5)
    ]

    loaded = await repository.bulk_load(rows, batch_size=2)

    assert loaded == 5
    assert [len(session.added) for session in database.sessions] == [2, 2, 1]
    assert database.sessions[0].added[0].pincode == "560000"


@pytest.mark.asyncio
async def test_in_memory_prefix_search_rejects_non_positive_limit() -> None:
    repository = InMemoryPincodeRepository()

    with pytest.raises(ValueError):
        await repository.search_prefix("41", limit=0)
