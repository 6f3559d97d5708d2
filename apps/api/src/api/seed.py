from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from devkit.config import load_settings
from devkit.db import AsyncDatabaseManager, Base, create_all_tables
from devkit.observability import configure_logging

from api.repositories.pincode_repository import BULK_LOAD_BATCH_SIZE, SqlPincodeRepository, read_pincode_csv

logger = logging.getLogger(__name__)


async def seed_from_csv(
    path: str | Path,
    database: AsyncDatabaseManager,
    *,
    create_tables: bool = False,
    batch_size: int = BULK_LOAD_BATCH_SIZE,
) -> int:
    """Stream a pincode CSV export into the ``pincodes`` table and return the row count."""
    await database.connect()
    if create_tables:
        await create_all_tables(database.engine, Base.metadata)
    repository = SqlPincodeRepository(database)
    loaded = await repository.bulk_load(read_pincode_csv(path), batch_size=batch_size)
    logger.info("pincode_seed_loaded", extra={"path": str(path), "rows": loaded})
    return loaded


async def _seed(path: Path, dsn: str, create_tables: bool, batch_size: int) -> int:
    database = AsyncDatabaseManager(dsn)
    try:
        return await seed_from_csv(path, database, create_tables=create_tables, batch_size=batch_size)
    finally:
        await database.disconnect()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="route-intelligence-seed", description="Load pincodes from a CSV export.")
    parser.add_argument("csv_path", type=Path)
    parser.add_argument("--create-tables", action="store_true", help="create missing tables before loading")
    parser.add_argument("--batch-size", type=int, default=BULK_LOAD_BATCH_SIZE)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings("route-intelligence-seed")
    configure_logging(settings.LOG_LEVEL)
    if not settings.DATABASE_URL:
        logger.error("pincode_seed_failed", extra={"reason": "DATABASE_URL is not set"})
        return 2
    if args.batch_size <= 0:
        logger.error("pincode_seed_failed", extra={"reason": "batch size must be > 0"})
        return 2
    asyncio.run(_seed(args.csv_path, settings.DATABASE_URL, args.create_tables, args.batch_size))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
