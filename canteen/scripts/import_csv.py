"""Import the canteen spreadsheet export into the entries table."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from canteen.db.base import Base
from canteen.db.session import SessionLocal, engine
from canteen.repositories.sql import SqlStore
from canteen.services.csv_import import import_csv

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Import canteen entries from a CSV export")
    parser.add_argument("path", type=Path, help="CSV file with Id,dato,Navn,Fyritoka,Maltid,NrOfPersons,Umbod columns")
    parser.add_argument(
        "--timezone",
        default="UTC",
        help="Time zone the dato column was recorded in (default: UTC)",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    if not args.path.exists():
        logger.error("File not found: %s", args.path)
        return 1
    try:
        tz = ZoneInfo(args.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.error("Unknown time zone: %s", args.timezone)
        return 1

    Base.metadata.create_all(bind=engine)
    logger.info("[IMPORT] Reading %s", args.path)
    with args.path.open(encoding="utf-8-sig", newline="") as handle, SessionLocal() as session:
        result = import_csv(SqlStore(session), handle, tz=tz)

    logger.info("[IMPORT] Import finished. Success: %s, Errors: %s", result.imported, result.failed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
