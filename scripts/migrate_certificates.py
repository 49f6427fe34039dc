#!/usr/bin/env python3
"""
Issue certificates for enrollments that already qualify.

Run: python scripts/migrate_certificates.py
"""
from __future__ import annotations

import sys
from pathlib import Path

_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from api.config import SessionLocal, create_db  # noqa: E402
from api.services.enrollment_service import backfill_certificates  # noqa: E402
from api.utils.logger import configure_logging, log_request  # noqa: E402

logger = configure_logging()


def main() -> int:
    create_db()
    db = SessionLocal()
    try:
        with log_request(logger, "certificate backfill"):
            summary = backfill_certificates(db)
    finally:
        db.close()

    print("Certificate backfill")
    print(f"  issued:        {summary.issued}")
    print(f"  already had:   {summary.already_issued}")
    print(f"  not qualified: {summary.not_qualified}")
    print(f"  total:         {summary.total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
