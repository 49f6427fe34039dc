#!/usr/bin/env python3
"""
Give an existing user the admin role.

Run: python scripts/promote_admin.py someone@example.com
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from api.config import SessionLocal  # noqa: E402
from api.utils.auth import ADMIN_ROLE, get_user_by_email  # noqa: E402
from api.utils.logger import configure_logging  # noqa: E402

logger = configure_logging()


def main() -> int:
    parser = argparse.ArgumentParser(description="Promote a user to admin.")
    parser.add_argument("email", help="Email of an existing account")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        user = get_user_by_email(args.email, db)
        if user is None:
            print(f"No user with email {args.email}", file=sys.stderr)
            return 1
        if user.role == ADMIN_ROLE:
            print(f"{user.email} is already an admin")
            return 0
        user.role = ADMIN_ROLE
        db.commit()
        logger.info("user promoted to admin user_id=%s", user.id)
        print(f"{user.email} is now an admin")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
