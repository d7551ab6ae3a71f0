#!/usr/bin/env python3
"""
Registration Key Script

Creates registration keys so new users can sign up. Each key admits
exactly one registration.

Usage:
    # From project root with venv activated:
    python scripts/create_registration_keys.py              # one random key
    python scripts/create_registration_keys.py --count 5    # five random keys
    python scripts/create_registration_keys.py --code BOOKCLUB-2024
    python scripts/create_registration_keys.py --list       # show unused keys
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from reading_list_api.database import SessionLocal
from reading_list_api.services.registration_keys import (
    create_registration_keys,
    list_unused_keys,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Create registration keys for new users"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="Number of random keys to create (default: 1)"
    )
    parser.add_argument(
        "--code",
        action="append",
        help="Use this exact key code instead of a random one (repeatable)"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List unused keys and exit"
    )

    args = parser.parse_args()

    if args.count < 1:
        parser.error("--count must be at least 1")

    db = SessionLocal()
    try:
        if args.list:
            for code in list_unused_keys(db):
                print(code)
            return 0

        try:
            codes = create_registration_keys(db, args.count, codes=args.code)
        except ValueError as e:
            logger.error(str(e))
            return 1

        # Printed on stdout so the output can be piped
        for code in codes:
            print(code)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
