#!/usr/bin/env python3
"""
Script to register a book in lendtrack from the command line.
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from lendtrack.configs import DB_URI
from lendtrack.core.db import Store
from lendtrack.core.api import LendTrackAPI
from lendtrack.core.exceptions import ValidationError, StoreError


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Register a book in lendtrack"
    )
    parser.add_argument("--title", type=str, required=True, help="Book title")
    parser.add_argument("--author", type=str, required=True, help="Book author")
    parser.add_argument(
        "--student",
        type=str,
        required=True,
        help="Name of the student registering the book"
    )
    parser.add_argument(
        "--db",
        type=str,
        default=DB_URI,
        help="Database URI (defaults to the configured database)"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    store = Store(args.db)
    try:
        store.init()
        with store.session() as session:
            book = LendTrackAPI.create_book(session, args.title, args.author, args.student)
            print(f"✓ Added book {book.id}: {book.title} by {book.author}")
    except ValidationError as e:
        print(f"✗ {e}")
        return 1
    except StoreError as e:
        print(f"✗ Database error: {e}")
        return 1
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
