import argparse

from cloofy.config import get_settings
from cloofy.core.logging import setup_logging
from cloofy.services.seed_service import seed_defaults
from cloofy.storage import storage_from_settings


def parse_args():
    parser = argparse.ArgumentParser(description="Seed the starter CLOOFY menu.")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Seed even when ingredients already exist.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    storage = storage_from_settings(get_settings())
    with storage:
        if not seed_defaults(storage, force=args.force):
            print("Seed skipped: ingredients already exist.")
            return
    print("Seed complete.")


if __name__ == "__main__":
    main()
