"""
Database reset utility.

    python scripts/reset_database.py --all      # drop and recreate every table
    python scripts/reset_database.py --jobs     # delete all job applications
    python scripts/reset_database.py --users    # delete all users (and their jobs)
"""
import argparse
import logging
import os
import sys

# Ensure we can import pathforge modules
sys.path.append(os.getcwd())

from pathforge.database import SessionLocal, init_db, purge_jobs, purge_users, reset_db

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Clean the PathForge database")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--all", action="store_true", help="drop all tables and recreate the schema")
    group.add_argument("--jobs", action="store_true", help="delete every job application")
    group.add_argument("--users", action="store_true", help="delete every user and their jobs")
    args = parser.parse_args(argv)

    if args.all:
        reset_db()
        logger.info("Database structure recreated")
        return 0

    init_db()
    db = SessionLocal()
    try:
        if args.jobs:
            logger.info(f"Deleted {purge_jobs(db)} job(s)")
        else:
            logger.info(f"Deleted {purge_users(db)} user(s)")
    except Exception as e:
        db.rollback()
        logger.error(f"Database cleanup failed: {e}")
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
