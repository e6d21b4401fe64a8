import logging
import os
import sys

from app.database import SessionLocal, engine
from app.migrations import apply_migrations
from app.seed import seed_summer_houses


def main():
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    apply_migrations(engine)

    db = SessionLocal()
    try:
        created = seed_summer_houses(db)
    finally:
        db.close()

    print(f"Seeding complete: {created} summer houses created")
    return 0


if __name__ == "__main__":
    sys.exit(main())
