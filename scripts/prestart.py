import logging
import os
import sys

from app.database import engine
from app.migrations import apply_migrations


def fail(msg: str, code: int = 1):
    sys.stderr.write(msg.strip() + "\n")
    sys.exit(code)


def main(argv):
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    # Схема должна быть готова до старта сервера
    try:
        apply_migrations(engine)
    except Exception as exc:
        fail(f"Startup check failed: could not apply migrations: {exc}", code=2)
    if argv:
        os.execvp(argv[0], argv)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
