import logging
import os
import sqlite3
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.domain import StorageError

# Подключение к БД из переменных окружения, по умолчанию локальный SQLite-файл
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./voting.db")

logger = logging.getLogger("voting.storage")


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # Запросы FastAPI выполняются в пуле потоков
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite не проверяет внешние ключи без этой прагмы
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Функция для получения сессии БД
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def storage_guard(db: Session, failure_message: str):
    """Откатывает транзакцию при сбое и превращает ошибки SQLAlchemy в StorageError.

    IntegrityError пробрасывается как есть: что означает нарушение ограничения,
    решает вызывающий код.
    """
    try:
        yield
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("%s: %s", failure_message, exc.__class__.__name__)
        raise StorageError(failure_message) from exc
