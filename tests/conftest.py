# tests/conftest.py
import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]  # корень репозитория
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Приложение не должно создавать voting.db при импорте в тестах
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from app.crud import crud_summer_houses, crud_users  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.migrations import apply_migrations  # noqa: E402

# SQLite в памяти для тестов
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_engine():
    return engine


@pytest.fixture(scope="function")
def db_session():
    """Создает чистую БД для каждого теста и удаляет её после"""
    apply_migrations(engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Удаляем все данные после теста
        Base.metadata.drop_all(bind=engine)
        with engine.begin() as conn:
            conn.execute(text("DROP TABLE IF EXISTS alembic_version"))


@pytest.fixture(scope="function")
def client(db_session):
    """Создает тестовый клиент с перенаправлением на тестовую БД"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    # Важно: не пробрасываем исключения сервера наружу, чтобы получить корректный 500-ответ
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def houses(db_session):
    """Три дома в каталоге"""
    return crud_summer_houses.create_summer_houses(
        db_session,
        [
            {
                "name": name,
                "image_url": f"https://img.example.com/{slug}.jpg",
                "booking_url": f"https://book.example.com/{slug}",
            }
            for name, slug in (
                ("Skagen - Strandhus", "skagen"),
                ("Ebeltoft - Feriehus", "ebeltoft"),
                ("Aabenraa - Sommerhus", "aabenraa"),
            )
        ],
    )


@pytest.fixture(scope="function")
def make_user(db_session):
    counter = {"n": 0}

    def _make(name="Test User", email=None):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        return crud_users.create_user(
            db_session, name=name, email=email, session_id=f"session-{counter['n']}"
        )

    return _make


@pytest.fixture(scope="function")
def registered(client):
    """Регистрирует пользователя через API; cookie остаётся в клиенте"""
    response = client.post(
        "/api/users", json={"name": "Anna", "email": "anna@example.com"}
    )
    assert response.status_code == 200
    return response.json()["user"]
