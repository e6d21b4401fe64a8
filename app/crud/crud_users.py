from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app import models, schemas
from app.crud import crud_votes
from app.database import storage_guard
from app.domain import Conflict, NotFound


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(db: Session, user_id: int):
    with storage_guard(db, "Failed to get user"):
        return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str):
    with storage_guard(db, "Failed to get user"):
        return (
            db.query(models.User)
            .filter(models.User.email == normalize_email(email))
            .first()
        )


def get_user_by_session_id(db: Session, session_id: str):
    with storage_guard(db, "Failed to get user"):
        return (
            db.query(models.User).filter(models.User.session_id == session_id).first()
        )


def create_user(db: Session, name: str, email: str, session_id: str):
    email = normalize_email(email)
    # Проверяем email до вставки, уникальный индекс страхует от гонки
    if get_user_by_email(db, email) is not None:
        raise Conflict("User with this email already exists")

    db_user = models.User(name=name.strip(), email=email, session_id=session_id)
    try:
        with storage_guard(db, "Failed to create user"):
            db.add(db_user)
            db.commit()
            db.refresh(db_user)
    except IntegrityError as exc:
        raise Conflict("User with this email already exists") from exc
    return db_user


def update_user_session(db: Session, user_id: int, session_id: str):
    """Перезаписывает токен сессии пользователя (вход с нового устройства)"""
    db_user = get_user(db, user_id)
    if db_user is None:
        raise NotFound("User not found")

    try:
        with storage_guard(db, "Failed to update session"):
            db_user.session_id = session_id
            db.commit()
            db.refresh(db_user)
    except IntegrityError as exc:
        raise Conflict("Session is already in use") from exc
    return db_user


def get_user_with_votes(
    db: Session, session_id: str
) -> Optional[schemas.UserWithVotes]:
    db_user = get_user_by_session_id(db, session_id)
    if db_user is None:
        return None

    votes = crud_votes.get_votes_by_user_id(db, db_user.id)
    user = schemas.User.model_validate(db_user).model_dump()
    return schemas.UserWithVotes(
        **user, votes=[schemas.VoteStamp.model_validate(v) for v in votes]
    )
