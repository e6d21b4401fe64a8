from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app import models
from app.database import storage_guard
from app.domain import Conflict


def _find_vote(db: Session, user_id: int, summer_house_id: int):
    return (
        db.query(models.Vote)
        .filter(
            models.Vote.user_id == user_id,
            models.Vote.summer_house_id == summer_house_id,
        )
        .first()
    )


def create_vote(db: Session, user_id: int, summer_house_id: int):
    # Уникальный индекс (user_id, summer_house_id) решает, был ли уже голос,
    # без отдельной проверки перед вставкой
    db_vote = models.Vote(user_id=user_id, summer_house_id=summer_house_id)
    try:
        with storage_guard(db, "Failed to create vote"):
            db.add(db_vote)
            db.commit()
            db.refresh(db_vote)
    except IntegrityError as exc:
        raise Conflict("Already voted for this summer house") from exc
    return db_vote


def get_votes_by_user_id(db: Session, user_id: int):
    with storage_guard(db, "Failed to get votes"):
        return (
            db.query(models.Vote)
            .filter(models.Vote.user_id == user_id)
            .order_by(models.Vote.id)
            .all()
        )


def delete_vote(db: Session, user_id: int, summer_house_id: int) -> bool:
    """Удаляет голос. False, если удалять нечего"""
    with storage_guard(db, "Failed to delete vote"):
        db_vote = _find_vote(db, user_id, summer_house_id)
        if db_vote is None:
            return False

        db.delete(db_vote)
        db.commit()
        return True
