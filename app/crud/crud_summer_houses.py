from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from app import models, schemas
from app.database import storage_guard


def get_summer_house(db: Session, summer_house_id: int):
    with storage_guard(db, "Failed to get summer house"):
        return (
            db.query(models.SummerHouse)
            .filter(models.SummerHouse.id == summer_house_id)
            .first()
        )


def get_summer_houses(db: Session):
    with storage_guard(db, "Failed to get summer houses"):
        return (
            db.query(models.SummerHouse)
            .order_by(models.SummerHouse.name.asc(), models.SummerHouse.id.asc())
            .all()
        )


def count_summer_houses(db: Session) -> int:
    with storage_guard(db, "Failed to count summer houses"):
        return db.query(func.count(models.SummerHouse.id)).scalar()


def create_summer_houses(db: Session, houses):
    """Создает дома одной транзакцией. houses: dict с name, image_url, booking_url"""
    db_houses = [models.SummerHouse(**house) for house in houses]
    with storage_guard(db, "Failed to create summer houses"):
        db.add_all(db_houses)
        db.commit()
        for db_house in db_houses:
            db.refresh(db_house)
    return db_houses


def get_summer_houses_with_vote_counts(db: Session):
    # Рейтинг: больше голосов выше, при равенстве по имени
    vote_count = func.count(models.Vote.id)
    with storage_guard(db, "Failed to get results"):
        rows = (
            db.query(models.SummerHouse, vote_count.label("vote_count"))
            .outerjoin(
                models.Vote, models.SummerHouse.id == models.Vote.summer_house_id
            )
            .group_by(models.SummerHouse.id)
            .order_by(
                vote_count.desc(),
                models.SummerHouse.name.asc(),
                models.SummerHouse.id.asc(),
            )
            .all()
        )

    result = []
    for house, count in rows:
        house_dict = schemas.SummerHouse.model_validate(house).model_dump()
        house_dict["vote_count"] = count
        result.append(schemas.SummerHouseWithVoteCount(**house_dict))

    return result
