from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app import schemas
from app.auth import require_session_id
from app.crud import crud_summer_houses, crud_users, crud_votes
from app.database import get_db
from app.domain import NotFound

router = APIRouter(tags=["votes"])


def _get_user_or_404(db: Session, session_id: str):
    db_user = crud_users.get_user_by_session_id(db, session_id)
    if db_user is None:
        raise NotFound("User not found")
    return db_user


@router.post("/votes", response_model=schemas.VoteResponse)
def cast_vote(
    payload: schemas.VoteRequest,
    session_id: str = Depends(require_session_id),
    db: Session = Depends(get_db),
):
    """Голос за дом. Повторный голос за тот же дом отклоняется с 400"""
    db_user = _get_user_or_404(db, session_id)

    if crud_summer_houses.get_summer_house(db, payload.summer_house_id) is None:
        raise NotFound("Summer house not found")

    vote = crud_votes.create_vote(
        db, user_id=db_user.id, summer_house_id=payload.summer_house_id
    )
    return {
        "vote": schemas.Vote.model_validate(vote),
        "user": crud_users.get_user_with_votes(db, session_id),
    }


@router.delete("/votes", response_model=schemas.DeleteVoteResponse)
def retract_vote(
    payload: schemas.VoteRequest,
    session_id: str = Depends(require_session_id),
    db: Session = Depends(get_db),
):
    """Отзыв голоса"""
    db_user = _get_user_or_404(db, session_id)

    deleted = crud_votes.delete_vote(
        db, user_id=db_user.id, summer_house_id=payload.summer_house_id
    )
    if not deleted:
        raise NotFound("Vote not found")

    return {"success": True, "user": crud_users.get_user_with_votes(db, session_id)}
