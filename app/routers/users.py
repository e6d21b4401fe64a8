import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app import schemas
from app.auth import (
    attach_session,
    clear_session,
    generate_session_id,
    get_session_id,
    require_session_id,
)
from app.crud import crud_users
from app.database import get_db
from app.domain import NotFound, Unauthenticated

router = APIRouter(tags=["users"])

_logger = logging.getLogger("voting.api")


@router.post("/users", response_model=schemas.UserResponse)
def register_user(
    user: schemas.UserCreate, response: Response, db: Session = Depends(get_db)
):
    """Регистрация по имени и email, выдаёт новую cookie сессии"""
    session_id = generate_session_id()
    db_user = crud_users.create_user(
        db, name=user.name, email=user.email, session_id=session_id
    )
    _logger.info("Registered user id=%s", db_user.id)

    attach_session(response, session_id)
    return {"user": crud_users.get_user_with_votes(db, session_id)}


@router.post("/users/check", response_model=schemas.CheckUserResponse)
def check_user_exists(payload: schemas.EmailRequest, db: Session = Depends(get_db)):
    return {"exists": crud_users.get_user_by_email(db, payload.email) is not None}


@router.post("/users/login", response_model=schemas.UserResponse)
def login(
    payload: schemas.EmailRequest, response: Response, db: Session = Depends(get_db)
):
    """Вход по email уже зарегистрированного пользователя.

    Токен сессии пересоздаётся, прежняя cookie перестаёт работать.
    """
    db_user = crud_users.get_user_by_email(db, payload.email)
    if db_user is None:
        raise NotFound("User not found")

    session_id = generate_session_id()
    crud_users.update_user_session(db, user_id=db_user.id, session_id=session_id)

    attach_session(response, session_id)
    return {"user": crud_users.get_user_with_votes(db, session_id)}


@router.get("/users", response_model=schemas.UserResponse)
def read_current_user(
    session_id: str = Depends(require_session_id), db: Session = Depends(get_db)
):
    user = crud_users.get_user_with_votes(db, session_id)
    if user is None:
        # Неизвестный токен для клиента то же самое, что отсутствие сессии
        raise Unauthenticated("No session found")
    return {"user": user}


@router.delete("/users", response_model=schemas.SuccessResponse)
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    session_id = get_session_id(request)
    if session_id is not None:
        db_user = crud_users.get_user_by_session_id(db, session_id)
        if db_user is not None:
            # Старый токен больше не должен находить пользователя
            crud_users.update_user_session(
                db, user_id=db_user.id, session_id=generate_session_id()
            )

    clear_session(response)
    return {"success": True}
