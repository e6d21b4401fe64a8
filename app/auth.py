import os
import secrets
from typing import Optional

from fastapi import Request, Response

from app.domain import Unauthenticated

# Настройки cookie сессии
SESSION_COOKIE_NAME = "session_id"
SESSION_MAX_AGE_SECONDS = 24 * 60 * 60
SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "0") == "1"


def generate_session_id() -> str:
    """Случайный непрозрачный токен: 32 байта в hex (64 символа)"""
    return secrets.token_hex(32)


def get_session_id(request: Request) -> Optional[str]:
    # Отсутствующий или битый заголовок Cookie означает "нет сессии"
    value = request.cookies.get(SESSION_COOKIE_NAME)
    if not value or not value.strip():
        return None
    return value.strip()


def attach_session(response: Response, session_id: str) -> Response:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_id,
        max_age=SESSION_MAX_AGE_SECONDS,
        path="/",
        httponly=True,
        samesite="strict",
        secure=SESSION_COOKIE_SECURE,
    )
    return response


def clear_session(response: Response) -> Response:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        samesite="strict",
        secure=SESSION_COOKIE_SECURE,
    )
    return response


def require_session_id(request: Request) -> str:
    """Зависимость FastAPI: токен из cookie или 401"""
    session_id = get_session_id(request)
    if session_id is None:
        raise Unauthenticated("No session found")
    return session_id
