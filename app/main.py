import logging
import os
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.database import SessionLocal, engine
from app.domain import ApiError, ValidationFailed
from app.migrations import apply_migrations
from app.routers import summer_houses, users, votes
from app.seed import seed_summer_houses

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()
]
SEED_ON_STARTUP = os.getenv("SEED_ON_STARTUP", "0") == "1"
DB_CONNECT_RETRIES = int(os.getenv("DB_CONNECT_RETRIES", "30"))

logger = logging.getLogger("voting.api")
if not logger.handlers:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))


# Миграции до того, как сервер начнёт принимать запросы
@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    yield


app = FastAPI(title="Summer House Voting", version="1.0.0", lifespan=lifespan)


@app.middleware("http")
async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    # Ответы API зависят от сессии, кешировать их нельзя
    if request.url.path.startswith("/api"):
        response.headers["Cache-Control"] = "no-store"
    return response


# Работаем с X-Correlation-ID
@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    cid = request.headers.get("X-Correlation-ID") or str(uuid4())
    request.state.correlation_id = cid
    response = await call_next(request)
    response.headers["X-Correlation-ID"] = cid
    return response


def _error_response(
    request: Request, *, status_code: int, message: str, headers=None
):
    cid = getattr(request.state, "correlation_id", None) or str(uuid4())
    response = JSONResponse(
        status_code=status_code, content={"error": message}, headers=headers
    )
    response.headers["X-Correlation-ID"] = cid
    return response


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    if exc.status >= 500:
        cid = getattr(request.state, "correlation_id", "-")
        logger.error("%s: cid=%s path=%s", exc.message, cid, request.url.path)
    return _error_response(request, status_code=exc.status, message=exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    # Заголовки исключения (Allow у 405) отдаём клиенту
    return _error_response(
        request,
        status_code=exc.status_code,
        message=message,
        headers=getattr(exc, "headers", None),
    )


def _describe_validation_errors(errors) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request body: " + "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Битый JSON и несоответствие схеме одинаково дают 400
    error = ValidationFailed(_describe_validation_errors(exc.errors()))
    return _error_response(request, status_code=error.status, message=error.message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    cid = getattr(request.state, "correlation_id", "-")
    logger.error(
        "Unhandled error: cid=%s path=%s", cid, request.url.path, exc_info=exc
    )
    return _error_response(request, status_code=500, message="Internal server error")


@app.get("/health")
def health():
    return {"status": "ok"}


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type", "X-Correlation-ID"],
)


def wait_for_db(max_retries: int = DB_CONNECT_RETRIES):
    retries = 0

    while retries < max_retries:
        try:
            db = SessionLocal()
            db.execute(text("SELECT 1"))
            db.close()
            return True
        except OperationalError:
            retries += 1
            logger.warning(
                "Database unavailable, attempt %s of %s", retries, max_retries
            )
            time.sleep(2)

    return False


async def startup():
    if not wait_for_db():
        logger.error("Could not connect to the database")
        return

    applied = apply_migrations(engine)
    logger.info("Database ready, migrations applied: %s", applied or "none")

    if SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_summer_houses(db)
        finally:
            db.close()


# api пути
app.include_router(users.router, prefix="/api")
app.include_router(summer_houses.router, prefix="/api")
app.include_router(votes.router, prefix="/api")
