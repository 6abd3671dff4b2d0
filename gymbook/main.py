import logging
import time

from fastapi import FastAPI, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from gymbook.config import config
from gymbook.dependencies import get_db
from gymbook.schemas.common import ErrorResponse
from gymbook.endpoints import (
    users,
    gyms,
    gym_admins,
    sessions,
    subscriptions,
    payments,
    announcements,
)

logging.basicConfig(level=config.LOG_LEVEL)

# Create a logger for the application
logger = logging.getLogger(__name__)
logger.setLevel(config.LOG_LEVEL)

# Create a console handler and set its level
ch = logging.StreamHandler()
ch.setLevel(config.LOG_LEVEL)

# Create a formatter and add it to the handler
formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
ch.setFormatter(formatter)

logger.addHandler(ch)
logger.propagate = False

logger.info("Application started and logger configured.")


app = FastAPI(
    title="Gym Booking API",
    description="API для бронирования занятий, подписок и оплаты",
    version="1.0.0"
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response


# Регистрация маршрутов
app.include_router(users.router)
app.include_router(subscriptions.router)
app.include_router(payments.router)
app.include_router(gyms.router)
app.include_router(gym_admins.router)
app.include_router(sessions.router)
app.include_router(announcements.router)


@app.get("/")
def read_root():
    return {"message": "Welcome to Gym Booking API"}


@app.get("/healthz")
async def healthz():
    return {"message": "Healthy!"}


# Ошибки отдаются в том же конверте, что и успешные ответы
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=str(exc.detail), error=exc.detail).model_dump(),
        headers=getattr(exc, "headers", None),
    )


# Обработка ошибок валидации
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        if 'ctx' in error and 'error' in error['ctx']:
            # Если ошибка содержит ValueError, берем его сообщение
            if isinstance(error['ctx']['error'], ValueError):
                error['msg'] = str(error['ctx']['error'])
                del error['ctx']
        errors.append(error)

    return JSONResponse(
        status_code=422,
        content=ErrorResponse(message="Validation error", error=jsonable_encoder(errors)).model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(message="Internal server error").model_dump(),
    )


# Проверка подключения к базе данных
@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logging.error(f"Health check failed: {str(e)}")
        return {"status": "unhealthy", "database": "disconnected"}
