from contextlib import contextmanager
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from gymbook.config import config

engine = create_engine(config.SQLALCHEMY_DATABASE_URI, pool_pre_ping=True)

# Фабрика сессий для работы с базой данных
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Базовый класс для всех моделей
Base = declarative_base()


@contextmanager
def transactional(db: Session):
    """
    A context manager that runs a block of writes as one database transaction.

    Outside tests it commits on success and rolls back on any exception, so
    multi-row operations (a booking touches both the session and the user
    views) either land completely or not at all.
    With TESTING=true it only flushes and leaves commit/rollback to the test.
    """
    is_test_mode = os.getenv("TESTING", "false").lower() == "true"

    if not is_test_mode:
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
    else:
        try:
            yield db
            db.flush()
        except Exception:
            db.rollback()
            raise
