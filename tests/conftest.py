from datetime import datetime, timedelta, timezone
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from gymbook.main import app
from gymbook.database import Base
from gymbook.dependencies import get_db
from gymbook.models import (
    User,
    UserRole,
    Gym,
    GymAdmin,
    TrainingSession,
    SubscriptionPackage,
)
from gymbook.auth.jwt_handler import create_access_token
from gymbook.auth.password import hash_password

# URL для тестовой базы данных (SQLite в файле)
DATABASE_URL = "sqlite:///./test_database.db"

TEST_PASSWORD = "secret123"

# Глобальная переменная для отслеживания первого теста
_first_test = True


@pytest.fixture(scope="function")
def db_session():
    """
    Фикстура для работы с одной общей сессией базы данных внутри каждого теста.
    """
    global _first_test

    # Удаляем файл базы данных только перед первым тестом
    if _first_test and os.path.exists("test_database.db"):
        os.remove("test_database.db")
        _first_test = False

    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    """
    Тестовый клиент FastAPI с переопределением зависимости `get_db` для работы с тестовой базой данных.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


# =============================================================================
# ПОЛЬЗОВАТЕЛИ И АДМИНИСТРАТОРЫ
# =============================================================================

@pytest.fixture
def test_user(db_session: Session) -> User:
    """
    Создает тестового пользователя.
    """
    user = User(
        username="john",
        email="john@example.com",
        password_hash=hash_password(TEST_PASSWORD),
        is_subscribed=False,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session: Session) -> User:
    user = User(
        username="jane",
        email="jane@example.com",
        password_hash=hash_password(TEST_PASSWORD),
        is_subscribed=False,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_gym_admin(db_session: Session) -> GymAdmin:
    """
    Администратор, которому принадлежит test_gym.
    """
    admin = GymAdmin(
        username="gymowner",
        email="owner@example.com",
        password_hash=hash_password(TEST_PASSWORD),
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture
def other_gym_admin(db_session: Session) -> GymAdmin:
    admin = GymAdmin(
        username="stranger",
        email="stranger@example.com",
        password_hash=hash_password(TEST_PASSWORD),
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


# =============================================================================
# ЗАЛЫ, ЗАНЯТИЯ, ПАКЕТЫ
# =============================================================================

@pytest.fixture
def test_gym(db_session: Session, test_gym_admin: GymAdmin) -> Gym:
    gym = Gym(
        name="Downtown Fitness",
        location="Main street 1",
        latitude=52.2297,
        longitude=21.0122,
        rating=4.5,
        keywords=["cardio", "Weights"],
    )
    gym.admins.append(test_gym_admin)
    db_session.add(gym)
    db_session.commit()
    db_session.refresh(gym)
    return gym


@pytest.fixture
def test_session(db_session: Session, test_gym: Gym) -> TrainingSession:
    """
    Занятие на двух участников.
    """
    training_session = TrainingSession(
        gym_id=test_gym.id,
        name="Morning Yoga",
        date_time=datetime.now(timezone.utc) + timedelta(days=1),
        description="Gentle stretching",
        type="yoga",
        capacity=2,
        trainer_name="Anna",
    )
    db_session.add(training_session)
    db_session.commit()
    db_session.refresh(training_session)
    return training_session


@pytest.fixture
def test_package(db_session: Session) -> SubscriptionPackage:
    package = SubscriptionPackage(
        code="basic_monthly",
        name="Basic Monthly",
        description="Access to one gym",
        price=29.99,
        duration_days=30,
        session_limit=8,
        gym_limit="1",
    )
    db_session.add(package)
    db_session.commit()
    db_session.refresh(package)
    return package


@pytest.fixture
def premium_package(db_session: Session) -> SubscriptionPackage:
    package = SubscriptionPackage(
        code="premium_monthly",
        name="Premium Monthly",
        description="Access to all gyms",
        price=59.99,
        duration_days=30,
        session_limit=999,
        gym_limit="unlimited",
    )
    db_session.add(package)
    db_session.commit()
    db_session.refresh(package)
    return package


# =============================================================================
# ЗАГОЛОВКИ АВТОРИЗАЦИИ
# =============================================================================

def make_auth_headers(principal_id: int, role: str) -> dict:
    token = create_access_token(data={"id": principal_id, "role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(test_user):
    return make_auth_headers(test_user.id, UserRole.USER.value)


@pytest.fixture
def other_user_headers(other_user):
    return make_auth_headers(other_user.id, UserRole.USER.value)


@pytest.fixture
def admin_headers(test_gym_admin):
    return make_auth_headers(test_gym_admin.id, UserRole.GYM_ADMIN.value)


@pytest.fixture
def other_admin_headers(other_gym_admin):
    return make_auth_headers(other_gym_admin.id, UserRole.GYM_ADMIN.value)


@pytest.fixture
def third_user(db_session: Session) -> User:
    user = User(
        username="latecomer",
        email="late@example.com",
        password_hash=hash_password(TEST_PASSWORD),
        is_subscribed=False,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def third_user_headers(third_user):
    return make_auth_headers(third_user.id, UserRole.USER.value)


@pytest.fixture
def orphan_user_headers():
    """Валидный токен роли user, для которого в базе нет строки пользователя"""
    return make_auth_headers(9999, UserRole.USER.value)
