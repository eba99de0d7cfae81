import os
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')

from backend.database import Base  # noqa: E402
from backend.dependencies import ensure_database_ready, get_clock, get_db  # noqa: E402
from backend.main import app  # noqa: E402
from backend.models.appointment import Appointment  # noqa: E402
from backend.models.doctor_slot import DoctorSlot  # noqa: E402
from backend.repositories import SqlAppointmentRepository, SqlSlotDefinitionRepository  # noqa: E402

FIXED_NOW = datetime(2030, 1, 1, 8, 0)


@pytest.fixture
def db_session():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=[DoctorSlot.__table__, Appointment.__table__])

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine, tables=[Appointment.__table__, DoctorSlot.__table__])
        engine.dispose()


@pytest.fixture
def slot_repository(db_session) -> SqlSlotDefinitionRepository:
    return SqlSlotDefinitionRepository(db_session)


@pytest.fixture
def appointment_repository(db_session) -> SqlAppointmentRepository:
    return SqlAppointmentRepository(db_session)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    app.dependency_overrides[ensure_database_ready] = lambda: None
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
