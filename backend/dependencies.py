import logging
from datetime import datetime
from typing import Callable

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.errors import ErrorKind, ServiceError
from backend.database import SessionLocal, ensure_appointment_schema, ensure_slot_schema
from backend.repositories import SqlAppointmentRepository, SqlSlotDefinitionRepository

logger = logging.getLogger(__name__)


def ensure_database_ready() -> None:
    try:
        ensure_slot_schema()
        ensure_appointment_schema()
    except SQLAlchemyError as exc:
        logger.exception('Schema check failed. Verify DATABASE_URL and database credentials.')
        raise ServiceError(ErrorKind.UNEXPECTED, 'Database unavailable') from exc


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_slot_repository(db: Session = Depends(get_db)) -> SqlSlotDefinitionRepository:
    return SqlSlotDefinitionRepository(db)


def get_appointment_repository(db: Session = Depends(get_db)) -> SqlAppointmentRepository:
    return SqlAppointmentRepository(db)


def get_clock() -> Callable[[], datetime]:
    return datetime.now
