from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.core import config


def build_engine(database_url: str):
    connect_args = {}
    if database_url.startswith('sqlite'):
        connect_args['check_same_thread'] = False
    return create_engine(database_url, echo=config.SQL_ECHO, connect_args=connect_args)


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_slot_schema_checked = False
_appointment_schema_checked = False

BOOKING_KEY_COLUMNS = ['doctor_id', 'date', 'time']


def has_unique_booking_key(inspector) -> bool:
    unique_indexes = [index for index in inspector.get_indexes('appointments') if index.get('unique')]
    unique_constraints = inspector.get_unique_constraints('appointments')
    return any(
        list(entry['column_names']) == BOOKING_KEY_COLUMNS
        for entry in [*unique_indexes, *unique_constraints]
    )


def ensure_slot_schema() -> None:
    global _slot_schema_checked

    if _slot_schema_checked:
        return

    with _schema_lock:
        if _slot_schema_checked:
            return

        inspector = inspect(engine)

        if 'doctor_slots' not in inspector.get_table_names():
            _slot_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('doctor_slots')}
        migration_steps = [
            ('created_at', 'ALTER TABLE doctor_slots ADD COLUMN created_at TIMESTAMP'),
            ('updated_at', 'ALTER TABLE doctor_slots ADD COLUMN updated_at TIMESTAMP'),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_doctor_slots_doctor_date ON doctor_slots(doctor_id, date)')
            )

        _slot_schema_checked = True


def ensure_appointment_schema() -> None:
    global _appointment_schema_checked

    if _appointment_schema_checked:
        return

    with _schema_lock:
        if _appointment_schema_checked:
            return

        inspector = inspect(engine)

        if 'appointments' not in inspector.get_table_names():
            _appointment_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('appointments')}
        migration_steps = [
            ('created_at', 'ALTER TABLE appointments ADD COLUMN created_at TIMESTAMP'),
            ('updated_at', 'ALTER TABLE appointments ADD COLUMN updated_at TIMESTAMP'),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))
            if not has_unique_booking_key(inspector):
                connection.execute(
                    text(
                        'CREATE UNIQUE INDEX uq_appointments_doctor_date_time '
                        'ON appointments(doctor_id, date, time)'
                    )
                )

        _appointment_schema_checked = True
