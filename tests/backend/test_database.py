import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from backend import database
from backend.models.appointment import Appointment
from backend.models.doctor_slot import DoctorSlot

LEGACY_APPOINTMENTS_TABLE = (
    'CREATE TABLE appointments ('
    'id INTEGER PRIMARY KEY, doctor_id INTEGER NOT NULL, date DATE NOT NULL, '
    'time VARCHAR(5) NOT NULL, patient_name VARCHAR(50) NOT NULL)'
)
LEGACY_SLOTS_TABLE = (
    'CREATE TABLE doctor_slots ('
    'id INTEGER PRIMARY KEY, doctor_id INTEGER NOT NULL, date DATE NOT NULL, '
    'start_time VARCHAR(5) NOT NULL, end_time VARCHAR(5) NOT NULL, slot_duration INTEGER NOT NULL)'
)
INSERT_APPOINTMENT = (
    "INSERT INTO appointments (doctor_id, date, time, patient_name) "
    "VALUES (1, '2099-01-01', '09:00', :name)"
)


@pytest.fixture
def schema_engine(monkeypatch: pytest.MonkeyPatch):
    engine = create_engine('sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool)
    monkeypatch.setattr(database, 'engine', engine)
    monkeypatch.setattr(database, '_slot_schema_checked', False)
    monkeypatch.setattr(database, '_appointment_schema_checked', False)
    try:
        yield engine
    finally:
        engine.dispose()


def test_ensure_appointment_schema_adds_unique_booking_index_to_legacy_table(schema_engine) -> None:
    with schema_engine.begin() as connection:
        connection.execute(text(LEGACY_APPOINTMENTS_TABLE))

    database.ensure_appointment_schema()

    inspector = inspect(schema_engine)
    columns = {column['name'] for column in inspector.get_columns('appointments')}
    assert {'created_at', 'updated_at'} <= columns
    assert database.has_unique_booking_key(inspector)

    with schema_engine.begin() as connection:
        connection.execute(text(INSERT_APPOINTMENT), {'name': 'Jane Doe'})

    with pytest.raises(IntegrityError):
        with schema_engine.begin() as connection:
            connection.execute(text(INSERT_APPOINTMENT), {'name': 'John Roe'})


def test_ensure_appointment_schema_runs_once(schema_engine, monkeypatch: pytest.MonkeyPatch) -> None:
    with schema_engine.begin() as connection:
        connection.execute(text(LEGACY_APPOINTMENTS_TABLE))

    database.ensure_appointment_schema()
    assert database._appointment_schema_checked is True

    def fail_inspect(_engine):
        raise AssertionError('schema should not be inspected again')

    monkeypatch.setattr(database, 'inspect', fail_inspect)

    database.ensure_appointment_schema()


def test_ensure_appointment_schema_keeps_single_unique_key_on_fresh_table(schema_engine) -> None:
    database.Base.metadata.create_all(bind=schema_engine, tables=[Appointment.__table__])

    database.ensure_appointment_schema()

    index_names = [index['name'] for index in inspect(schema_engine).get_indexes('appointments')]
    assert 'uq_appointments_doctor_date_time' not in index_names
    assert database.has_unique_booking_key(inspect(schema_engine))


def test_ensure_appointment_schema_skips_missing_table(schema_engine) -> None:
    database.ensure_appointment_schema()

    assert database._appointment_schema_checked is True
    assert 'appointments' not in inspect(schema_engine).get_table_names()


def test_ensure_slot_schema_adds_timestamps_and_lookup_index(schema_engine) -> None:
    with schema_engine.begin() as connection:
        connection.execute(text(LEGACY_SLOTS_TABLE))

    database.ensure_slot_schema()

    inspector = inspect(schema_engine)
    columns = {column['name'] for column in inspector.get_columns('doctor_slots')}
    index_names = {index['name'] for index in inspector.get_indexes('doctor_slots')}
    assert {'created_at', 'updated_at'} <= columns
    assert 'idx_doctor_slots_doctor_date' in index_names
    assert database._slot_schema_checked is True


def test_fresh_slot_table_already_has_lookup_index(schema_engine) -> None:
    database.Base.metadata.create_all(bind=schema_engine, tables=[DoctorSlot.__table__])

    database.ensure_slot_schema()

    index_names = [index['name'] for index in inspect(schema_engine).get_indexes('doctor_slots')]
    assert index_names.count('idx_doctor_slots_doctor_date') == 1
