from datetime import date, datetime
from typing import Callable

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from backend.core.responses import send_success
from backend.dependencies import ensure_database_ready, get_appointment_repository, get_clock, get_slot_repository
from backend.repositories import SqlAppointmentRepository, SqlSlotDefinitionRepository
from backend.services import booking
from backend.services.validation import reject_boolean_id

router = APIRouter(tags=['bookings'], dependencies=[Depends(ensure_database_ready)])


class BookAppointmentRequest(BaseModel):
    doctor_id: int | None = Field(default=None, alias='doctorId')
    slot_date: date | None = Field(default=None, alias='date')
    slot_time: str | None = Field(default=None, alias='time')
    patient_name: str | None = Field(default=None, alias='patientName')

    class Config:
        populate_by_name = True

    @field_validator('doctor_id', mode='before')
    @classmethod
    def validate_doctor_id(cls, value):
        return reject_boolean_id(value)

    @field_validator('slot_time')
    @classmethod
    def normalize_time(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip()


class AppointmentResponse(BaseModel):
    id: int
    doctor_id: int
    date: date
    time: str
    patient_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


@router.post('/book', status_code=status.HTTP_201_CREATED)
def book_appointment(
    data: BookAppointmentRequest,
    slots: SqlSlotDefinitionRepository = Depends(get_slot_repository),
    appointments: SqlAppointmentRepository = Depends(get_appointment_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    appointment = booking.book_appointment(
        data.doctor_id,
        data.slot_date,
        data.slot_time,
        data.patient_name,
        slots=slots,
        appointments=appointments,
        clock=clock,
    )
    return send_success(
        {
            'message': 'Appointment booked successfully',
            'appointment': AppointmentResponse.model_validate(appointment).model_dump(by_alias=True, mode='json'),
        },
        status.HTTP_201_CREATED,
    )


@router.delete('/book/{booking_id}')
def cancel_appointment(
    booking_id: int,
    appointments: SqlAppointmentRepository = Depends(get_appointment_repository),
):
    booking.cancel_appointment(booking_id, appointments)
    return send_success({'message': 'Booking cancelled successfully'})


@router.get('/bookings/{date}', response_model=list[AppointmentResponse])
def get_bookings_by_date(
    date: date,
    doctor_id: int | None = Query(default=None, alias='doctorId'),
    appointments: SqlAppointmentRepository = Depends(get_appointment_repository),
):
    return booking.bookings_for_date(date, appointments, doctor_id=doctor_id)


@router.get('/bookings', response_model=list[AppointmentResponse])
def get_all_bookings(
    slot_date: date | None = Query(default=None, alias='date'),
    doctor_id: int | None = Query(default=None, alias='doctorId'),
    appointments: SqlAppointmentRepository = Depends(get_appointment_repository),
):
    return booking.list_bookings(appointments, slot_date=slot_date, doctor_id=doctor_id)
