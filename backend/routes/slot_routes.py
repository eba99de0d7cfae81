from datetime import date, datetime
from typing import Callable

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from backend.core.errors import validation_error
from backend.core.responses import send_success
from backend.dependencies import ensure_database_ready, get_appointment_repository, get_clock, get_slot_repository
from backend.repositories import SqlAppointmentRepository, SqlSlotDefinitionRepository
from backend.services import availability, slot_management
from backend.services.validation import reject_boolean_id

router = APIRouter(tags=['slots'], dependencies=[Depends(ensure_database_ready)])

DATE_REQUIRED = 'Date parameter is required'


class CreateSlotRequest(BaseModel):
    doctor_id: int | None = Field(default=None, alias='doctorId')
    slot_date: date | None = Field(default=None, alias='date')
    start_time: str | None = Field(default=None, alias='startTime')
    end_time: str | None = Field(default=None, alias='endTime')
    slot_duration: int | None = Field(default=None, alias='slotDuration')

    class Config:
        populate_by_name = True

    @field_validator('doctor_id', mode='before')
    @classmethod
    def validate_doctor_id(cls, value):
        return reject_boolean_id(value)


class UpdateSlotRequest(BaseModel):
    start_time: str | None = Field(default=None, alias='startTime')
    end_time: str | None = Field(default=None, alias='endTime')
    slot_duration: int | None = Field(default=None, alias='slotDuration')

    class Config:
        populate_by_name = True


class SlotDefinitionResponse(BaseModel):
    id: int
    doctor_id: int
    date: date
    start_time: str
    end_time: str
    slot_duration: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class SlotStatusResponse(BaseModel):
    time: str
    is_booked: bool

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


def serialize_slot(slot) -> dict:
    return SlotDefinitionResponse.model_validate(slot).model_dump(by_alias=True, mode='json')


@router.post('/slots', status_code=status.HTTP_201_CREATED)
def create_slot(
    data: CreateSlotRequest,
    slots: SqlSlotDefinitionRepository = Depends(get_slot_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    slot = slot_management.create_slot(
        data.doctor_id,
        data.slot_date,
        data.start_time,
        data.end_time,
        data.slot_duration,
        slots=slots,
        clock=clock,
    )
    return send_success(
        {'message': 'Slot added successfully', 'slot': serialize_slot(slot)},
        status.HTTP_201_CREATED,
    )


@router.get('/doctor-slots/{doctor_id}', response_model=list[SlotDefinitionResponse])
def list_doctor_slots(
    doctor_id: int,
    slot_date: date | None = Query(default=None, alias='date'),
    slots: SqlSlotDefinitionRepository = Depends(get_slot_repository),
):
    return slot_management.list_doctor_slots(doctor_id, slots, slot_date=slot_date)


@router.put('/slots/{slot_id}')
def update_slot(
    slot_id: int,
    data: UpdateSlotRequest,
    slots: SqlSlotDefinitionRepository = Depends(get_slot_repository),
    appointments: SqlAppointmentRepository = Depends(get_appointment_repository),
):
    slot = slot_management.update_slot(
        slot_id,
        data.start_time,
        data.end_time,
        data.slot_duration,
        slots=slots,
        appointments=appointments,
    )
    return send_success({'message': 'Slot updated successfully', 'slot': serialize_slot(slot)})


@router.delete('/slots/{slot_id}')
def delete_slot(
    slot_id: int,
    slots: SqlSlotDefinitionRepository = Depends(get_slot_repository),
    appointments: SqlAppointmentRepository = Depends(get_appointment_repository),
):
    slot_management.delete_slot(slot_id, slots=slots, appointments=appointments)
    return send_success({'message': 'Slot deleted successfully'})


@router.get('/slots/{doctor_id}')
def list_free_slots(
    doctor_id: int,
    slot_date: date | None = Query(default=None, alias='date'),
    slots: SqlSlotDefinitionRepository = Depends(get_slot_repository),
    appointments: SqlAppointmentRepository = Depends(get_appointment_repository),
):
    if slot_date is None:
        raise validation_error(DATE_REQUIRED)

    available = availability.free_slots(doctor_id, slot_date, slots, appointments)
    return send_success({'available': available})


@router.get('/all-slots/{doctor_id}', response_model=list[SlotStatusResponse])
def list_all_slots(
    doctor_id: int,
    slot_date: date | None = Query(default=None, alias='date'),
    slots: SqlSlotDefinitionRepository = Depends(get_slot_repository),
    appointments: SqlAppointmentRepository = Depends(get_appointment_repository),
):
    if slot_date is None:
        raise validation_error(DATE_REQUIRED)

    return availability.all_slots_with_status(doctor_id, slot_date, slots, appointments)


@router.get('/doctors', response_model=list[int])
def list_doctors(slots: SqlSlotDefinitionRepository = Depends(get_slot_repository)):
    return slot_management.list_doctors(slots)
