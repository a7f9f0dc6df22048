from pydantic import field_validator
from datetime import datetime

from .common import CamelModel
from ..services.scheduling import ALLOWED_DAY_NAMES, is_allowed_day, is_valid_slot_time, parse_date


def _check_date(value: str, action: str) -> str:
    try:
        day = parse_date(value)
    except ValueError:
        raise ValueError("Invalid date format. Use YYYY-MM-DD.")
    if not is_allowed_day(day):
        raise ValueError(f"Appointments can only be {action} {ALLOWED_DAY_NAMES}.")
    return value


def _check_time(value: str) -> str:
    if not is_valid_slot_time(value):
        raise ValueError("Time must be in HH:00 format (1-hour slots).")
    return value


class BookAppointmentRequest(CamelModel):
    patient_id: str
    selected_date: str
    selected_time: str

    @field_validator("patient_id")
    @classmethod
    def patient_id_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Patient ID is required.")
        return value

    @field_validator("selected_date")
    @classmethod
    def booking_day(cls, value: str) -> str:
        return _check_date(value, "booked on")

    @field_validator("selected_time")
    @classmethod
    def booking_time(cls, value: str) -> str:
        return _check_time(value)


class UpdateAppointmentRequest(CamelModel):
    new_date: str
    new_time: str

    @field_validator("new_date")
    @classmethod
    def reschedule_day(cls, value: str) -> str:
        return _check_date(value, "rescheduled to")

    @field_validator("new_time")
    @classmethod
    def reschedule_time(cls, value: str) -> str:
        return _check_time(value)


class AppointmentResponse(CamelModel):
    id: str
    patient_id: str
    session: int
    date: str
    time: str
    created_at: datetime
    updated_at: datetime
