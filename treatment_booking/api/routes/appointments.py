from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...api.deps import get_current_patient, get_notifier
from ...services.appointment_service import AppointmentService
from ...services.notification_service import EmailNotifier
from ...schemas.appointment import (
    AppointmentResponse, BookAppointmentRequest, UpdateAppointmentRequest
)
from ...schemas.common import ApiResponse

router = APIRouter(
    prefix="/appointments",
    tags=["Appointments"],
    dependencies=[Depends(get_current_patient)],
)

def get_appointment_service(
    db: Session = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier)
) -> AppointmentService:
    return AppointmentService(db, notifier)

@router.post(
    "/book",
    response_model=ApiResponse[List[AppointmentResponse]],
    status_code=status.HTTP_201_CREATED,
)
def book_appointment(
    booking: BookAppointmentRequest,
    service: AppointmentService = Depends(get_appointment_service)
):
    """Book a treatment cycle (three sessions)."""
    appointments = service.book_cycle(
        booking.patient_id, booking.selected_date, booking.selected_time
    )

    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        data=[AppointmentResponse.model_validate(appt) for appt in appointments],
        message="Appointment booked successfully",
    )

@router.get("/{patient_id}", response_model=ApiResponse[List[AppointmentResponse]])
def get_appointments_by_patient_id(
    patient_id: str,
    service: AppointmentService = Depends(get_appointment_service)
):
    """List all appointments of a patient."""
    appointments = service.get_patient_appointments(patient_id)

    return ApiResponse(
        data=[AppointmentResponse.model_validate(appt) for appt in appointments],
        message="Appointments fetched successfully",
    )

@router.put("/update/{appointment_id}", response_model=ApiResponse[AppointmentResponse])
def update_appointment_by_id(
    appointment_id: str,
    update: UpdateAppointmentRequest,
    service: AppointmentService = Depends(get_appointment_service)
):
    """Reschedule one appointment."""
    appointment = service.reschedule(appointment_id, update.new_date, update.new_time)

    return ApiResponse(
        data=AppointmentResponse.model_validate(appointment),
        message="Appointment updated successfully",
    )

@router.delete("/delete/{appointment_id}", response_model=ApiResponse[None])
def delete_appointment_by_id(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service)
):
    """Delete a single appointment."""
    service.cancel_appointment(appointment_id)

    return ApiResponse(message="Appointment deleted successfully")

@router.delete("/{patient_id}", response_model=ApiResponse[None])
def delete_appointments_by_patient_id(
    patient_id: str,
    service: AppointmentService = Depends(get_appointment_service)
):
    """Cancel every appointment of a patient."""
    service.cancel_patient_appointments(patient_id)

    return ApiResponse(message="Appointments deleted successfully")
