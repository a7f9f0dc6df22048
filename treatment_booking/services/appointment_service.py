from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import datetime
from typing import List, Optional, Protocol, Sequence
import logging

from ..core.exceptions import BadRequestError, ConflictError, NotFoundError
from ..models.appointment import Appointment
from ..models.patient import Patient
from ..repositories.appointment_repository import AppointmentRepository
from .scheduling import (
    TIME_FORMAT, format_date, is_allowed_day, parse_slot, plan_cycle
)

logger = logging.getLogger(__name__)

class Notifier(Protocol):
    def send_booked(self, patient: Patient, appointments: Sequence[Appointment]) -> bool: ...
    def send_rescheduled(self, patient: Patient, appointment: Appointment) -> bool: ...
    def send_cancelled(self, patient: Patient, appointments: Sequence[Appointment]) -> bool: ...

class AppointmentService:
    def __init__(self, db: Session, notifier: Optional[Notifier] = None):
        self.db = db
        self.appointments = AppointmentRepository(db)
        self.notifier = notifier

    def is_slot_free(
        self,
        date: str,
        time: str,
        exclude_appointment_id: Optional[str] = None
    ) -> bool:
        """Check whether no appointment, other than the excluded one, holds the slot."""
        return not any(
            appt.time == time and appt.id != exclude_appointment_id
            for appt in self.appointments.list_by_date(date)
        )

    def book_cycle(self, patient_id: str, first_date: str, first_time: str) -> List[Appointment]:
        """Book the three sessions of a treatment cycle.

        Every slot is checked before anything is written, and all sessions
        are committed together, so a conflict leaves no partial cycle behind.
        """
        patient = self._get_patient(patient_id)
        if not patient:
            raise NotFoundError("Patient not found.")

        first = self._parse(first_date, first_time)
        if not is_allowed_day(first.date()):
            raise BadRequestError("First session must be on Tue/Wed/Fri.")

        time = first.strftime(TIME_FORMAT)
        session_dates = [format_date(d) for d in plan_cycle(first.date())]

        if not self.is_slot_free(session_dates[0], time):
            raise ConflictError("This time slot is already booked.")

        for session, date in enumerate(session_dates[1:], start=2):
            if not self.is_slot_free(date, time):
                raise ConflictError(
                    f"Follow-up session {session} slot already booked on {date} at {time}"
                )

        now = datetime.utcnow()
        booked = [
            Appointment(
                patient_id=patient.id,
                session=session,
                date=date,
                time=time,
                created_at=now,
                updated_at=now,
            )
            for session, date in enumerate(session_dates, start=1)
        ]
        self.appointments.add_all(booked)
        self._commit_slot_change("This time slot is already booked.")
        for appt in booked:
            self.appointments.refresh(appt)

        logger.info(
            f"Booked cycle for patient {patient.id}: "
            f"{', '.join(appt.date for appt in booked)} at {time}"
        )
        self._notify("send_booked", patient, booked)
        return booked

    def get_patient_appointments(self, patient_id: str) -> List[Appointment]:
        appointments = self.appointments.list_by_patient(patient_id)
        if not appointments:
            raise NotFoundError("No appointments found for this patient.")
        return appointments

    def reschedule(self, appointment_id: str, new_date: str, new_time: str) -> Appointment:
        """Move one appointment to a new slot; session and patient never change."""
        appointment = self.appointments.get(appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found.")

        target = self._parse(new_date, new_time)
        if not is_allowed_day(target.date()):
            raise BadRequestError("Appointments must be on Tue/Wed/Fri.")

        date = format_date(target.date())
        time = target.strftime(TIME_FORMAT)
        if not self.is_slot_free(date, time, exclude_appointment_id=appointment.id):
            raise ConflictError("This slot is already taken.")

        appointment.date = date
        appointment.time = time
        appointment.updated_at = datetime.utcnow()
        self._commit_slot_change("This slot is already taken.")
        self.appointments.refresh(appointment)

        logger.info(f"Rescheduled appointment {appointment.id} to {date} at {time}")

        patient = self._get_patient(appointment.patient_id)
        if patient:
            self._notify("send_rescheduled", patient, appointment)
        return appointment

    def cancel_appointment(self, appointment_id: str) -> None:
        appointment = self.appointments.get(appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found.")

        self.appointments.delete(appointment)
        self.appointments.commit()
        logger.info(f"Deleted appointment {appointment_id}")

    def cancel_patient_appointments(self, patient_id: str) -> List[Appointment]:
        """Delete every appointment of a patient and tell them which sessions went."""
        appointments = self.appointments.list_by_patient(patient_id)
        if not appointments:
            raise NotFoundError("No appointments found for this patient.")

        patient = self._get_patient(patient_id)
        for appt in appointments:
            self.appointments.delete(appt)
        self.appointments.commit()

        logger.info(f"Deleted {len(appointments)} appointments for patient {patient_id}")

        if patient:
            self._notify("send_cancelled", patient, appointments)
        else:
            logger.warning(f"Patient {patient_id} not found, cancellation email not sent")
        return appointments

    def _get_patient(self, patient_id: str) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.id == patient_id).first()

    def _parse(self, date: str, time: str) -> datetime:
        try:
            return parse_slot(date, time)
        except ValueError:
            raise BadRequestError("Invalid date or time. Use YYYY-MM-DD and HH:MM.")

    def _commit_slot_change(self, conflict_message: str) -> None:
        """Commit, turning a lost race on the slot constraint into a conflict."""
        try:
            self.appointments.commit()
        except IntegrityError:
            self.appointments.rollback()
            logger.warning(f"Slot constraint violated on commit: {conflict_message}")
            raise ConflictError(conflict_message)

    def _notify(self, event: str, *args) -> None:
        """Deliver a notification without letting its failure undo the booking."""
        if self.notifier is None:
            return
        try:
            getattr(self.notifier, event)(*args)
        except Exception:
            logger.exception(f"Failed to deliver {event} notification")
