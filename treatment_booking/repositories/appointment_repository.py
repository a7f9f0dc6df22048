from sqlalchemy.orm import Session
from typing import Iterable, List, Optional

from ..models.appointment import Appointment


class AppointmentRepository:
    """Data access for appointment records."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, appointment_id: str) -> Optional[Appointment]:
        return self.db.query(Appointment).filter(
            Appointment.id == appointment_id
        ).first()

    def list_by_patient(self, patient_id: str) -> List[Appointment]:
        return self.db.query(Appointment).filter(
            Appointment.patient_id == patient_id
        ).order_by(Appointment.date, Appointment.session).all()

    def list_by_date(self, date: str) -> List[Appointment]:
        return self.db.query(Appointment).filter(
            Appointment.date == date
        ).all()

    def add(self, appointment: Appointment) -> Appointment:
        self.db.add(appointment)
        return appointment

    def add_all(self, appointments: Iterable[Appointment]) -> None:
        self.db.add_all(list(appointments))

    def delete(self, appointment: Appointment) -> None:
        self.db.delete(appointment)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, appointment: Appointment) -> Appointment:
        self.db.refresh(appointment)
        return appointment
