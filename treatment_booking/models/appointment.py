from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from ..core.database import Base

class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # A (date, time) slot belongs to at most one appointment across all patients
        UniqueConstraint("date", "time", name="uq_appointments_slot"),
        CheckConstraint("session BETWEEN 1 AND 3", name="ck_appointments_session"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Relationships
    patient_id = Column(String(36), ForeignKey("patients.id"), nullable=False, index=True)

    # Appointment details
    session = Column(Integer, nullable=False)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    time = Column(String(5), nullable=False)  # HH:MM

    # Tracking
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    patient = relationship("Patient", back_populates="appointments")

    def __repr__(self):
        return (
            f"<Appointment(id={self.id}, patient_id={self.patient_id}, "
            f"session={self.session}, slot='{self.date} {self.time}')>"
        )
