from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional
import logging
import re

from ..models.patient import Patient
from ..core.exceptions import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from ..core.security import verify_password, get_password_hash, create_patient_token

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def register_patient(self, name: str, email: str, password: str) -> Patient:
        """Register a new patient."""
        if not self.validate_email(email):
            raise BadRequestError("Email not valid, Please enter proper email.")

        # Check if patient already exists
        if self.get_by_email(email):
            raise ConflictError("User already exists with the provided email.")

        patient = Patient(
            name=name,
            email=email,
            password_hash=get_password_hash(password),
        )

        self.db.add(patient)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("User already exists with the provided email.")
        self.db.refresh(patient)

        logger.info(f"Registered patient {patient.id}")
        return patient

    def authenticate_patient(self, email: str, password: str) -> str:
        """Verify credentials and return a signed session token."""
        if not self.validate_email(email):
            raise BadRequestError("Enter the proper email to login.")

        patient = self.get_by_email(email)
        if not patient:
            raise NotFoundError("User not found, Please try again with the correct email.")

        if not verify_password(password, patient.password_hash):
            raise UnauthorizedError("Password mismatch.")

        return create_patient_token(patient.id, patient.name, patient.email)

    def get_by_email(self, email: str) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.email == email).first()

    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.id == patient_id).first()

    @staticmethod
    def validate_email(email: str) -> bool:
        return bool(EMAIL_RE.match(email or ""))
