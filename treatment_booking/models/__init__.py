from .patient import Patient
from .appointment import Appointment

__all__ = ["Patient", "Appointment"]
