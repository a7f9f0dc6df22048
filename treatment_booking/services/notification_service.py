"""
Patient email notifications for booking, rescheduling and cancellation.

Delivery goes through a plain SMTP relay. When no relay is configured the
notifier logs the message and reports that nothing was sent.
"""
import logging
import smtplib
import ssl
from email.mime.text import MIMEText
from typing import Iterable, Optional

from ..core.config import Settings, settings
from ..models.appointment import Appointment
from ..models.patient import Patient

logger = logging.getLogger(__name__)


def _session_lines(appointments: Iterable[Appointment]) -> str:
    return "\n".join(
        f"Session {appt.session}: {appt.date} at {appt.time}" for appt in appointments
    )


class EmailNotifier:
    def __init__(
        self,
        host: Optional[str],
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        from_address: Optional[str] = None,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_address = from_address or username

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "EmailNotifier":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USER,
            password=config.SMTP_PASSWORD,
            from_address=config.EMAIL_FROM,
        )

    def send_booked(self, patient: Patient, appointments: Iterable[Appointment]) -> bool:
        text = (
            f"Hello {patient.name},\n\n"
            f"Your appointments have been booked:\n\n"
            f"{_session_lines(appointments)}\n\n"
            f"Thank you."
        )
        return self.send_email(patient.email, "Appointment Booked", text)

    def send_rescheduled(self, patient: Patient, appointment: Appointment) -> bool:
        text = (
            f"Hello {patient.name},\n\n"
            f"Your appointment (Session: {appointment.session}) has been rescheduled "
            f"to {appointment.date} at {appointment.time}.\n\n"
            f"Thank you."
        )
        return self.send_email(patient.email, "Appointment Rescheduled", text)

    def send_cancelled(self, patient: Patient, appointments: Iterable[Appointment]) -> bool:
        text = (
            f"Hello {patient.name},\n\n"
            f"The following appointment(s) have been cancelled:\n\n"
            f"{_session_lines(appointments)}\n\n"
            f"Thank you."
        )
        return self.send_email(patient.email, "Appointment Cancelled", text)

    def send_email(self, to: str, subject: str, text: str) -> bool:
        """Send a plain-text email. SMTP errors propagate to the caller."""
        if not self.host:
            logger.info(f"SMTP not configured, skipping '{subject}' email to {to}")
            return False

        msg = MIMEText(text, "plain")
        msg["Subject"] = subject
        msg["From"] = self.from_address or ""
        msg["To"] = to

        if self.port == 465:
            context = ssl.create_default_context()
            server = smtplib.SMTP_SSL(self.host, self.port, context=context, timeout=30)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=30)
            server.starttls(context=ssl.create_default_context())

        try:
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)
        finally:
            server.quit()

        logger.info(f"Sent '{subject}' email to {to}")
        return True
