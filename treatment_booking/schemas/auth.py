from pydantic import field_validator
from datetime import datetime
from typing import Optional

from .common import CamelModel
from ..services.auth_service import AuthService

MIN_PASSWORD_LENGTH = 6


class PatientRegister(CamelModel):
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required for registering the user.")
        return value.strip()

    @field_validator("email")
    @classmethod
    def email_shape(cls, value: str) -> str:
        if not AuthService.validate_email(value):
            raise ValueError("Email not valid, Please enter proper email.")
        return value

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        return value


class PatientLogin(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_shape(cls, value: str) -> str:
        if not AuthService.validate_email(value):
            raise ValueError("Enter the proper email to login.")
        return value

    @field_validator("password")
    @classmethod
    def password_present(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required for logging in.")
        return value


class PatientResponse(CamelModel):
    id: str
    name: str
    email: str
    created_at: Optional[datetime] = None


class TokenData(CamelModel):
    token: str
