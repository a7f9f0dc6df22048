from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...core.config import settings
from ...core.database import get_db
from ...api.deps import get_current_patient, rate_limit_check
from ...services.auth_service import AuthService
from ...schemas.auth import PatientLogin, PatientRegister, PatientResponse, TokenData
from ...schemas.common import ApiResponse
from ...models.patient import Patient

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post(
    "/register",
    response_model=ApiResponse[PatientResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    patient_data: PatientRegister,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Register a new patient."""
    auth_service = AuthService(db)
    patient = auth_service.register_patient(
        patient_data.name, patient_data.email, patient_data.password
    )

    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        data=PatientResponse.model_validate(patient),
        message="User successfully created",
    )

@router.post("/login", response_model=ApiResponse[TokenData])
def login(
    login_data: PatientLogin,
    response: Response,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Authenticate a patient and start a cookie session."""
    auth_service = AuthService(db)
    token = auth_service.authenticate_patient(login_data.email, login_data.password)

    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

    return ApiResponse(
        data=TokenData(token=token),
        message="User authenticated successfully.",
    )

@router.post("/logout", response_model=ApiResponse[dict])
async def logout(
    response: Response,
    current_patient: Patient = Depends(get_current_patient)
):
    """End the cookie session."""
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )

    return ApiResponse(data={}, message="User logged out from the session")

@router.get("/me", response_model=ApiResponse[PatientResponse])
async def get_current_patient_info(
    current_patient: Patient = Depends(get_current_patient)
):
    """Get current patient information."""
    return ApiResponse(
        data=PatientResponse.model_validate(current_patient),
        message="User fetched successfully",
    )
