from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from ..core.config import settings
from ..core.database import get_db, get_redis
from ..core.exceptions import TooManyRequestsError, UnauthorizedError
from ..core.security import security, verify_token, TokenPayload
from ..models.patient import Patient
from ..services.auth_service import AuthService
from ..services.notification_service import EmailNotifier

async def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """Extract and verify the JWT from the Authorization header or session cookie."""
    if credentials and credentials.scheme.lower() == "bearer":
        token = credentials.credentials
    else:
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)

    if not token:
        raise UnauthorizedError("User not authenticated")

    token_payload = verify_token(token)
    if not token_payload or not token_payload.sub:
        raise UnauthorizedError("Invalid or expired token")

    return token_payload

async def get_current_patient(
    token_payload: TokenPayload = Depends(get_session_token),
    db: Session = Depends(get_db)
) -> Patient:
    """Get the authenticated patient from the database."""
    patient = AuthService(db).get_by_id(token_payload.sub)
    if not patient:
        raise UnauthorizedError("User not found")
    return patient

def get_notifier() -> EmailNotifier:
    """Notification sink used by appointment routes."""
    return EmailNotifier.from_settings(settings)

# Rate limiting dependency
async def rate_limit_check(
    request: Request,
    redis_client = Depends(get_redis)
) -> None:
    """Basic rate limiting for authentication endpoints."""
    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:{request.url.path}:{client_ip}"

    current_requests = redis_client.get(key)
    if current_requests is None:
        redis_client.setex(key, 3600, 1)  # 1 hour window
    else:
        if int(current_requests) >= settings.RATE_LIMIT_PER_HOUR:
            raise TooManyRequestsError()
        redis_client.incr(key)
