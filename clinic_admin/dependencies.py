import logging
import secrets
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from .config import get_settings
from .database import get_session
from .exceptions import AuthenticationRequiredError, ServiceUnavailableError
from .application.ports.device_registry import DeviceRegistry
from .application.services.token_service import TokenService, TokenIdentity
from .application.services.auth_service import AuthService
from .application.services.patients_service import PatientsService
from .application.services.appointments_service import AppointmentsService
from .application.services.medications_service import MedicationsService
from .application.services.enrollment_service import EnrollmentService
from .infrastructure.persistence.sqlalchemy.repositories.admin_repository_sql import SqlAdminRepository
from .infrastructure.persistence.sqlalchemy.repositories.patient_repository_sql import SqlPatientsRepository
from .infrastructure.persistence.sqlalchemy.repositories.appointment_repository_sql import SqlAppointmentsRepository
from .infrastructure.persistence.sqlalchemy.repositories.medication_repository_sql import SqlMedicationsRepository
from .infrastructure.devices.firebase_registry import FirebaseDeviceRegistry

logger = logging.getLogger(__name__)

# Auth scheme; auto_error is off so a missing header maps to 401 rather than FastAPI's default
oauth2_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_token_service() -> TokenService:
    s = get_settings()
    return TokenService(
        secret_key=s.SECRET_KEY,
        algorithm=s.ALGORITHM,
        expire_minutes=s.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth2_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenIdentity:
    if not credentials or not credentials.credentials:
        logger.warning(f"Missing bearer token on {request.method} {request.url.path}")
        raise AuthenticationRequiredError()
    identity = tokens.verify(credentials.credentials)
    request.state.admin_id = identity.subject
    return identity


def get_auth_service(
    session: Session = Depends(get_session),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(admin_repo=SqlAdminRepository(session), tokens=tokens)


def get_patients_service(session: Session = Depends(get_session)) -> PatientsService:
    return PatientsService(repo=SqlPatientsRepository(session))


def get_appointments_service(session: Session = Depends(get_session)) -> AppointmentsService:
    return AppointmentsService(
        repo=SqlAppointmentsRepository(session),
        patients_repo=SqlPatientsRepository(session),
    )


def get_medications_service(session: Session = Depends(get_session)) -> MedicationsService:
    return MedicationsService(repo=SqlMedicationsRepository(session))


def get_device_registry() -> DeviceRegistry:
    s = get_settings()
    if not s.device_registry_configured:
        raise ServiceUnavailableError("Fingerprint device is not configured")
    return FirebaseDeviceRegistry(s)


def get_enrollment_service(
    patients: PatientsService = Depends(get_patients_service),
    registry: DeviceRegistry = Depends(get_device_registry),
) -> EnrollmentService:
    return EnrollmentService(patients=patients, registry=registry)


def verify_device_key(x_device_key: Optional[str] = Header(None)) -> None:
    expected = get_settings().DEVICE_CALLBACK_KEY
    if not expected:
        raise ServiceUnavailableError("Device callback is not configured")
    if not x_device_key or not secrets.compare_digest(x_device_key, expected):
        logger.warning("Rejected device callback with bad key")
        raise AuthenticationRequiredError("Invalid device key")
