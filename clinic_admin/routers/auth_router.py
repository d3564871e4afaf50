from fastapi import APIRouter, Depends

from ..application.services.auth_service import AuthService
from ..dependencies import get_auth_service
from ..schemas.auth.auth import LoginRequest, LoginResponse

router = APIRouter(prefix="/admin", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    """
    Exchange administrator credentials for a bearer token
    """
    token = auth_service.login(payload.username, payload.password)
    return LoginResponse(token=token)
