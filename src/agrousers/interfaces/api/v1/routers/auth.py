"""Auth router: login."""
from fastapi import APIRouter

from agrousers.interfaces.api.v1.schemas.identity import LoginRequest, TokenResponse
from agrousers.interfaces.dependencies import Facade

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, facade: Facade):
    result = await facade.login(email=body.email, password=body.password)
    return TokenResponse(token=result.token, expires_at=result.expires_at)
