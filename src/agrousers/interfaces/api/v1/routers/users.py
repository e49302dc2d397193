"""Users router: register, change password."""
from fastapi import APIRouter, status

from agrousers.interfaces.api.v1.schemas.identity import (
    ChangePasswordRequest,
    MessageResponse,
    RegisterRequest,
)
from agrousers.interfaces.dependencies import CurrentUserId, Facade

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, facade: Facade):
    await facade.register(email=body.email, password=body.password)
    return MessageResponse(message="User registered successfully")


@router.put("/change-password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(body: ChangePasswordRequest, facade: Facade, current_user_id: CurrentUserId):
    await facade.change_password(
        user_id=current_user_id,
        current_password=body.password,
        new_password=body.new_password,
    )
