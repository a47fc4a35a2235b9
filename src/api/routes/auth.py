"""Authentication and profile routes."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import (
    get_authenticate_user_service,
    get_change_password_service,
    get_profile_service,
    get_register_user_service,
    get_update_profile_service,
)
from api.models import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from api.security import create_access_token, get_current_user_id
from domain.model.task import UNSET
from domain.model.user import PublicUser
from services.user_service import (
    AuthenticateUserInput,
    AuthenticateUserService,
    ChangePasswordInput,
    ChangePasswordService,
    GetCurrentUserProfileService,
    GetProfileInput,
    RegisterUserInput,
    RegisterUserService,
    UpdateProfileInput,
    UpdateProfileService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _to_response(user: PublicUser) -> UserResponse:
    return UserResponse(**asdict(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    service: RegisterUserService = Depends(get_register_user_service),
):
    """Register a new user and return a token for immediate use."""
    user = service.execute(RegisterUserInput(
        email=request.email,
        password=request.password,
        name=request.name,
    ))
    return AuthResponse(token=create_access_token(user.id), user=_to_response(user))


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    service: AuthenticateUserService = Depends(get_authenticate_user_service),
):
    """Exchange email and password for a token."""
    result = service.execute(AuthenticateUserInput(email=request.email, password=request.password))
    if result is None:
        logger.info("Login failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    logger.info("User logged in", extra={"userId": result.user.id})
    return AuthResponse(token=create_access_token(result.user.id), user=_to_response(result.user))


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: str = Depends(get_current_user_id),
    service: GetCurrentUserProfileService = Depends(get_profile_service),
):
    return _to_response(service.execute(GetProfileInput(user_id=user_id)))


@router.patch("/me", response_model=UserResponse)
def update_me(
    request: UpdateProfileRequest,
    user_id: str = Depends(get_current_user_id),
    service: UpdateProfileService = Depends(get_update_profile_service),
):
    supplied = request.model_dump(exclude_unset=True)
    profile = service.execute(UpdateProfileInput(user_id=user_id, name=supplied.get("name", UNSET)))
    return _to_response(profile)


@router.post("/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    request: ChangePasswordRequest,
    user_id: str = Depends(get_current_user_id),
    service: ChangePasswordService = Depends(get_change_password_service),
):
    service.execute(ChangePasswordInput(
        user_id=user_id,
        current_password=request.current_password,
        new_password=request.new_password,
    ))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
