"""
FastAPI Routes для аутентификации.
"""

from fastapi import APIRouter, Depends

from personal_blog.api.dependencies import get_auth_service, get_current_identity
from personal_blog.api.schemas.auth_schemas import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    UserResponse,
)
from personal_blog.application.services.auth_service import AuthService
from personal_blog.infrastructure.security.tokens import TokenPayload
from personal_blog.shared.exceptions.domain_exceptions import EntityNotFoundError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Регистрация нового пользователя. Сразу выдаёт токен."""
    result = await service.register(request.email, request.password, request.name)
    return AuthResponse(
        message="User created",
        token=result.token,
        user=UserResponse.from_entity(result.user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Вход по email и паролю."""
    result = await service.login(request.email, request.password)
    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=UserResponse.from_entity(result.user),
    )


@router.get("/me", response_model=MeResponse)
async def get_me(
    identity: TokenPayload = Depends(get_current_identity),
    service: AuthService = Depends(get_auth_service)
):
    """Текущий пользователь по токену."""
    user = await service.get_user_by_id(identity.user_id)
    if user is None:
        # Токен валиден, но пользователя уже нет
        raise EntityNotFoundError("User not found")
    return MeResponse(user=UserResponse.from_entity(user))
