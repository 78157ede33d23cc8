from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from faystar.api.dependencies import get_auth_service, get_current_user
from faystar.api.responses import success_response
from faystar.domain.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest
from faystar.services.auth_service import AuthService

auth_router = APIRouter()


@auth_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    session = await auth.register(request)
    return success_response(
        session,
        status_code=status.HTTP_201_CREATED,
        request_prefix="auth",
        message="User registered successfully",
    )


@auth_router.post("/login")
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    session = await auth.login(request)
    return success_response(session, request_prefix="auth", message="Login successful")


@auth_router.post("/refresh")
async def refresh(request: RefreshRequest, auth: AuthService = Depends(get_auth_service)):
    return success_response(await auth.refresh(request.token), request_prefix="auth")


@auth_router.post("/logout")
async def logout():
    # Tokens are stateless; clients discard theirs.
    return success_response(None, request_prefix="auth", message="Logged out successfully")


@auth_router.get("/profile")
async def profile(
    user: Dict[str, Any] = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    return success_response(await auth.profile(user["userId"]), request_prefix="auth")
