import logging
from typing import Any, Dict

from starlette.concurrency import run_in_threadpool

from faystar.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from faystar.domain.interfaces.repository_interface import UserRepositoryInterface
from faystar.domain.models.user import User
from faystar.domain.schemas.auth import LoginRequest, RegisterRequest
from faystar.infrastructure.auth.passwords import PasswordHasher
from faystar.infrastructure.auth.tokens import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Manages account registration, login and token refresh."""

    def __init__(
        self,
        repository: UserRepositoryInterface,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.repository = repository
        self.hasher = hasher
        self.tokens = tokens

    def _session(self, user: User) -> Dict[str, Any]:
        return {"user": user.to_public_dict(), "token": self.tokens.issue(user.id, user.email)}

    async def register(self, request: RegisterRequest) -> Dict[str, Any]:
        email = str(request.email).lower()
        if await self.repository.get_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise ConflictError("User already exists with this email")

        user = await self.repository.create(User(
            email=email,
            password_hash=await run_in_threadpool(self.hasher.hash, request.password),
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
        ))
        logger.info("User registered", extra={"user_id": user.id})
        return self._session(user)

    async def login(self, request: LoginRequest) -> Dict[str, Any]:
        user = await self.repository.get_by_email(str(request.email))
        if user is None or not await run_in_threadpool(
            self.hasher.verify, request.password, user.password_hash
        ):
            raise AuthenticationError("Invalid credentials")
        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        logger.info("User logged in", extra={"user_id": user.id})
        return self._session(user)

    async def refresh(self, token: str) -> Dict[str, Any]:
        claims = self.tokens.verify(token)
        user = await self.repository.get(claims["userId"])
        if user is None or not user.is_active:
            raise AuthenticationError("Invalid token")
        return {"token": self.tokens.issue(user.id, user.email)}

    async def profile(self, user_id: str) -> Dict[str, Any]:
        user = await self.repository.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return {"user": user.to_public_dict()}
