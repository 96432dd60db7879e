"""Authentication service implementation."""

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import blacklist_token, create_access_token, hash_password, verify_password
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    UserUpdateRequest,
)
from .interfaces import IAuthService

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.settings = get_settings()

    async def register_user(self, request: RegisterRequest) -> TokenResponse:
        """Register new user; registration doubles as a sign-in."""
        if await self.user_repo.is_login_id_taken(request.login_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="User ID already exists"
            )

        user_data = {
            "username": request.username,
            "login_id": request.login_id,
            "password_hash": hash_password(request.password),
            "date_of_birth": request.date_of_birth,
        }

        try:
            user = await self.user_repo.create_user(user_data)
        except IntegrityError:
            # lost a race with a concurrent registration of the same id
            await self.session.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="User ID already exists"
            )

        logger.info(f"Registered user {user.id} ({user.login_id})")
        return self._issue_session(user)

    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return a JWT session."""
        user = await self.user_repo.get_by_login_id(request.login_id)
        if not user or not verify_password(request.password, user.password_hash):
            logger.info(f"Failed login for '{request.login_id}'")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
            )

        return self._issue_session(user)

    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

        return UserResponse.model_validate(user)

    async def update_user_profile(self, user_id: UUID, request: UserUpdateRequest) -> UserResponse:
        """Update user profile."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

        update_data = request.model_dump(exclude_none=True)
        if update_data:
            user = await self.user_repo.update_user(user_id, update_data)

        return UserResponse.model_validate(user)

    async def logout_user(self, user_id: UUID, access_token: str) -> bool:
        """Logout user by blacklisting the access token in Redis."""
        blacklisted = await blacklist_token(access_token)
        if not blacklisted:
            logger.warning(f"Access token of user {user_id} not blacklisted (Redis unavailable?)")
        else:
            logger.info(f"User {user_id} logged out")
        return blacklisted

    def _issue_session(self, user: User) -> TokenResponse:
        access_token = create_access_token(data={"sub": str(user.id)})
        return TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=self.settings.access_token_expire_minutes * 60,
            user=UserResponse.model_validate(user),
        )
