"""User service: user lifecycle."""

import logging

import pydantic

from pulse.domain.auth.model.user import User
from pulse.domain.auth.model.value import UserId
from pulse.domain.auth.port.repository import UserRepository
from pulse.domain.shared.error import ConflictError, NotFoundError, ValidationError
from pulse.domain.shared.service import Service

logger = logging.getLogger(__name__)


class UserService(Service):
    _user_repo: UserRepository

    async def create(self, email: str) -> User:
        """Create a user. Raises ConflictError if the email is taken."""
        try:
            user = User.create(email=email)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid email: {email}", field="email") from e
        if await self._user_repo.get_by_email(user.email) is not None:
            raise ConflictError(f"User already exists: {user.email}", code="user_exists")

        user.id = await self._user_repo.save(user)
        logger.info("User created: id=%s email=%s", user.id, user.email)
        return user

    async def get(self, user_id: UserId) -> User:
        user = await self._user_repo.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    async def get_or_create(self, email: str) -> User:
        existing = await self._user_repo.get_by_email(email.strip().lower())
        if existing is not None:
            return existing
        return await self.create(email)

    async def list(self) -> list[User]:
        return await self._user_repo.list()

    async def remove(self, user_id: UserId) -> None:
        if not await self._user_repo.delete(user_id):
            raise NotFoundError(f"User not found: {user_id}")
        logger.info("User removed: id=%s", user_id)
