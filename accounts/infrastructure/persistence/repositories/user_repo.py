"""User repository: users and their authentications. Returns domain entities only."""

from __future__ import annotations

from sqlalchemy import delete as sa_delete
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from accounts.application.dtos.pagination import (
    MAX_PAGE_SIZE,
    PaginatedResults,
    PaginationParams,
)
from accounts.application.interfaces.repositories import UserWithAuthentication
from accounts.domain.entities import User, UserAuthentication
from accounts.domain.exceptions import ConflictDomainError, ValidationDomainError
from accounts.domain.validation import FieldError
from accounts.infrastructure.persistence.models.user import (
    UserAuthenticationModel,
    UserModel,
)
from accounts.infrastructure.persistence.repositories.base import (
    BaseRepository,
    is_foreign_key_violation,
    translate_storage_errors,
)

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"
DUPLICATE_AUTHENTICATION_MESSAGE = "Authentication with this provider already exists"


def _user_to_entity(row: UserModel) -> User:
    """Map ORM UserModel to the User entity (explicit field copy)."""
    return User.from_data(
        id=row.id,
        email=row.email,
        first_name=row.first_name,
        last_name=row.last_name,
        is_active=row.is_active,
        is_admin=row.is_admin,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _authentication_to_entity(row: UserAuthenticationModel) -> UserAuthentication:
    """Map ORM UserAuthenticationModel to the UserAuthentication entity."""
    return UserAuthentication.from_data(
        id=row.id,
        user_id=row.user_id,
        provider=row.provider,
        provider_id=row.provider_id,
        hashed_password=row.hashed_password,
        is_active=row.is_active,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class UserRepository(BaseRepository[UserModel]):
    """SQLAlchemy implementation of IUserRepository, bound to one session."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, UserModel)

    # Users

    async def find_by_id(self, user_id: str) -> User | None:
        with translate_storage_errors("user lookup"):
            row = await self.get_by_id(user_id)
        return _user_to_entity(row) if row else None

    async def find_by_email(self, email: str) -> User | None:
        with translate_storage_errors("user lookup"):
            result = await self.db.execute(
                select(UserModel).where(UserModel.email == email.strip().lower())
            )
            row = result.scalar_one_or_none()
        return _user_to_entity(row) if row else None

    async def create(self, user: User) -> User:
        """Insert user; raise ConflictDomainError when the email is taken."""
        row = UserModel(
            email=user.email.strip().lower(),
            first_name=user.first_name,
            last_name=user.last_name,
            is_active=user.is_active,
            is_admin=user.is_admin,
        )
        with translate_storage_errors("user creation"):
            try:
                created = await self.add(row)
            except IntegrityError as exc:
                raise ConflictDomainError(DUPLICATE_EMAIL_MESSAGE) from exc
        return _user_to_entity(created)

    async def update(self, user: User) -> User | None:
        """Update mutable user fields; None when the user no longer exists."""
        if not user.id:
            raise ValidationDomainError(
                "User ID is required for update",
                [FieldError("id", "User ID is required for update")],
            )
        with translate_storage_errors("user update"):
            row = await self.get_by_id(user.id)
            if row is None:
                return None
            row.email = user.email.strip().lower()
            row.first_name = user.first_name
            row.last_name = user.last_name
            row.is_active = user.is_active
            row.is_admin = user.is_admin
            try:
                updated = await self.save(row)
            except IntegrityError as exc:
                raise ConflictDomainError(DUPLICATE_EMAIL_MESSAGE) from exc
        return _user_to_entity(updated)

    async def delete(self, user_id: str) -> None:
        with translate_storage_errors("user deletion"):
            await self.db.execute(sa_delete(UserModel).where(UserModel.id == user_id))

    async def find_many(self, pagination: PaginationParams) -> PaginatedResults[User]:
        stmt = select(UserModel).order_by(
            UserModel.created_at.desc(), UserModel.id.desc()
        )
        with translate_storage_errors("user listing"):
            return await self.paginate(stmt, pagination, _user_to_entity)

    # Authentications

    async def find_authentication_by_user_id(
        self,
        user_id: str,
        provider: str | None = None,
        pagination: PaginationParams | None = None,
    ) -> PaginatedResults[UserAuthentication]:
        stmt = select(UserAuthenticationModel).where(
            UserAuthenticationModel.user_id == user_id
        )
        if provider:
            stmt = stmt.where(UserAuthenticationModel.provider == provider)
        stmt = stmt.order_by(UserAuthenticationModel.id)
        with translate_storage_errors("authentication listing"):
            return await self.paginate(
                stmt,
                pagination or PaginationParams(page=1, page_size=MAX_PAGE_SIZE),
                _authentication_to_entity,
            )

    async def find_authentication_by_provider(
        self, provider: str, provider_id: str
    ) -> UserAuthentication | None:
        with translate_storage_errors("authentication lookup"):
            result = await self.db.execute(
                select(UserAuthenticationModel).where(
                    UserAuthenticationModel.provider == provider,
                    UserAuthenticationModel.provider_id == provider_id,
                )
            )
            row = result.scalar_one_or_none()
        return _authentication_to_entity(row) if row else None

    async def create_authentication(
        self, authentication: UserAuthentication
    ) -> UserAuthentication:
        """Insert authentication.

        Raises:
            ConflictDomainError: (provider, provider_id) already exists.
            ValidationDomainError: user_id does not reference a user.
        """
        row = UserAuthenticationModel(
            user_id=authentication.user_id,
            provider=authentication.provider,
            provider_id=authentication.provider_id,
            hashed_password=authentication.hashed_password,
            is_active=authentication.is_active,
        )
        with translate_storage_errors("authentication creation"):
            try:
                self.db.add(row)
                await self.db.flush()
                await self.db.refresh(row)
            except IntegrityError as exc:
                if is_foreign_key_violation(exc):
                    raise ValidationDomainError(
                        "User does not exist",
                        [FieldError("user_id", "User does not exist")],
                    ) from exc
                raise ConflictDomainError(DUPLICATE_AUTHENTICATION_MESSAGE) from exc
        return _authentication_to_entity(row)

    async def update_authentication(
        self, authentication: UserAuthentication
    ) -> UserAuthentication | None:
        if not authentication.id:
            raise ValidationDomainError(
                "Authentication ID is required for update",
                [FieldError("id", "Authentication ID is required for update")],
            )
        with translate_storage_errors("authentication update"):
            result = await self.db.execute(
                select(UserAuthenticationModel).where(
                    UserAuthenticationModel.id == authentication.id
                )
            )
            row = result.scalar_one_or_none()
            if row is None:
                return None
            row.provider = authentication.provider
            row.provider_id = authentication.provider_id
            row.hashed_password = authentication.hashed_password
            row.is_active = authentication.is_active
            try:
                await self.db.flush()
                await self.db.refresh(row)
            except IntegrityError as exc:
                raise ConflictDomainError(DUPLICATE_AUTHENTICATION_MESSAGE) from exc
        return _authentication_to_entity(row)

    async def delete_authentication(self, authentication_id: str) -> None:
        with translate_storage_errors("authentication deletion"):
            await self.db.execute(
                sa_delete(UserAuthenticationModel).where(
                    UserAuthenticationModel.id == authentication_id
                )
            )

    async def find_user_with_authentication(
        self, email: str, provider: str
    ) -> UserWithAuthentication | None:
        """Fetch the user and its (provider, email) authentication in one query."""
        stmt = (
            select(UserAuthenticationModel, UserModel)
            .join(UserModel, UserModel.id == UserAuthenticationModel.user_id)
            .where(
                UserAuthenticationModel.provider == provider,
                UserAuthenticationModel.provider_id == email.strip().lower(),
            )
        )
        with translate_storage_errors("login lookup"):
            row = (await self.db.execute(stmt)).first()
        if row is None:
            return None
        authentication_row, user_row = row
        return UserWithAuthentication(
            user=_user_to_entity(user_row),
            authentication=_authentication_to_entity(authentication_row),
        )
