"""User and UserAuthentication ORM models."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from accounts.infrastructure.persistence.database import Base
from accounts.infrastructure.persistence.models.mixins import EntityModel


class UserModel(EntityModel, Base):
    """User row. Table: users. Email is stored lower-cased and globally unique."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
    is_admin: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )

    authentications: Mapped[list[UserAuthenticationModel]] = relationship(
        back_populates="user",
        passive_deletes=True,
        lazy="raise",
    )


class UserAuthenticationModel(EntityModel, Base):
    """Authentication row. Table: user_authentications. Unique (provider, provider_id)."""

    __tablename__ = "user_authentications"

    user_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    provider: Mapped[str] = mapped_column(String(50), nullable=False)
    provider_id: Mapped[str] = mapped_column(String(255), nullable=False)
    hashed_password: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )

    user: Mapped[UserModel] = relationship(back_populates="authentications", lazy="raise")

    __table_args__ = (
        UniqueConstraint("provider", "provider_id", name="uq_provider_provider_id"),
    )
