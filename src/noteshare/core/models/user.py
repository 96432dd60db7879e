"""
User model for authentication.
"""

from datetime import date
from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .note import Note


class User(BaseModel):
    """User account: display name plus a unique login handle."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    login_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)

    # never loaded implicitly, rows go away through the FK cascade
    notes: Mapped[List["Note"]] = relationship(
        "Note",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="noload",
    )

    __table_args__ = (
        # Enforce max lengths at DB level (SQLite compatible)
        CheckConstraint("length(username) <= 50", name="ck_users_username_len"),
        CheckConstraint("length(login_id) <= 50", name="ck_users_login_id_len"),
        Index("idx_users_login_id", "login_id"),
    )

    def __repr__(self) -> str:
        return f"<User(login_id='{self.login_id}')>"
