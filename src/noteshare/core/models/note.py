# Note model for user content
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .user import User


class Note(BaseModel):
    """Note owned by exactly one user, readable by everyone."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    subject: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # owner reference, fixed at creation
    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="notes", lazy="noload")

    __table_args__ = (
        Index("idx_notes_user_id", "user_id"),
        Index("idx_notes_created_at", "created_at"),
        Index("idx_notes_user_updated", "user_id", "updated_at"),
        Index("idx_notes_subject", "subject"),
        CheckConstraint("length(title) <= 200", name="ck_notes_title_len"),
        CheckConstraint("length(subject) <= 100", name="ck_notes_subject_len"),
        CheckConstraint("updated_at >= created_at", name="ck_notes_updated_after_created"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', user_id={self.user_id})>"

    @validates("user_id")
    def _validate_owner(self, key, value):
        current = self.__dict__.get("user_id")
        if current is not None and value != current:
            raise ValueError("Note owner cannot be changed")
        return value

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check if this note is owned by the specified user."""
        return self.user_id == user_id
