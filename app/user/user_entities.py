from datetime import datetime, timezone
import uuid

from sqlalchemy import Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.common.entities import BaseEntity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserEntity(BaseEntity):
    """
    Represents a user in the system.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, doc="Unique Identifier of the User")
    username: Mapped[str] = mapped_column(nullable=False, unique=True, index=True, doc="Username of the User")
    is_admin: Mapped[bool] = mapped_column(nullable=False, default=False, doc="Whether the User may perform admin-only operations")
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, doc="Timestamp when the User was created")
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        doc="Timestamp when the User was last updated",
    )
