from datetime import datetime, timezone
from typing import Self
from uuid import UUID, uuid4
from pydantic import BaseModel, Field

from app.user.user_entities import UserEntity


class User(BaseModel):
    """Represents a user in the system."""

    id: UUID = Field(default_factory=uuid4)
    username: str
    is_admin: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_entity(cls, entity: UserEntity) -> Self:
        return cls(
            id=entity.id,
            username=entity.username,
            is_admin=entity.is_admin,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
