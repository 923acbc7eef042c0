from typing import Optional
from pydantic import BaseModel, Field


class UserDeleteRequest(BaseModel):
    username: str = Field(..., min_length=1, description="Exact username of the user to delete")


class DeleteUserResponse(BaseModel):
    ok: bool
    message: str
    error: Optional[str] = Field(default=None, description="Underlying failure, present only on server errors")
