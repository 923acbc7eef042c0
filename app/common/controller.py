from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

from fastapi import APIRouter


class BaseController(ABC):
    """
    Base controller class for the application.
    This class can be extended by other controllers to inherit common properties and methods.

    Routes are mounted under ``{base_path}/{prefix}``. Controllers serving
    fixed public paths clear ``base_path``.
    """

    prefix: ClassVar[str]
    base_path: ClassVar[str] = "/api/v1"
    tags: ClassVar[list[str | Enum] | None] = None

    def __init__(self) -> None:
        self.api_router = APIRouter(prefix=self.mount_path(), tags=self.tags if self.tags else [self.prefix or "root"], redirect_slashes=False)

    @classmethod
    def mount_path(cls) -> str:
        if cls.prefix:
            return f"{cls.base_path}/{cls.prefix}"
        return cls.base_path

    @property
    @abstractmethod
    def router(self) -> APIRouter:
        """Abstract property must be implemented by subclasses to return the APIRouter instance."""
        raise NotImplementedError("Subclasses must implement the router property.")
