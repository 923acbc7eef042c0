from sqlalchemy.orm import DeclarativeBase


class BaseEntity(DeclarativeBase):
    """
    Base model for all entities in the application.
    The users table and any future tables hang off this metadata.
    """

    __abstract__ = True
