class NotFoundException(Exception):
    """Exception raised when a requested resource is not found."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class MissingUsernameException(Exception):
    """Exception raised when a request does not carry a usable username."""

    def __init__(self, message: str = "Username is required"):
        super().__init__(message)


class ForbiddenException(Exception):
    """Exception raised when the caller lacks the capability a route requires."""

    def __init__(self, message: str = "Admin privileges required"):
        super().__init__(message)


class DatabaseConfigurationException(RuntimeError):
    """Exception raised when the database connection cannot be configured."""
