"""Domain-specific exceptions for the Shikshanam API."""


class ShikshanamError(Exception):
    """Base exception for all Shikshanam API errors."""


class ValidationError(ShikshanamError):
    """Error related to input validation (not Pydantic)."""


class AuthenticationError(ShikshanamError):
    """Credentials or tokens were missing or wrong."""


class NotFoundError(ShikshanamError):
    """Requested package, section or content does not exist."""


class GraphyAPIError(ShikshanamError):
    """Error returned by, or while talking to, the Graphy API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CMSError(ShikshanamError):
    """Error related to CMS content operations."""


class ConfigurationError(ShikshanamError):
    """Error related to configuration issues."""
