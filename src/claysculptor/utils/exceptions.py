"""
Custom exceptions for claysculptor.

This module defines all custom exceptions used throughout the application.
"""


class SculptorError(Exception):
    """Base exception for all claysculptor errors."""

    pass


class ValidationError(SculptorError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = "") -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Name of the field that failed validation (optional)
        """
        self.field = field
        super().__init__(message)


class ConfigurationError(SculptorError):
    """Raised when there is a configuration problem."""

    pass


class MissingCredentialError(ConfigurationError):
    """Raised when no API key is available for the generation backend."""

    def __init__(self, message: str, env_var: str = "GEMINI_API_KEY") -> None:
        """
        Initialize missing credential error.

        Args:
            message: Error message
            env_var: Environment variable the user should set
        """
        self.env_var = env_var
        super().__init__(message)


class GenerationError(SculptorError):
    """Raised when the API answered but did not produce a usable image."""

    pass


class NoImageReturnedError(GenerationError):
    """Raised when the API response contains zero images."""

    pass


class EmptyImagePayloadError(GenerationError):
    """Raised when the first returned image carries no bytes."""

    pass


class APIError(SculptorError):
    """Raised when an API call fails."""

    def __init__(self, message: str, status_code: int = 0, response: str = "") -> None:
        """
        Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
            response: Raw API response (if available)
        """
        self.status_code = status_code
        self.response = response
        super().__init__(message)


class NetworkError(SculptorError):
    """Raised when a network operation fails."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """
        Initialize network error.

        Args:
            message: Error message
            original_error: The underlying exception that caused this error
        """
        self.original_error = original_error
        super().__init__(message)


class RequestTimeoutError(SculptorError):
    """Raised when a backend request times out."""

    pass


class FilesystemError(SculptorError):
    """Raised when creating the output directory or writing an image fails."""

    def __init__(self, message: str, path: str = "") -> None:
        """
        Initialize filesystem error.

        Args:
            message: Error message
            path: Path that could not be created or written
        """
        self.path = path
        super().__init__(message)
