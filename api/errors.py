"""Errors raised by the profile API client and the upload adapter."""


class ProfileApiError(Exception):
    """Base class for failures talking to the profile backend."""


class RequestFailed(ProfileApiError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, status: int, message: str | None = None) -> None:
        self.status = status
        super().__init__(message or f"HTTP error! status: {status}")


class NetworkError(ProfileApiError):
    """Raised for transport-level failures (connection refused, reset, bad payload)."""


class UploadFailed(ProfileApiError):
    """Raised when an avatar upload does not produce a hosted URL."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)


class ValidationError(Exception):
    """Client-side rejection. Never reaches the network."""


class UploadInProgress(ValidationError):
    """Raised when a file is dropped while another upload is still running."""
