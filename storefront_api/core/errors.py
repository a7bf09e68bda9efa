from __future__ import annotations

from typing import Optional


class StorefrontError(Exception):
    pass


class StorageError(StorefrontError):
    def __init__(self, filename: str, message: str) -> None:
        self.filename = filename
        super().__init__(f"Storage operation failed for '{filename}': {message}")


class ApiError(StorefrontError):
    """An error that maps directly onto an HTTP error envelope."""

    def __init__(self, status_code: int, message: str, details: Optional[str] = None) -> None:
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(message)

    @classmethod
    def bad_request(cls, message: str, details: Optional[str] = None) -> "ApiError":
        return cls(400, message, details)

    @classmethod
    def not_found(cls, message: str) -> "ApiError":
        return cls(404, message)

    @classmethod
    def conflict(cls, message: str) -> "ApiError":
        return cls(409, message)
