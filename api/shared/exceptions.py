"""Shared exceptions for the chat API.

Stores and services raise the four data kinds below; the login route adds
``AuthenticationError``. The HTTP layer switches on the class, never on the
message text.
"""
from typing import Any, Dict, Optional


class ChatException(Exception):
    """Base exception for the chat backend."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ChatException):
    """Raised when input validation fails. Never touches storage."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class NotFoundError(ChatException):
    """Raised when a referenced user does not exist."""

    status_code = 404

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "NOT_FOUND", details)


class ConflictError(ChatException):
    """Raised when there's a conflict with existing data."""

    status_code = 409

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFLICT", details)


class InternalError(ChatException):
    """Raised on storage or hashing failures not attributable to the caller."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "INTERNAL_ERROR", details)


class AuthenticationError(ChatException):
    """Raised when a password attempt does not match the stored credential."""

    status_code = 401

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "UNAUTHORIZED", details)
