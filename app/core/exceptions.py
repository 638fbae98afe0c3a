# app/core/exceptions.py
"""Custom exceptions for the EduApp application.

Services raise these, never ``HTTPException``. Each carries a machine-readable
``code`` and the HTTP status the boundary maps it to, see ``error_handlers``.
"""
from typing import Dict, Optional


class AppException(Exception):
    """Base exception for the application."""
    status_code: int = 500

    def __init__(self, code: str, message: str, status_code: Optional[int] = None):
        self.code = code
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class AppObjectAlreadyExists(AppException):
    """Raised when a unique field (VAT, AMKA, Username, Identity) is already taken."""
    status_code = 409

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(f"{kind}AlreadyExists", message)


class AppObjectInvalidArgumentException(AppException):
    """Raised for malformed or missing arguments, before any storage call."""
    status_code = 400

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(f"{kind}InvalidArgument", message)


class AppObjectNotFoundException(AppException):
    status_code = 404

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(f"{kind}NotFound", message)


class AuthenticationFailedException(AppException):
    status_code = 401

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__("Unauthorized", message)


class ValidationFailedException(AppException):
    """Structural validation failures on an inbound request, collected per field."""
    status_code = 400

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("ValidationFailed", "Request validation failed")


class AppServerException(AppException):
    status_code = 500

    def __init__(self, code: str = "ServerError", message: str = "Internal server error"):
        super().__init__(code, message)


class StorageFailureException(AppServerException):
    """Attachment write or transaction commit failed for reasons other than uniqueness."""

    def __init__(self, message: str):
        super().__init__("StorageFailure", message)
