# SPDX-License-Identifier: Apache-2.0

"""
Application exception taxonomy.

Each exception carries the HTTP status and problem type it maps to, so
services raise them directly and the error handler renders them.
"""

from typing import Any, Dict, List, Optional


class CustomException(Exception):
    """Base class for custom application exceptions."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str = "application-error",
        extra: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.extra = extra or {}


class ValidationException(CustomException):
    """Exception for missing or malformed input."""

    def __init__(self, message: str, validation_errors: List[Dict[str, Any]] = None):
        super().__init__(message, 400, "validation-error")
        self.validation_errors = validation_errors or []


class NotFoundException(CustomException):
    """Exception for resource not found errors."""

    def __init__(self, message: str):
        super().__init__(message, 404, "resource-not-found")


class ConflictException(CustomException):
    """Exception for uniqueness violations."""

    def __init__(self, message: str):
        super().__init__(message, 409, "resource-conflict")


class InternalException(CustomException):
    """Exception for unexpected store or connection failures."""

    def __init__(self, message: str):
        super().__init__(message, 500, "internal-server-error")


class UpstreamDeliveryException(CustomException):
    """Exception for an SMS provider that explicitly rejected a message."""

    def __init__(self, message: str, details: str):
        super().__init__(
            message,
            502,
            "upstream-delivery-failed",
            extra={"details": details, "relayed": False}
        )
        self.details = details


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass
