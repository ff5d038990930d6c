"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries.
"""

from typing import Optional, List


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class ValidationException(ApplicationException):
    """
    Exception for validation errors.

    Carries a list of field-level errors, each a dict with
    ``field``, ``message`` and ``type`` keys.
    """

    def __init__(
        self,
        message: str = "The request data is invalid",
        errors: Optional[List[dict]] = None,
        details: Optional[dict] = None
    ):
        self.errors = errors or []
        super().__init__(message, details)

    @classmethod
    def for_field(cls, field: str, message: str, error_type: str = "value_error") -> "ValidationException":
        """Build an exception describing a single offending field."""
        return cls(errors=[{"field": field, "message": message, "type": error_type}])


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(message, details)


class AuthenticationException(ApplicationException):
    """Exception for missing or incorrect credentials."""

    def __init__(self, message: str = "Authentication required", details: Optional[dict] = None):
        super().__init__(message, details)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""
