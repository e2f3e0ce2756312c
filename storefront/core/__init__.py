"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

This package provides:
- AppException and the ValidationError / NotFoundError /
  AuthorizationError / PersistenceError kinds, with factory functions
- AdminGate for shared admin code verification
- FastAPI dependencies (import from storefront.core.dependencies)

Usage:
------
    from storefront.core import AppException, AdminGate

    from storefront.core import exceptions
    raise exceptions.product_not_found("other", "4152")

==============================================================================
"""

from .exceptions import (
    AppException,
    AuthorizationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    register_exception_handlers,
)
from .security import AdminGate

__all__ = [
    # Exceptions
    "AppException",
    "AuthorizationError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
    "register_exception_handlers",
    # Security
    "AdminGate",
]
