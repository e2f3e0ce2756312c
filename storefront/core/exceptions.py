"""
Application Exception Handling

AppException base class, the four error kinds the catalog and admin surface
raise, and FastAPI integration.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Catalog file unreadable", "PERSISTENCE_ERROR", 503)

    Error Codes:
        Validation (ValidationError, 400):
            - VALIDATION_ERROR
            - UNKNOWN_CATEGORY
            - DUPLICATE_PRODUCT_ID
            - INVALID_IMAGE

        Lookup (NotFoundError, 404):
            - CATEGORY_NOT_FOUND
            - PRODUCT_NOT_FOUND

        Authorization (AuthorizationError, 401):
            - INVALID_ADMIN_CODE

        Persistence (PersistenceError, 503):
            - PERSISTENCE_ERROR

        General:
            - CATALOG_NOT_LOADED (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


class ValidationError(AppException):
    """A required field is missing or a value is not acceptable."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code, 400, details)


class NotFoundError(AppException):
    """Unknown category or product id."""

    def __init__(self, message: str, code: str = "NOT_FOUND", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code, 404, details)


class AuthorizationError(AppException):
    """Shared admin credential did not match."""

    def __init__(self, message: str = "Incorrect admin code", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "INVALID_ADMIN_CODE", 401, details)


class PersistenceError(AppException):
    """
    Backing store could not be read or written.

    The failed operation did not take effect and may be retried.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "PERSISTENCE_ERROR", 503, details)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    FastAPI exception handler for request parsing failures.

    Reports malformed query, path or body input in the AppException envelope.
    """
    return await app_exception_handler(request, invalid_request(exc.errors()))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def missing_field(field: str) -> ValidationError:
    """Create missing required field exception."""
    return ValidationError(f"{field.capitalize()} is required", details={"field": field})


def field_too_long(field: str, limit: int) -> ValidationError:
    """Create over-long field exception."""
    return ValidationError(
        f"{field.capitalize()} must be at most {limit} characters",
        details={"field": field, "max_length": limit}
    )


def invalid_request(errors) -> ValidationError:
    """Create malformed request exception from pydantic error entries."""
    problems = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "")
        }
        for err in errors
    ]
    return ValidationError("Invalid request", details={"errors": problems})


def unknown_category(category: str) -> ValidationError:
    """Create unknown category exception for writes."""
    return ValidationError(
        f"Unknown category '{category}'",
        "UNKNOWN_CATEGORY",
        {"category": category}
    )


def duplicate_product_id(category: str, product_id: str) -> ValidationError:
    """Create duplicate product id exception."""
    return ValidationError(
        f"Product id '{product_id}' already exists in '{category}'",
        "DUPLICATE_PRODUCT_ID",
        {"category": category, "product_id": product_id}
    )


def invalid_image(reason: str) -> ValidationError:
    """Create rejected image upload exception."""
    return ValidationError(reason, "INVALID_IMAGE")


def category_not_found(category: str) -> NotFoundError:
    """Create category not found exception."""
    return NotFoundError("Category not found", "CATEGORY_NOT_FOUND", {"category": category})


def product_not_found(category: str, product_id: str) -> NotFoundError:
    """Create product not found exception."""
    return NotFoundError(
        "Product not found",
        "PRODUCT_NOT_FOUND",
        {"category": category, "product_id": product_id}
    )


def invalid_admin_code() -> AuthorizationError:
    """Create credential mismatch exception."""
    return AuthorizationError()


def persistence_failed(path: str, reason: str) -> PersistenceError:
    """Create persistence failure exception."""
    return PersistenceError(
        f"Failed to persist catalog: {reason}",
        {"path": path}
    )


def catalog_not_loaded() -> AppException:
    """Create catalog not loaded exception."""
    return AppException(
        "Product catalog not loaded",
        "CATALOG_NOT_LOADED",
        500
    )
