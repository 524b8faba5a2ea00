"""
Catalog error taxonomy and caller-facing error formatting.

Every failure the bridge can report is a CatalogError subclass carrying a
stable code and, where one is known, a suggestion for the caller. The
ErrorHandler turns any exception into the text returned to tool callers so
that no raw transport exception ever escapes.
"""

import asyncio
from typing import Optional, Sequence

# =============================================================================
# Custom Exceptions
# =============================================================================

IDENTIFIER_SUGGESTION = "Check the SKU, GTIN, or Style ID and try again."
CREDENTIALS_SUGGESTION = (
    "Set SS_ACCOUNT_NUMBER and SS_API_KEY in your .env file or server configuration."
)


class CatalogError(Exception):
    """Base exception for all catalog bridge errors."""

    code = "CATALOG_ERROR"
    suggestion: Optional[str] = None

    def __init__(self, message: str, suggestion: Optional[str] = None):
        self.message = message
        if suggestion is not None:
            self.suggestion = suggestion
        super().__init__(message)


class MissingCredentialsError(CatalogError):
    code = "MISSING_CREDENTIALS"
    suggestion = CREDENTIALS_SUGGESTION

    def __init__(self, missing: Sequence[str] = ()):
        self.missing = list(missing)
        detail = f" (missing: {', '.join(self.missing)})" if self.missing else ""
        super().__init__(f"S&S Activewear credentials not configured{detail}")


class InvalidArgumentError(CatalogError):
    code = "INVALID_ARGUMENT"


class NotFoundError(CatalogError):
    code = "NOT_FOUND"
    suggestion = IDENTIFIER_SUGGESTION


class UnauthorizedError(CatalogError):
    code = "UNAUTHORIZED"
    suggestion = "Verify your S&S account number and API key."


class ForbiddenError(CatalogError):
    code = "FORBIDDEN"
    suggestion = "Your S&S account does not have access to this resource."


class UpstreamError(CatalogError):
    """Non-success status from the S&S API other than 401/403/404."""

    code = "UPSTREAM_ERROR"

    def __init__(self, status: int, message: str):
        self.status = status
        self.detail = message
        super().__init__(f"S&S API Error: {status} - {message}")


class NetworkUnreachableError(CatalogError):
    code = "NETWORK_UNREACHABLE"
    suggestion = "Please check your internet connection."


class InvalidResponseShapeError(CatalogError):
    code = "INVALID_RESPONSE_SHAPE"


class UpstreamReportedErrors(CatalogError):
    """The API answered with an ``errors`` array instead of data."""

    code = "UPSTREAM_REPORTED_ERRORS"

    def __init__(self, messages: Sequence[str]):
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))


class OperationError(CatalogError):
    """A CatalogError wrapped with the failing operation's context."""

    code = "OPERATION_FAILED"

    def __init__(self, context: str, cause: CatalogError):
        self.context = context
        self.cause = cause
        self.code = cause.code
        super().__init__(f"{context}: {cause}", suggestion=cause.suggestion)


# =============================================================================
# Error Handler
# =============================================================================

class ErrorHandler:
    """Centralized error categorization and caller-facing formatting."""

    @staticmethod
    def categorize_error(error: Exception) -> str:
        """Categorize errors for reporting."""
        if isinstance(error, CatalogError):
            return error.code
        if isinstance(error, (ConnectionError, OSError)):
            return NetworkUnreachableError.code
        if isinstance(error, asyncio.TimeoutError):
            return NetworkUnreachableError.code
        if isinstance(error, (ValueError, TypeError)):
            return InvalidArgumentError.code
        return "UNKNOWN_ERROR"

    @staticmethod
    def format_error(error: Exception) -> str:
        """Render an exception as the text returned to tool callers."""
        message = str(error) or error.__class__.__name__
        text = f"Error: {message}"
        suggestion = getattr(error, "suggestion", None)
        if suggestion:
            text += f"\nSuggestion: {suggestion}"
        return text
