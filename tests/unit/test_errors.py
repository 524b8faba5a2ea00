import asyncio

import pytest

from ss_activewear.utils.errors import (
    CatalogError,
    ErrorHandler,
    InvalidArgumentError,
    MissingCredentialsError,
    NetworkUnreachableError,
    NotFoundError,
    OperationError,
    UpstreamError,
    UpstreamReportedErrors,
)


def test_missing_credentials_message():
    error = MissingCredentialsError(["SS_API_KEY"])
    assert str(error) == "S&S Activewear credentials not configured (missing: SS_API_KEY)"
    assert error.code == "MISSING_CREDENTIALS"
    assert "SS_ACCOUNT_NUMBER" in error.suggestion

def test_upstream_error_message():
    error = UpstreamError(503, "Service Unavailable")
    assert str(error) == "S&S API Error: 503 - Service Unavailable"
    assert error.status == 503

def test_upstream_reported_errors_joined():
    error = UpstreamReportedErrors(["Bad style", "Bad brand"])
    assert str(error) == "Bad style, Bad brand"

def test_operation_error_keeps_cause():
    cause = NotFoundError("S&S API Error: 404 - Not Found")
    error = OperationError("Failed to get product details", cause)

    assert str(error) == "Failed to get product details: S&S API Error: 404 - Not Found"
    assert error.cause is cause
    assert error.code == "NOT_FOUND"
    assert error.suggestion == cause.suggestion

def test_suggestion_override():
    error = NetworkUnreachableError("No response", suggestion="Try again later.")
    assert error.suggestion == "Try again later."
    assert NetworkUnreachableError("x").suggestion == "Please check your internet connection."

@pytest.mark.parametrize("error,expected", [
    (NotFoundError("x"), "NOT_FOUND"),
    (InvalidArgumentError("x"), "INVALID_ARGUMENT"),
    (ConnectionError("x"), "NETWORK_UNREACHABLE"),
    (asyncio.TimeoutError(), "NETWORK_UNREACHABLE"),
    (ValueError("x"), "INVALID_ARGUMENT"),
    (RuntimeError("x"), "UNKNOWN_ERROR"),
])
def test_categorize_error(error, expected):
    assert ErrorHandler.categorize_error(error) == expected

def test_format_error_with_suggestion():
    text = ErrorHandler.format_error(
        OperationError("Failed to check inventory", NetworkUnreachableError("No response from S&S API"))
    )
    assert text == (
        "Error: Failed to check inventory: No response from S&S API\n"
        "Suggestion: Please check your internet connection."
    )

def test_format_error_without_suggestion():
    assert ErrorHandler.format_error(CatalogError("boom")) == "Error: boom"
    assert ErrorHandler.format_error(RuntimeError()) == "Error: RuntimeError"
