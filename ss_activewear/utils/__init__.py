"""Utils module for the S&S Activewear catalog bridge."""

from ss_activewear.utils.logger import get_logger, setup_logging
from ss_activewear.utils.errors import (
    CatalogError,
    ErrorHandler,
    ForbiddenError,
    InvalidArgumentError,
    InvalidResponseShapeError,
    MissingCredentialsError,
    NetworkUnreachableError,
    NotFoundError,
    OperationError,
    UnauthorizedError,
    UpstreamError,
    UpstreamReportedErrors,
)
from ss_activewear.utils.formatters import flatten, render, to_csv

__all__ = [
    "get_logger",
    "setup_logging",
    "flatten",
    "render",
    "to_csv",
    "CatalogError",
    "ErrorHandler",
    "OperationError",
]
