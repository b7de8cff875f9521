"""HTTP error handling."""

from .handlers import ErrorHandler, ErrorHandlingMiddleware

__all__ = [
    'ErrorHandler',
    'ErrorHandlingMiddleware'
]
