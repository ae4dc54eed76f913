"""Error handling module for keyset-pager."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    PaginationError,
    InvalidTokenError,
    TokenDecodeError,
    TokenArityMismatchError,
    UnsatisfiableConstructionError
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "PaginationError",
    "InvalidTokenError",
    "TokenDecodeError",
    "TokenArityMismatchError",
    "UnsatisfiableConstructionError",
    "register_exception_handlers"
]
