"""Problem Details (RFC 9457) errors raised by keyset-pager."""

from typing import Optional, Any
from pydantic import BaseModel, Field
from fastapi import Request
from fastapi.responses import JSONResponse


class ProblemDetail(BaseModel):
    """Problem Details as defined in RFC 9457."""

    type: str = Field(default="about:blank", description="A URI reference that identifies the problem type")
    title: str = Field(description="A short, human-readable summary of the problem type")
    status: int = Field(description="The HTTP status code")
    detail: Optional[str] = Field(default=None, description="A human-readable explanation specific to this occurrence")
    instance: Optional[str] = Field(default=None, description="A URI reference that identifies the specific occurrence")

    # Allow additional properties for extensions
    model_config = {"extra": "allow"}


class ProblemDetailException(Exception):
    """Base exception for Problem Details responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: str = "about:blank",
        instance: Optional[str] = None,
        **extensions: Any
    ):
        self.status = status
        self.title = title
        self.detail = detail
        self.type_uri = type_uri
        self.instance = instance
        self.extensions = extensions
        super().__init__(detail or title)

    def to_problem_detail(self, request: Optional[Request] = None) -> ProblemDetail:
        """Convert to ProblemDetail model."""
        instance = self.instance
        if instance is None and request:
            instance = str(request.url.path)

        problem = ProblemDetail(
            type=self.type_uri,
            title=self.title,
            status=self.status,
            detail=self.detail,
            instance=instance
        )

        for key, value in self.extensions.items():
            setattr(problem, key, value)

        return problem

    def to_response(self, request: Optional[Request] = None) -> JSONResponse:
        """Convert to JSONResponse with Problem Details format."""
        problem = self.to_problem_detail(request)
        return JSONResponse(
            status_code=self.status,
            content=problem.model_dump(exclude_none=True),
            headers={"Content-Type": "application/problem+json"}
        )


class BadRequestError(ProblemDetailException):
    """400 Bad Request error."""

    def __init__(self, detail: str, **extensions: Any):
        super().__init__(
            status=400,
            title="Bad Request",
            detail=detail,
            **extensions
        )


class PaginationError(ProblemDetailException):
    """Base class for keyset pagination failures."""


class InvalidTokenError(PaginationError):
    """A page token cannot be used for the current query."""

    def __init__(self, detail: str, title: str = "Invalid Page Token", **extensions: Any):
        super().__init__(
            status=400,
            title=title,
            detail=detail,
            type_uri="urn:keyset-pager:invalid-page-token",
            **extensions
        )


class TokenDecodeError(InvalidTokenError):
    """The page token is not a validly formed token."""

    def __init__(self, detail: str, **extensions: Any):
        super().__init__(detail, title="Malformed Page Token", **extensions)


class TokenArityMismatchError(InvalidTokenError):
    """The page token holds a different number of values than there are sort keys."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Page token holds {actual} sort key value(s), expected {expected}",
            title="Page Token Arity Mismatch",
            expected=expected,
            actual=actual
        )
        self.expected = expected
        self.actual = actual


class UnsatisfiableConstructionError(PaginationError):
    """A keyset predicate was requested over an empty sort key list."""

    def __init__(self, detail: str = "At least one sort key is required"):
        super().__init__(
            status=500,
            title="Invalid Pagination Setup",
            detail=detail,
            type_uri="urn:keyset-pager:no-sort-keys"
        )

