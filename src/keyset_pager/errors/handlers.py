"""FastAPI exception handlers for applications exposing paginated endpoints."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse

from .problem_details import BadRequestError, PaginationError, ProblemDetailException

logger = logging.getLogger(__name__)


async def pagination_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Render pagination failures as Problem Details.

    Client errors (bad page tokens, invalid page sizes) are returned with
    their detail and extensions, so an arity mismatch exposes ``expected``
    and ``actual``. Server-side setup errors are logged and returned
    without detail.
    """
    path = str(request.url.path)

    if exc.status >= 500:
        logger.error(
            f"Pagination setup error on {request.method} {path}: {exc.detail}",
            extra={"status_code": exc.status, "path": path}
        )
        return ProblemDetailException(
            status=exc.status,
            title=exc.title,
            type_uri=exc.type_uri
        ).to_response(request)

    logger.info(
        f"Rejected pagination request on {request.method} {path}: {exc.detail}",
        extra={"status_code": exc.status, "path": path, **exc.extensions}
    )
    return exc.to_response(request)


def register_exception_handlers(app):
    """Register pagination exception handlers with a FastAPI app."""
    app.add_exception_handler(PaginationError, pagination_exception_handler)
    app.add_exception_handler(BadRequestError, pagination_exception_handler)
