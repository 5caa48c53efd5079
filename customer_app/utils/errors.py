"""Error taxonomy and user-facing error messages.

Every failure that can reach a request boundary is one of the AppError
subclasses below, or is mapped to one by handle_error().
"""
import logging

import psycopg

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors reported to the HTTP caller."""

    status_code = 500
    public_message = "Internal error."

    def __init__(self, message: str = None):
        super().__init__(message or self.public_message)


class ValidationError(AppError):
    """Submitted data is missing a required field or is malformed."""

    status_code = 400
    public_message = "Invalid input."

    def __init__(self, message: str = None, field: str = None):
        super().__init__(message)
        self.field = field


class NotFoundError(AppError):
    status_code = 404
    public_message = "Customer not found."


class StoreError(AppError):
    """A query against the persistence store failed."""

    status_code = 500
    public_message = "Database error."


class CountQueryError(StoreError):
    """The listing count phase failed."""


class SelectQueryError(StoreError):
    """The listing select phase failed."""


class RenderError(AppError):
    public_message = "Render error."


def _root_cause(e: BaseException) -> BaseException:
    while e.__cause__ is not None:
        e = e.__cause__
    return e


def handle_error(e: Exception) -> tuple[int, str]:
    """Return (status_code, message) for an exception.

    Validation and not-found errors carry their own message. Store and
    render failures are logged with their cause and collapsed to a generic
    message so no SQL or driver detail leaks to the page.
    """
    if isinstance(e, (ValidationError, NotFoundError)):
        return e.status_code, str(e)

    if isinstance(e, StoreError):
        root = _root_cause(e)
        logger.error(f"{type(e).__name__}: {e} (cause: {root!r})")
        if isinstance(root, (psycopg.OperationalError, ConnectionError)):
            return e.status_code, "Database unavailable. Try again shortly."
        return e.status_code, e.public_message

    if isinstance(e, RenderError):
        logger.error(f"Render error: {e} (cause: {e.__cause__!r})")
        return e.status_code, e.public_message

    if isinstance(e, AppError):
        return e.status_code, e.public_message

    logger.error(f"Unhandled error: {type(e).__name__}: {e}", exc_info=e)
    return 500, "Internal error."
