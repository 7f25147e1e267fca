"""
Error signals raised by the services and rendered by the error handlers.

Every error carries a kind tag, a user-facing message and the HTTP status
the handlers answer with.
"""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UNHANDLED = "unhandled"


class BizTimeError(Exception):
    """Base error; status defaults to 500 when a failure names none."""

    kind = ErrorKind.UNHANDLED

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status or 500

    def to_response(self) -> dict:
        return error_body(self.message, self.status)


class NotFoundError(BizTimeError):
    """Keyed lookup matched no row."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str):
        super().__init__(message, 404)


class ValidationFailure(BizTimeError):
    """
    A request references something that cannot be used.

    Missing referenced rows answer 404; other invalid input answers 400.
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, status: int = 400):
        super().__init__(message, status)


def error_body(message: str, status: int) -> dict:
    return {"error": {"message": message, "status": status}}
