"""Error taxonomy shared by the service layer."""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for failures the API reports to the caller."""

    status_code = 400

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = 400


class NotFound(ServiceError):
    """Referenced entity does not exist."""

    status_code = 404


class Forbidden(ServiceError):
    """Caller's role does not allow the operation."""

    status_code = 403


class InsufficientFunds(ServiceError):
    """Sender balance does not cover the requested amount."""

    status_code = 400


class InternalError(ServiceError):
    """Unexpected failure. Only a generic message is ever exposed."""

    status_code = 500

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(detail)
