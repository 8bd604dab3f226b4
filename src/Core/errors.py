# src/Core/errors.py

"""
Service Error Taxonomy

Domain exceptions raised by the registry, ledger and inventory services.
Each class carries the HTTP status it maps to; main.py registers a single
handler that renders any ServiceError as {"error": <message>}.

    NotFoundError         404  unknown device id
    InvalidArgumentError  400  missing required field, non-positive duration
    InvalidStateError     400  device down, no active reservation
    ConflictError         400  device already reserved
    ForbiddenError        403  releaser differs from reserver
"""


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = 404


class InvalidArgumentError(ServiceError):
    status_code = 400


class InvalidStateError(ServiceError):
    status_code = 400


class ConflictError(ServiceError):
    status_code = 400


class ForbiddenError(ServiceError):
    status_code = 403
