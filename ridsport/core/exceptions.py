"""
core/exceptions.py
------------------
Domain error taxonomy shared by every service.

Services raise these; main.py converts them into JSON responses so that
route handlers never have to translate errors by hand.

  NotFoundError      → 404  (id / subdomain lookup miss)
  InvalidInputError  → 400  (range, enum or ordering violation)
  ConflictError      → 409  (uniqueness violation)
  ForbiddenError     → 403  (authorization policy denial)

Anything else is an unexpected failure and is reported as a generic 500.
"""

from fastapi import status


class DomainError(Exception):
    """Base class for all expected, client-facing failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND

    @classmethod
    def for_entity(cls, entity: str, key: str) -> "NotFoundError":
        return cls(f"{entity} '{key}' not found")


class InvalidInputError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT


class ForbiddenError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
