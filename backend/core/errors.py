"""Error kinds raised by the booking and slot services."""

from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    VALIDATION = 'validation'
    NOT_FOUND = 'not_found'
    CONFLICT = 'conflict'
    UNEXPECTED = 'unexpected'

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ServiceError(Exception):
    """A rejected operation: one error kind, a message and optional details."""

    def __init__(self, kind: ErrorKind, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> dict:
        body = {'success': False, 'error': self.message}
        if self.details:
            body['details'] = self.details
        return body


def validation_error(message: str, details: str | None = None) -> ServiceError:
    return ServiceError(ErrorKind.VALIDATION, message, details)


def not_found(message: str) -> ServiceError:
    return ServiceError(ErrorKind.NOT_FOUND, message)


def conflict(message: str, details: str | None = None) -> ServiceError:
    return ServiceError(ErrorKind.CONFLICT, message, details)
