# Fichier: academy/core/exceptions.py
from fastapi import status


class AppException(Exception):
    """Base exception for errors that map onto an HTTP status."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class NotFoundError(AppException):
    """A keyed lookup missed."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class ValidationError(AppException):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(status.HTTP_422_UNPROCESSABLE_ENTITY, detail)


class ConflictError(AppException):
    """A uniqueness constraint rejected the write."""

    def __init__(self, detail: str = "Conflict"):
        super().__init__(status.HTTP_409_CONFLICT, detail)


class DatabaseError(AppException):
    def __init__(self, detail: str = "Database error"):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail)
