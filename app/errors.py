from typing import Optional


class CrimeReportError(Exception):
    """Base exception for the crime report service."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message


class ValidationError(CrimeReportError):
    """Raised when submitted report data fails the schema constraints."""

    def __init__(self, message: str, field: str, details: Optional[str] = None):
        super().__init__(message, details)
        self.field = field


class StorageError(CrimeReportError):
    """Raised when the report store is unreachable or an operation on it fails."""

    pass
