"""
Error taxonomy shared by services, screens and routes.

- AuthError: bad credentials, duplicate account, invalid or expired token.
- ValidationError: a form field failed a check the request schema cannot express.
- BackendError: the document store, blob store or auth backend failed.
"""
from typing import Dict, Optional


class StudyHubError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(StudyHubError):
    def __init__(self, message: str = "Authentication failed", status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


class ValidationError(StudyHubError):
    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        super().__init__(message or "Validation failed")
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls({field: message})


class BackendError(StudyHubError):
    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message
