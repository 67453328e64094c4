"""Application exceptions translated to HTTP responses by error_handlers"""

from typing import Optional


class DomainException(Exception):
    """A business rule was violated"""


class ValidationException(Exception):
    """Input failed validation; carries per-field messages"""

    def __init__(self, errors: Optional[dict[str, list[str]]] = None, message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors or {}


class NotFoundException(LookupError):
    """Requested resource does not exist"""


class UnauthorizedException(PermissionError):
    """Caller is not allowed to perform the operation"""
