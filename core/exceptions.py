# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when EVM input is invalid or violates the calling contract."""


class BusinessRuleError(DomainError):
    """Raised when a computation cannot produce a meaningful result (e.g., nothing to render)."""
