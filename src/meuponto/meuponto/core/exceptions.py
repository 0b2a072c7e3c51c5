class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class LedgerError(DomainError):
    """Raised when a ledger result is unwrapped although it carries a failure."""
