"""Custom exceptions for the account contracts."""


class BankError(Exception):
    """Base exception for all account-related errors."""
    pass


class InvalidConstructionError(BankError, ValueError):
    """Raised when an account is created with a negative initial balance."""
    pass


class InsufficientFundsError(BankError):
    """Reported when a withdrawal exceeds the available balance."""

    def __init__(self, message: str = "", balance=None, requested=None):
        super().__init__(message)
        self.balance = balance
        self.requested = requested


class InvalidAmountError(BankError, ValueError):
    """Raised when an invalid amount is provided (e.g., zero or negative)."""
    pass


class CapabilityError(BankError, TypeError):
    """Raised when an account is wired in where its capability does not fit."""
    pass


class InvariantViolationError(BankError):
    """Raised when an account balance is observed below zero."""
    pass
