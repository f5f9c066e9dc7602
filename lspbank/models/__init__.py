"""Data models for the account contracts."""

from .account import (
    AccountKind,
    Capability,
    DepositOnlyAccount,
    SupportsDeposit,
    SupportsWithdraw,
    WithdrawableAccount,
    current_account,
    fixed_term_account,
    open_account,
    savings_account,
)
from .result import Result
from .transaction import Transaction
from .exceptions import (
    BankError,
    CapabilityError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidConstructionError,
    InvariantViolationError,
)

__all__ = [
    "AccountKind",
    "Capability",
    "DepositOnlyAccount",
    "SupportsDeposit",
    "SupportsWithdraw",
    "WithdrawableAccount",
    "current_account",
    "fixed_term_account",
    "open_account",
    "savings_account",
    "Result",
    "Transaction",
    "BankError",
    "CapabilityError",
    "InsufficientFundsError",
    "InvalidAmountError",
    "InvalidConstructionError",
    "InvariantViolationError",
]
