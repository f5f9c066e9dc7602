"""Account data model and capability interfaces.

Accounts come in two capability classes. ``DepositOnlyAccount`` has no
``withdraw`` attribute at all, so a variant that must never pay out cannot
be handed to code that expects ``SupportsWithdraw``.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Protocol, runtime_checkable

from lspbank.models.exceptions import (
    CapabilityError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidConstructionError,
    InvariantViolationError,
)
from lspbank.models.money import exact_add, to_amount, to_decimal
from lspbank.models.result import Result
from lspbank.models.transaction import DEPOSIT, WITHDRAW, Transaction

logger = logging.getLogger(__name__)


class Capability(Enum):
    """Which operations an account supports."""

    DEPOSIT_ONLY = "deposit-only"
    DEPOSIT_WITHDRAW = "deposit+withdraw"


class AccountKind(Enum):
    """Concrete account variants, each bound to one capability."""

    SAVINGS = ("Savings Account", Capability.DEPOSIT_WITHDRAW)
    CURRENT = ("Current Account", Capability.DEPOSIT_WITHDRAW)
    FIXED_TERM = ("Fixed Term Account", Capability.DEPOSIT_ONLY)

    def __init__(self, label: str, capability: Capability):
        self.label = label
        self.capability = capability


@runtime_checkable
class SupportsDeposit(Protocol):
    """Anything that accepts deposits."""

    balance: Decimal
    label: str

    def deposit(self, amount) -> Transaction: ...


@runtime_checkable
class SupportsWithdraw(SupportsDeposit, Protocol):
    """Anything that accepts deposits and withdrawals.

    ``withdraw(amount)`` succeeds and lowers the balance by exactly
    ``amount`` whenever ``amount <= balance``, and otherwise returns a
    failed result with the balance untouched. The result's ``value`` should
    hold the Transaction record; callers fall back to building one from the
    account when it is None.
    """

    def withdraw(self, amount) -> Result[Transaction, InsufficientFundsError]: ...


@dataclass(eq=False)
class _BalanceAccount:
    """Shared balance bookkeeping for both capability classes."""

    kind: AccountKind
    balance: Decimal = Decimal(0)
    history: list[Transaction] = field(default_factory=list, init=False, repr=False)

    capability: ClassVar[Capability]

    def __post_init__(self):
        if self.kind.capability is not self.capability:
            raise CapabilityError(
                f"{self.kind.label} is {self.kind.capability.value}, "
                f"cannot open it as {self.capability.value}"
            )
        try:
            balance = to_decimal(self.balance)
        except InvalidAmountError as err:
            raise InvalidConstructionError(str(err)) from err
        if balance < 0:
            raise InvalidConstructionError(f"Balance can't be negative: {balance}")
        self.balance = balance

    @property
    def label(self) -> str:
        return self.kind.label

    def _check_invariant(self) -> None:
        if self.balance < 0:
            raise InvariantViolationError(
                f"{self.label} balance is negative: {self.balance}"
            )

    def deposit(self, amount) -> Transaction:
        """
        Add funds to the account.

        Args:
            amount: The amount to deposit (must be positive)

        Returns:
            The completed deposit Transaction

        Raises:
            InvalidAmountError: If the amount is malformed, zero or negative,
                or the new balance cannot be represented exactly
        """
        amount = to_amount(amount, "deposit")
        self._check_invariant()

        self.balance = exact_add(self.balance, amount, "deposit")
        self._check_invariant()

        transaction = Transaction.done(DEPOSIT, self.label, amount, self.balance)
        self.history.append(transaction)
        logger.debug("Deposited %s in %s, balance %s", amount, self.label, self.balance)
        return transaction


class DepositOnlyAccount(_BalanceAccount):
    """An account that accepts deposits and never pays out."""

    capability = Capability.DEPOSIT_ONLY


class WithdrawableAccount(_BalanceAccount):
    """An account that accepts deposits and withdrawals."""

    capability = Capability.DEPOSIT_WITHDRAW

    def withdraw(self, amount) -> Result[Transaction, InsufficientFundsError]:
        """
        Take funds out of the account if the balance covers them.

        A withdrawal larger than the balance is not an exception: the
        returned Result carries InsufficientFundsError together with the
        rejected transaction, and the balance is left unchanged.

        Args:
            amount: The amount to withdraw (must be positive)

        Returns:
            A successful Result holding the done Transaction, or a failed
            Result holding InsufficientFundsError

        Raises:
            InvalidAmountError: If the amount is malformed, zero or negative,
                or the new balance cannot be represented exactly
        """
        amount = to_amount(amount, "withdraw")
        self._check_invariant()

        if amount > self.balance:
            error = InsufficientFundsError(
                f"Insufficient funds in {self.label}: {self.balance} available, {amount} requested",
                balance=self.balance,
                requested=amount,
            )
            transaction = Transaction.rejected(WITHDRAW, self.label, amount, self.balance)
            self.history.append(transaction)
            logger.info("Rejected withdrawal of %s from %s: %s", amount, self.label, error)
            return Result.failure(error, transaction)

        self.balance = exact_add(self.balance, amount.copy_negate(), "withdraw")
        self._check_invariant()

        transaction = Transaction.done(WITHDRAW, self.label, amount, self.balance)
        self.history.append(transaction)
        logger.debug("Withdrew %s from %s, balance %s", amount, self.label, self.balance)
        return Result.success(transaction)


def open_account(kind: AccountKind, balance=0) -> DepositOnlyAccount | WithdrawableAccount:
    """
    Open an account of the given kind with the class its capability calls for.

    Args:
        kind: The account variant
        balance: Initial balance (must not be negative)

    Returns:
        A WithdrawableAccount or DepositOnlyAccount

    Raises:
        InvalidConstructionError: If the initial balance is negative or malformed
    """
    if kind.capability is Capability.DEPOSIT_WITHDRAW:
        return WithdrawableAccount(kind, balance)
    return DepositOnlyAccount(kind, balance)


def savings_account(balance=0) -> WithdrawableAccount:
    return WithdrawableAccount(AccountKind.SAVINGS, balance)


def current_account(balance=0) -> WithdrawableAccount:
    return WithdrawableAccount(AccountKind.CURRENT, balance)


def fixed_term_account(balance=0) -> DepositOnlyAccount:
    return DepositOnlyAccount(AccountKind.FIXED_TERM, balance)
