"""Tests for account deposit operations."""

from decimal import Decimal

import pytest

from lspbank.models.account import current_account, fixed_term_account, savings_account
from lspbank.models.exceptions import InvalidAmountError, InvariantViolationError


@pytest.fixture(params=[savings_account, current_account, fixed_term_account])
def account(request):
    """One account of each kind, opened with a balance of 100."""
    return request.param(100)


def test_deposit_success(account):
    """Scenario: balance 100, deposit 1000 gives 1100."""
    transaction = account.deposit(1000)

    assert account.balance == 1100
    assert transaction.type == "deposit"
    assert transaction.status == "done"
    assert transaction.amount == 1000
    assert transaction.balance_after == 1100
    assert transaction.account == account.label


@pytest.mark.parametrize("amount", [Decimal("0.01"), 1, "250.75", 10**12])
def test_deposit_increases_by_exact_amount(account, amount):
    """Deposit raises the balance by exactly the amount."""
    before = account.balance
    account.deposit(amount)

    assert account.balance - before == Decimal(str(amount))


def test_deposit_at_precision_limit_is_exact(account):
    """A balance near the precision limit still grows by exactly the amount."""
    account.balance = Decimal(10) ** 27
    account.deposit(1)

    assert account.balance - Decimal(10) ** 27 == 1


def test_deposit_beyond_precision_raises_error(account):
    """Should raise InvalidAmountError instead of rounding the balance."""
    account.balance = Decimal(10) ** 28

    with pytest.raises(InvalidAmountError, match="precision"):
        account.deposit(1)

    assert account.balance == Decimal(10) ** 28
    assert account.history == []


def test_deposit_records_history(account):
    """Each deposit is appended to the account history."""
    first = account.deposit(10)
    second = account.deposit(20)

    assert account.history == [first, second]
    assert account.balance == 130


def test_deposit_negative_amount_raises_error(account):
    """Should raise InvalidAmountError and leave the balance alone."""
    with pytest.raises(InvalidAmountError) as exc_info:
        account.deposit(-100)

    assert "negative" in str(exc_info.value).lower()
    assert account.balance == 100
    assert account.history == []


def test_deposit_zero_raises_error(account):
    """Should raise InvalidAmountError."""
    with pytest.raises(InvalidAmountError):
        account.deposit(0)


def test_deposit_detects_tampered_balance(account):
    """A balance forced below zero is reported before any mutation."""
    account.balance = Decimal(-1)

    with pytest.raises(InvariantViolationError):
        account.deposit(5)
    assert account.balance == -1
