"""Tests for substitutability checks, including the classic LSP violations."""

from decimal import Decimal

import pytest

from lspbank.models.account import AccountKind, WithdrawableAccount, current_account, savings_account
from lspbank.models.exceptions import BankError
from lspbank.models.result import Result
from lspbank.models.transaction import WITHDRAW, Transaction
from lspbank.services.substitution import Operation, check_substitutable, run_sequence


class CheatAccount(WithdrawableAccount):
    """Weakens the invariant: pays out whatever is asked."""

    @property
    def label(self):
        return "Cheat Account"

    def withdraw(self, amount):
        amount = Decimal(amount)
        self.balance -= amount
        return Result.success(Transaction.done(WITHDRAW, self.label, amount, self.balance))


class FixedDepositAccount(WithdrawableAccount):
    """Breaks the history constraint: refuses every withdrawal."""

    @property
    def label(self):
        return "Fixed Deposit Account"

    def withdraw(self, amount):
        raise BankError("Withdraw not allowed in Fixed Deposit")


def cheat_account(balance):
    return CheatAccount(AccountKind.SAVINGS, balance)


def fixed_deposit_account(balance):
    return FixedDepositAccount(AccountKind.SAVINGS, balance)


@pytest.fixture
def operations():
    """Deposit 1000, withdraw 500, then withdraw more than is left."""
    return [
        Operation("deposit", 1000),
        Operation("withdraw", 500),
        Operation("withdraw", 700),
    ]


def test_operation_validates_name():
    """Only deposit and withdraw are operations."""
    with pytest.raises(ValueError, match="Unknown operation"):
        Operation("transfer", 1)


def test_operation_converts_amount():
    """Operation amounts are stored as Decimal."""
    assert Operation("deposit", "12.5").amount == Decimal("12.5")


def test_run_sequence_records_outcomes(operations):
    """Each step records the outcome and resulting balance."""
    trace = run_sequence(savings_account(100), operations)

    assert trace.label == "Savings Account"
    assert trace.signature == [
        ("deposit", "done", Decimal(1100)),
        ("withdraw", "done", Decimal(600)),
        ("withdraw", "rejected", Decimal(600)),
    ]
    assert trace.final_balance == 600
    assert not trace.invariant_breached


def test_run_sequence_records_exceptions():
    """An exception from the account becomes an error outcome."""
    trace = run_sequence(fixed_deposit_account(100), [Operation("withdraw", 50)])

    assert trace.signature == [("withdraw", "error:BankError", Decimal(100))]


def test_run_sequence_empty():
    """No operations, no steps."""
    trace = run_sequence(savings_account(), [])

    assert trace.steps == []
    assert trace.final_balance is None


def test_savings_and_current_are_substitutable(operations):
    """Identical start and sequence give identical outcomes."""
    report = check_substitutable([savings_account, current_account], operations, starting_balance=100)

    assert report.substitutable
    assert report.offenders == []
    assert report.violations == []
    assert [t.final_balance for t in report.traces] == [600, 600]


def test_insufficient_funds_from_zero_is_substitutable():
    """Both variants refuse a withdrawal from an empty account."""
    report = check_substitutable(
        [savings_account, current_account],
        [Operation("withdraw", 50)],
    )

    assert report.substitutable
    assert all(t.signature == [("withdraw", "rejected", Decimal(0))] for t in report.traces)


def test_history_constraint_violation_detected(operations):
    """A variant refusing all withdrawals is not substitutable."""
    report = check_substitutable([savings_account, fixed_deposit_account], operations, 100)

    assert not report.substitutable
    assert report.offenders == ["Fixed Deposit Account"]
    assert "error:BankError" in report.violations[0]


def test_class_invariant_violation_detected():
    """A variant letting the balance go negative is not substitutable."""
    report = check_substitutable(
        [savings_account, cheat_account],
        [Operation("withdraw", 200)],
        starting_balance=100,
    )

    assert not report.substitutable
    assert report.offenders == ["Cheat Account"]
    assert "negative" in report.violations[0]
    assert report.traces[1].invariant_breached
    assert report.traces[1].final_balance == -100


def test_invariant_violator_listed_first_blames_only_itself():
    """A sound variant is not blamed for differing from a broken first one."""
    report = check_substitutable(
        [cheat_account, savings_account, current_account],
        [Operation("withdraw", 200)],
        starting_balance=100,
    )

    assert not report.substitutable
    assert report.offenders == ["Cheat Account"]
    assert len(report.violations) == 1


def test_history_violator_listed_first_blames_only_itself(operations):
    """A variant that raises is never used as the reference."""
    report = check_substitutable(
        [fixed_deposit_account, savings_account, current_account],
        operations,
        starting_balance=100,
    )

    assert not report.substitutable
    assert report.offenders == ["Fixed Deposit Account"]
    assert report.violations == ["Fixed Deposit Account withdraw 500: error:BankError (balance 1100)"]


def test_all_variants_broken():
    """With no sound variant, each broken one is reported once."""
    report = check_substitutable(
        [fixed_deposit_account, cheat_account],
        [Operation("withdraw", 200)],
        starting_balance=100,
    )

    assert report.offenders == ["Fixed Deposit Account", "Cheat Account"]
    assert not report.traces[0].sound
    assert not report.traces[1].sound


def test_check_requires_factories():
    """Should raise ValueError with nothing to compare."""
    with pytest.raises(ValueError):
        check_substitutable([], [Operation("deposit", 1)])
