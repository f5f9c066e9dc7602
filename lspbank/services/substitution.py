"""Substitutability checks for withdraw-capable account variants.

Runs one operation sequence against several variants opened with the same
starting balance and compares what each of them did. Variants are
substitutable when none of them raised or showed a negative balance and
all of their traces match.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Iterable, Sequence

from lspbank.models.money import to_decimal
from lspbank.models.transaction import DEPOSIT, DONE, REJECTED, WITHDRAW

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operation:
    """One step of a sequence: 'deposit' or 'withdraw' with an amount."""

    name: str
    amount: Decimal

    def __post_init__(self):
        if self.name not in (DEPOSIT, WITHDRAW):
            raise ValueError(f"Unknown operation: {self.name!r}")
        object.__setattr__(self, "amount", to_decimal(self.amount))


@dataclass(frozen=True)
class Step:
    operation: Operation
    outcome: str
    balance: Decimal


@dataclass
class Trace:
    """What one account did for a sequence."""

    label: str
    steps: list[Step] = field(default_factory=list)
    invariant_breached: bool = False

    @property
    def signature(self) -> list[tuple[str, str, Decimal]]:
        return [(s.operation.name, s.outcome, s.balance) for s in self.steps]

    @property
    def final_balance(self) -> Decimal | None:
        return self.steps[-1].balance if self.steps else None

    @property
    def failed_step(self) -> Step | None:
        """First step on which the account raised instead of answering."""
        return next((s for s in self.steps if s.outcome.startswith("error:")), None)

    @property
    def sound(self) -> bool:
        return not self.invariant_breached and self.failed_step is None


@dataclass
class SubstitutionReport:
    substitutable: bool
    traces: list[Trace]
    offenders: list[str] = field(default_factory=list)
    violations: list[str] = field(default_factory=list)


def _apply(account, operation: Operation) -> str:
    if operation.name == DEPOSIT:
        account.deposit(operation.amount)
        return DONE
    result = account.withdraw(operation.amount)
    return DONE if result.ok else REJECTED


def run_sequence(account, operations: Iterable[Operation]) -> Trace:
    """
    Apply operations to an account and record each outcome.

    An exception raised by the account is recorded as the outcome
    'error:<ExceptionName>' and the sequence continues.

    Args:
        account: Any withdraw-capable account
        operations: The steps to apply, in order

    Returns:
        The Trace of outcomes and balances
    """
    trace = Trace(label=getattr(account, "label", type(account).__name__))
    for operation in operations:
        try:
            outcome = _apply(account, operation)
        except Exception as err:
            logger.debug("%s raised on %s: %r", trace.label, operation, err)
            outcome = f"error:{type(err).__name__}"
        balance = to_decimal(account.balance)
        if balance < 0:
            trace.invariant_breached = True
        trace.steps.append(Step(operation, outcome, balance))
    return trace


def check_substitutable(
    factories: Sequence[Callable[[Decimal], object]],
    operations: Sequence[Operation],
    starting_balance=0,
) -> SubstitutionReport:
    """
    Check that account variants behave identically under one sequence.

    A trace that observed a negative balance, or whose account raised on
    any step, marks its variant as an offender outright. The first trace
    without either problem is the reference; every other clean trace that
    differs from it is an offender too. When no trace is clean there is
    nothing to compare against.

    Args:
        factories: Callables taking the starting balance and returning an account
        operations: The sequence to run against each variant
        starting_balance: Opening balance for every variant (default: 0)

    Returns:
        A SubstitutionReport

    Raises:
        ValueError: If no factories are given
    """
    if not factories:
        raise ValueError("At least one account factory is required")

    start = to_decimal(starting_balance)
    traces = [run_sequence(factory(start), operations) for factory in factories]
    reference = next((t for t in traces if t.sound), None)

    offenders = []
    violations = []
    for trace in traces:
        if trace.invariant_breached:
            offenders.append(trace.label)
            violations.append(f"{trace.label} let the balance go negative")
            continue
        failed = trace.failed_step
        if failed is not None:
            offenders.append(trace.label)
            violations.append(
                f"{trace.label} {failed.operation.name} {failed.operation.amount}: "
                f"{failed.outcome} (balance {failed.balance})"
            )
            continue
        if trace is reference:
            continue
        for mine, theirs in zip(trace.steps, reference.steps):
            if (mine.outcome, mine.balance) != (theirs.outcome, theirs.balance):
                offenders.append(trace.label)
                violations.append(
                    f"{trace.label} {mine.operation.name} {mine.operation.amount}: "
                    f"{mine.outcome} (balance {mine.balance}), "
                    f"{reference.label} {theirs.outcome} (balance {theirs.balance})"
                )
                break

    if offenders:
        logger.info("Not substitutable: %s", "; ".join(violations))
    return SubstitutionReport(
        substitutable=not offenders,
        traces=traces,
        offenders=offenders,
        violations=violations,
    )
