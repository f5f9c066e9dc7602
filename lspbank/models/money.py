"""Decimal amount handling."""

from decimal import Decimal, Inexact, InvalidOperation, localcontext

from lspbank.models.exceptions import InvalidAmountError


def to_decimal(value) -> Decimal:
    """
    Convert a user-supplied value into a finite Decimal.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Args:
        value: A Decimal, int, float or decimal string

    Returns:
        The value as a Decimal

    Raises:
        InvalidAmountError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"Amount must be a number, got {value!r}") from None
    if not result.is_finite():
        raise InvalidAmountError(f"Amount must be finite, got {value!r}")
    return result


def to_amount(value, action: str = "transact") -> Decimal:
    """
    Convert and validate an operation amount (must be strictly positive).

    Args:
        value: The raw amount
        action: Verb used in the error message (e.g. 'deposit')

    Returns:
        The amount as a positive Decimal

    Raises:
        InvalidAmountError: If the amount is malformed, zero or negative
    """
    amount = to_decimal(value)
    if amount < 0:
        raise InvalidAmountError(
            f"Cannot {action} negative amount: {amount}. Amount must be positive."
        )
    if amount == 0:
        raise InvalidAmountError(f"Amount to {action} must be greater than zero.")
    return amount


def exact_add(balance: Decimal, delta: Decimal, action: str = "transact") -> Decimal:
    """
    Add two decimals without rounding.

    Args:
        balance: The current balance
        delta: The signed change to apply
        action: Verb used in the error message (e.g. 'deposit')

    Returns:
        The exact sum

    Raises:
        InvalidAmountError: If the sum needs more digits than the context allows
    """
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        try:
            return balance + delta
        except Inexact:
            raise InvalidAmountError(
                f"Cannot {action} {delta.copy_abs()}: result exceeds {ctx.prec} digits of precision"
            ) from None
