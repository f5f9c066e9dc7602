"""Transaction data model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

DEPOSIT = "deposit"
WITHDRAW = "withdraw"

DONE = "done"
REJECTED = "rejected"


@dataclass(frozen=True)
class Transaction:
    """Record of a single operation applied to an account."""

    type: str
    account: str
    amount: Decimal
    balance_after: Decimal
    status: str
    time: datetime = field(default_factory=datetime.now)

    @property
    def succeeded(self) -> bool:
        return self.status == DONE

    @classmethod
    def done(cls, type: str, account: str, amount: Decimal, balance_after: Decimal) -> "Transaction":
        """
        Create a completed transaction with current timestamp.

        Args:
            type: The type of transaction ('deposit' or 'withdraw')
            account: Label of the account the operation was applied to
            amount: The transaction amount
            balance_after: The account balance once the operation completed

        Returns:
            A new Transaction with status='done'
        """
        return cls(
            type=type,
            account=account,
            amount=amount,
            balance_after=balance_after,
            status=DONE,
        )

    @classmethod
    def rejected(cls, type: str, account: str, amount: Decimal, balance_after: Decimal) -> "Transaction":
        """Create a rejected transaction; the balance is left as it was."""
        return cls(
            type=type,
            account=account,
            amount=amount,
            balance_after=balance_after,
            status=REJECTED,
        )
