"""Bank client that drives accounts through their capability contracts."""

import logging
from decimal import Decimal
from typing import Callable, Iterable

from lspbank.models.account import SupportsDeposit, SupportsWithdraw
from lspbank.models.exceptions import CapabilityError
from lspbank.models.money import to_amount
from lspbank.models.transaction import WITHDRAW, Transaction
from lspbank.services.transcript import format_transaction

logger = logging.getLogger(__name__)


class BankClient:
    """Runs the demonstration transactions over two capability groups."""

    def __init__(
        self,
        withdrawable_accounts: Iterable[SupportsWithdraw],
        deposit_only_accounts: Iterable[SupportsDeposit],
        deposit_amount=1000,
        withdraw_amount=500,
        fixed_deposit_amount=5000,
        echo: Callable[[str], None] = print,
    ):
        """
        Initialize the BankClient with its account groups.

        Args:
            withdrawable_accounts: Accounts honoring the withdraw contract
            deposit_only_accounts: Accounts that only take deposits
            deposit_amount: Deposited into each withdrawable account (default: 1000)
            withdraw_amount: Then withdrawn from each withdrawable account (default: 500)
            fixed_deposit_amount: Deposited into each deposit-only account (default: 5000)
            echo: Sink for transcript lines (default: print)

        Raises:
            CapabilityError: If an account lacks its group's capability or
                appears in both groups
            InvalidAmountError: If a demonstration amount is not positive
        """
        self._withdrawable = list(withdrawable_accounts)
        self._deposit_only = list(deposit_only_accounts)

        for account in self._withdrawable:
            if not isinstance(account, SupportsWithdraw):
                raise CapabilityError(f"{account!r} does not support withdraw")
        for account in self._deposit_only:
            if not isinstance(account, SupportsDeposit):
                raise CapabilityError(f"{account!r} does not support deposit")

        shared = {id(a) for a in self._withdrawable} & {id(a) for a in self._deposit_only}
        if shared:
            raise CapabilityError("An account cannot belong to both groups")

        self._deposit_amount = to_amount(deposit_amount, "deposit")
        self._withdraw_amount = to_amount(withdraw_amount, "withdraw")
        self._fixed_deposit_amount = to_amount(fixed_deposit_amount, "deposit")
        self._echo = echo

    @property
    def withdrawable_accounts(self) -> list[SupportsWithdraw]:
        return list(self._withdrawable)

    @property
    def deposit_only_accounts(self) -> list[SupportsDeposit]:
        return list(self._deposit_only)

    def _emit(self, transaction: Transaction) -> Transaction:
        self._echo(format_transaction(transaction))
        return transaction

    def process_transactions(self) -> list[Transaction]:
        """
        Deposit then withdraw on every withdrawable account, deposit only on
        every deposit-only account.

        Insufficient funds on a withdrawal is reported in the transcript and
        the returned records; it does not stop the batch.

        Returns:
            All transactions produced, in the order they were applied
        """
        logger.info(
            "Processing %d withdrawable and %d deposit-only accounts",
            len(self._withdrawable),
            len(self._deposit_only),
        )
        transactions = []

        for account in self._withdrawable:
            transactions.append(self._emit(account.deposit(self._deposit_amount)))
            result = account.withdraw(self._withdraw_amount)
            transaction = result.value
            if transaction is None:
                record = Transaction.done if result.ok else Transaction.rejected
                transaction = record(WITHDRAW, account.label, self._withdraw_amount, account.balance)
            transactions.append(self._emit(transaction))

        for account in self._deposit_only:
            transactions.append(self._emit(account.deposit(self._fixed_deposit_amount)))

        rejected = sum(1 for t in transactions if not t.succeeded)
        logger.info("Processed %d transactions, %d rejected", len(transactions), rejected)
        return transactions

    def total_balance(self) -> Decimal:
        """Sum of balances across both groups."""
        return sum(
            (a.balance for a in [*self._withdrawable, *self._deposit_only]),
            Decimal(0),
        )
