"""Console transcript formatting."""

from decimal import Decimal

from tabulate import tabulate

from lspbank.models.transaction import DEPOSIT, Transaction


def format_amount(value: Decimal) -> str:
    """Render a decimal without exponent or trailing fractional zeros."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_transaction(transaction: Transaction) -> str:
    """
    Build the status line for a transaction.

    Args:
        transaction: A deposit or withdrawal record

    Returns:
        e.g. 'Deposited: 1000 in Savings Account. New Balance: 1000'
    """
    amount = format_amount(transaction.amount)
    balance = format_amount(transaction.balance_after)
    if transaction.type == DEPOSIT:
        return f"Deposited: {amount} in {transaction.account}. New Balance: {balance}"
    if not transaction.succeeded:
        return f"Insufficient funds in {transaction.account}!"
    return f"Withdrawn: {amount} from {transaction.account}. New Balance: {balance}"


def render_summary(accounts) -> str:
    """Tabulate label, capability and balance of each account."""
    rows = [
        [account.label, account.kind.capability.value, format_amount(account.balance)]
        for account in accounts
    ]
    return tabulate(rows, headers=["Account", "Capability", "Balance"], colalign=("left", "left", "right"))
