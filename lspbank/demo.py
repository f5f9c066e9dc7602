"""Console demonstration of substitutable account contracts."""
import logging
import sys

from dotenv import load_dotenv

from config.settings import Settings
from lspbank.models.account import (
    AccountKind,
    current_account,
    fixed_term_account,
    open_account,
    savings_account,
)
from lspbank.services.bank_client import BankClient
from lspbank.services.transcript import format_transaction, render_summary

LOG_FORMAT = '%(asctime)s:%(levelname)s:%(name)s: %(message)s'


def configure_logging(settings: Settings) -> None:
    logger = logging.getLogger('lspbank')
    logger.setLevel(settings.log_level)
    if logger.handlers:
        return

    if settings.log_file:
        handler = logging.FileHandler(filename=settings.log_file, encoding='utf-8', mode='w')
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)


def main() -> int:
    load_dotenv()
    settings = Settings.load()
    configure_logging(settings)

    withdrawable_accounts = [savings_account(), current_account()]
    deposit_only_accounts = [fixed_term_account()]

    client = BankClient(
        withdrawable_accounts,
        deposit_only_accounts,
        deposit_amount=settings.demo_deposit_amount,
        withdraw_amount=settings.demo_withdraw_amount,
        fixed_deposit_amount=settings.demo_fixed_deposit_amount,
    )
    client.process_transactions()
    print()
    print(render_summary([*withdrawable_accounts, *deposit_only_accounts]))

    # Withdrawing the whole balance keeps it at zero, never below
    print()
    account = open_account(AccountKind.SAVINGS, 100)
    print(format_transaction(account.withdraw(100).unwrap()))
    return 0


if __name__ == '__main__':
    sys.exit(main())
