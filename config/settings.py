"""Configuration management for LSP Bank."""
import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional


def _amount_from_env(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"{name} must be a decimal amount, got {raw!r}") from None
    if not value.is_finite() or value <= 0:
        raise ValueError(f"{name} must be a positive amount, got {raw!r}")
    return value


@dataclass
class Settings:
    """Configuration settings for LSP Bank.

    This class centralizes the demonstration amounts and logging options.
    """

    # Demonstration amounts
    demo_deposit_amount: Decimal = Decimal(1000)
    demo_withdraw_amount: Decimal = Decimal(500)
    demo_fixed_deposit_amount: Decimal = Decimal(5000)

    # Logging Configuration
    log_level: str = 'WARNING'
    log_file: Optional[str] = None

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings from environment variables.

        Returns:
            Settings: A Settings instance with values from environment variables.

        Raises:
            ValueError: If an environment variable holds an invalid value.
        """
        log_level = (os.getenv('LSPBANK_LOG_LEVEL') or '').strip().upper() or cls.log_level
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"LSPBANK_LOG_LEVEL is not a logging level: {log_level!r}")

        return cls(
            demo_deposit_amount=_amount_from_env('LSPBANK_DEPOSIT_AMOUNT', cls.demo_deposit_amount),
            demo_withdraw_amount=_amount_from_env('LSPBANK_WITHDRAW_AMOUNT', cls.demo_withdraw_amount),
            demo_fixed_deposit_amount=_amount_from_env(
                'LSPBANK_FIXED_DEPOSIT_AMOUNT', cls.demo_fixed_deposit_amount
            ),
            log_level=log_level,
            log_file=os.getenv('LSPBANK_LOG_FILE') or None,
        )
