"""Explicit ledger settings value.

Services receive a ``LedgerSettings`` instead of reading the settings row on
their own, so the remainder computation stays a function of its inputs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from fundledger.models.fund_settings import (
    DEFAULT_ROTATION_BLOCK_CENTS,
    SETTINGS_ROW_ID,
    FundSettings,
)
from fundledger.services.config import AppConfig, get_app_config


class RemainderPolicy(str, Enum):
    """Which balance the spendable ceiling is derived from."""

    CONSERVATIVE = "conservative"
    """Posted balance only; projected dinner profit is never spendable."""

    THEORETICAL = "theoretical"
    """Posted balance plus projected dinner profit."""


@dataclass(frozen=True)
class LedgerSettings:
    """Settings consumed by the calculator, engine and ledger."""

    remainder_policy: RemainderPolicy = RemainderPolicy.CONSERVATIVE
    count_only_present_guests: bool = False
    rotation_block_cents: int = DEFAULT_ROTATION_BLOCK_CENTS
    rotation_start_beneficiary_id: Optional[int] = None


def load_ledger_settings(db: Session, config: AppConfig | None = None) -> LedgerSettings:
    """Build settings from the environment config and the settings row.

    A missing settings row falls back to defaults.
    """
    config = config or get_app_config()
    row = db.get(FundSettings, SETTINGS_ROW_ID)
    block = DEFAULT_ROTATION_BLOCK_CENTS
    start_id = None
    if row is not None:
        block = row.rotation_block_cents if row.rotation_block_cents and row.rotation_block_cents > 0 else block
        start_id = row.rotation_start_beneficiary_id
    return LedgerSettings(
        remainder_policy=RemainderPolicy(config.remainder_policy),
        count_only_present_guests=config.count_only_present_guests,
        rotation_block_cents=block,
        rotation_start_beneficiary_id=start_id,
    )


__all__ = ["RemainderPolicy", "LedgerSettings", "load_ledger_settings"]
