"""Block rotation preview across beneficiaries.

The projected balance is cut into whole blocks of ``rotation_block_cents``.
Blocks not yet covered by beneficiary balances are dealt round-robin,
starting at the configured beneficiary. The preview is informational: it
never writes, and real transfers go through the allocation ledger.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session

from fundledger.models.beneficiary import Beneficiary
from fundledger.services.balance_service import BalanceCalculator
from fundledger.services.settings_service import LedgerSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RotationRow:
    beneficiary_id: int
    name: str
    current_cents: int
    new_blocks: int
    target_cents: int


@dataclass(frozen=True)
class RotationPreview:
    block_cents: int
    blocks_total: int
    blocks_held: int
    new_blocks: int
    leftover_cents: int
    start_beneficiary_id: int | None
    rows: list[RotationRow] = field(default_factory=list)


def deal_blocks(beneficiary_ids: list[int], new_blocks: int, start_id: int | None) -> dict[int, int]:
    """Deal ``new_blocks`` round-robin, beginning at ``start_id`` (or the first id)."""
    dealt = {bid: 0 for bid in beneficiary_ids}
    if not beneficiary_ids or new_blocks <= 0:
        return dealt
    index = beneficiary_ids.index(start_id) if start_id in beneficiary_ids else 0
    for _ in range(new_blocks):
        dealt[beneficiary_ids[index]] += 1
        index = (index + 1) % len(beneficiary_ids)
    return dealt


class RotationService:
    """Compute the rotation preview from current balances."""

    def __init__(self, session: Session, settings: LedgerSettings | None = None):
        self.session = session
        self.settings = settings or LedgerSettings()

    def preview(self) -> RotationPreview:
        block = self.settings.rotation_block_cents
        totals = BalanceCalculator(self.session, self.settings).calculate()
        beneficiaries = list(
            self.session.execute(select(Beneficiary).order_by(Beneficiary.id)).scalars()
        )

        projected = max(0, totals.projected_balance)
        blocks_total = projected // block if block > 0 else 0
        blocks_held = totals.total_beneficiary_balance // block if block > 0 else 0
        new_blocks = max(blocks_total - blocks_held, 0)
        leftover = projected - blocks_total * block if block > 0 else projected

        dealt = deal_blocks(
            [b.id for b in beneficiaries], new_blocks, self.settings.rotation_start_beneficiary_id
        )
        rows = [
            RotationRow(
                beneficiary_id=b.id,
                name=b.name,
                current_cents=b.balance_cents,
                new_blocks=dealt[b.id],
                target_cents=b.balance_cents + dealt[b.id] * block,
            )
            for b in beneficiaries
        ]
        logger.debug("Rotation preview: blocks_total=%d new_blocks=%d", blocks_total, new_blocks)
        return RotationPreview(
            block_cents=block,
            blocks_total=blocks_total,
            blocks_held=blocks_held,
            new_blocks=new_blocks,
            leftover_cents=leftover,
            start_beneficiary_id=self.settings.rotation_start_beneficiary_id,
            rows=rows,
        )


__all__ = ["RotationRow", "RotationPreview", "RotationService", "deal_blocks"]
