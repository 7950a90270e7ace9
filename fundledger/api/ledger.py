"""Ledger API endpoints: remainder summary, allocations, dinner posting, rotation."""

import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from fundledger.models.dinner import Dinner
from fundledger.services import get_db
from fundledger.services.allocation_ledger import AllocationLedger
from fundledger.services.dinner_figures import (
    dinner_expected_revenue,
    dinner_expenses,
    dinner_revenue,
)
from fundledger.services.errors import NotFoundError
from fundledger.services.money import format_cents
from fundledger.services.posting_service import (
    DinnerPoster,
    PostingDetector,
    dinner_label,
    posted_revenue_description,
)
from fundledger.services.remainder_service import get_remainder_summary
from fundledger.services.rotation_service import RotationService
from fundledger.services.settings_service import LedgerSettings, load_ledger_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ledger", tags=["ledger"])


def get_ledger_settings(db: Session = Depends(get_db)) -> LedgerSettings:
    """Settings for the current request."""
    return load_ledger_settings(db)


# Request schemas
class ApplyAllocationRequest(BaseModel):
    beneficiary_id: int | None = None
    amount_cents: int
    note: str | None = None


class EditAllocationRequest(BaseModel):
    amount_cents: int


# Response schemas
class SummaryResponse(BaseModel):
    """Remainder summary; every amount in minor units."""

    posted_balance: int
    projected_surplus: int
    projected_balance: int
    total_beneficiary_balance: int
    theoretical_remainder: int
    applied_remainder: int
    available_remainder: int
    display: dict[str, str]  # Same figures as major-unit strings


class AllocationResponse(BaseModel):
    id: int
    created_at: datetime
    beneficiary_id: int
    amount_cents: int
    note: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AllocationHistoryResponse(AllocationResponse):
    beneficiary_name: str


class DinnerPostingResponse(BaseModel):
    dinner_id: int
    label: str
    posted: bool
    revenue_cents: int
    expected_revenue_cents: int
    expenses_cents: int
    revenue_description: str


class MovementResponse(BaseModel):
    id: int
    movement_date: date | None = None
    description: str | None = None
    amount_cents: int
    category_id: int

    model_config = ConfigDict(from_attributes=True)


class RotationRowResponse(BaseModel):
    beneficiary_id: int
    name: str
    current_cents: int
    new_blocks: int
    target_cents: int

    model_config = ConfigDict(from_attributes=True)


class RotationResponse(BaseModel):
    block_cents: int
    blocks_total: int
    blocks_held: int
    new_blocks: int
    leftover_cents: int
    start_beneficiary_id: int | None = None
    rows: list[RotationRowResponse]

    model_config = ConfigDict(from_attributes=True)


@router.get("/summary", response_model=SummaryResponse)
def remainder_summary(
    db: Session = Depends(get_db),
    settings: LedgerSettings = Depends(get_ledger_settings),
) -> SummaryResponse:
    figures = get_remainder_summary(db, settings).as_dict()
    return SummaryResponse(**figures, display={k: format_cents(v) for k, v in figures.items()})


@router.get("/allocations", response_model=list[AllocationHistoryResponse])
def allocation_history(db: Session = Depends(get_db)) -> list[AllocationHistoryResponse]:
    return [AllocationHistoryResponse(**item._asdict()) for item in AllocationLedger(db).list_history()]


@router.post("/allocations", response_model=AllocationResponse, status_code=status.HTTP_201_CREATED)
def apply_allocation(
    payload: ApplyAllocationRequest,
    db: Session = Depends(get_db),
    settings: LedgerSettings = Depends(get_ledger_settings),
) -> AllocationResponse:
    allocation = AllocationLedger(db, settings).apply(
        payload.beneficiary_id, payload.amount_cents, note=payload.note
    )
    return AllocationResponse.model_validate(allocation)


@router.patch("/allocations/{allocation_id}", response_model=AllocationResponse)
def edit_allocation(
    allocation_id: int,
    payload: EditAllocationRequest,
    db: Session = Depends(get_db),
    settings: LedgerSettings = Depends(get_ledger_settings),
) -> AllocationResponse:
    allocation = AllocationLedger(db, settings).edit(allocation_id, payload.amount_cents)
    return AllocationResponse.model_validate(allocation)


@router.delete("/allocations/{allocation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_allocation(
    allocation_id: int,
    db: Session = Depends(get_db),
    settings: LedgerSettings = Depends(get_ledger_settings),
) -> Response:
    AllocationLedger(db, settings).delete(allocation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/dinners/{dinner_id}/posting", response_model=DinnerPostingResponse)
def dinner_posting_status(
    dinner_id: int,
    db: Session = Depends(get_db),
    settings: LedgerSettings = Depends(get_ledger_settings),
) -> DinnerPostingResponse:
    dinner = db.get(Dinner, dinner_id)
    if dinner is None:
        raise NotFoundError(f"Dinner {dinner_id} not found")
    return DinnerPostingResponse(
        dinner_id=dinner.id,
        label=dinner_label(dinner),
        posted=PostingDetector(db).is_posted(dinner),
        revenue_cents=dinner_revenue(dinner, dinner.guests, settings.count_only_present_guests),
        expected_revenue_cents=dinner_expected_revenue(dinner, dinner.guests),
        expenses_cents=dinner_expenses(dinner, dinner.expense_lines),
        revenue_description=posted_revenue_description(dinner),
    )


@router.post(
    "/dinners/{dinner_id}/post",
    response_model=list[MovementResponse],
    status_code=status.HTTP_201_CREATED,
)
def post_dinner(
    dinner_id: int,
    db: Session = Depends(get_db),
    settings: LedgerSettings = Depends(get_ledger_settings),
) -> list[MovementResponse]:
    movements = DinnerPoster(db, settings).post(dinner_id)
    return [MovementResponse.model_validate(m) for m in movements]


@router.get("/rotation", response_model=RotationResponse)
def rotation_preview(
    db: Session = Depends(get_db),
    settings: LedgerSettings = Depends(get_ledger_settings),
) -> RotationResponse:
    return RotationResponse.model_validate(RotationService(db, settings).preview())
