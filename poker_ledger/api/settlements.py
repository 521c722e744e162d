from __future__ import annotations

from fastapi import APIRouter

from poker_ledger import runtime
from poker_ledger.api.errors import settlement_error
from poker_ledger.api.schemas import (
    CombinedSettlementResponse,
    CombinedSettleRequest,
    SettingsResponse,
    SettlementResponse,
    SettleRequest,
)
from poker_ledger.domain import (
    DomainValidationError,
    SharedExpense,
    aggregate_balances,
    expense_ledger,
    net_balances,
    profit_ledger,
    settle,
    settle_ledgers,
)

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.post(
    "",
    response_model=SettlementResponse,
    summary="Settle net balances with the fewest transfers",
)
def create_settlement(payload: SettleRequest) -> SettlementResponse:
    try:
        result = settle(payload.balances, payload.min_transfer, settings=runtime.settings)
    except DomainValidationError as exc:
        raise settlement_error(exc) from exc
    return SettlementResponse(**result.as_dict())


@router.post(
    "/combined",
    response_model=CombinedSettlementResponse,
    summary="Settle poker results together with shared expenses",
)
def create_combined_settlement(payload: CombinedSettleRequest) -> CombinedSettlementResponse:
    try:
        expenses = [
            SharedExpense(
                paid_by=item.paid_by,
                amount=item.amount,
                participants=tuple(item.participants),
                description=item.description,
            )
            for item in payload.expenses
        ]
        ledgers = {"poker": profit_ledger(payload.profits), "expenses": expense_ledger(expenses)}
        result = settle_ledgers(ledgers, payload.min_transfer, settings=runtime.settings)
    except DomainValidationError as exc:
        raise settlement_error(exc) from exc

    balances = aggregate_balances(*ledgers.values(), epsilon=runtime.settings.epsilon)
    return CombinedSettlementResponse(
        **result.as_dict(),
        balances=net_balances(balances),
    )


@router.get("/config", response_model=SettingsResponse, summary="Effective settlement settings")
def settlement_config() -> SettingsResponse:
    settings = runtime.settings
    return SettingsResponse(
        min_transfer=settings.min_transfer,
        epsilon=settings.epsilon,
        max_partition_size=settings.max_partition_size,
        round_digits=settings.round_digits,
    )
