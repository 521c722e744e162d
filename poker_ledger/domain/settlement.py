"""Domain logic for settling net balances with the fewest transfers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from itertools import chain

from .aggregation import (
    Ledger,
    aggregate_balances,
    expense_ledger,
    ledger_entries,
    quantize_balances,
    to_units,
)
from .models import (
    Balance,
    Group,
    SettlementResult,
    SettlementSettings,
    SharedExpense,
    Transfer,
    UnbalancedInputError,
)
from .partition import partition_zero_sum

logger = logging.getLogger("poker_ledger.domain.settlement")


def ensure_balanced(balances: Ledger, epsilon: float = 0.01) -> None:
    residual = sum(amount for _, amount in ledger_entries(balances))
    if abs(residual) > epsilon:
        logger.warning("refusing to settle unbalanced input, residual %.4f", residual)
        raise UnbalancedInputError(residual=residual, epsilon=epsilon)


def settle_group(group: Group, *, digits: int = 2) -> list[Transfer]:
    """Largest debtor pays largest creditor until every member is settled.

    Balances are worked in whole ``10 ** -digits`` units. Each transfer zeroes
    at least one member exactly, so a group of ``k`` needs at most ``k - 1``
    transfers. Equal amounts are broken by participant name.
    """
    working = {balance.participant: to_units(balance.amount, digits) for balance in group.members}

    transfers: list[Transfer] = []
    while True:
        creditors = [(name, units) for name, units in working.items() if units > 0]
        debtors = [(name, units) for name, units in working.items() if units < 0]
        if not creditors or not debtors:
            break

        creditor_name, creditor_units = min(creditors, key=lambda item: (-item[1], item[0]))
        debtor_name, debtor_units = min(debtors, key=lambda item: (item[1], item[0]))

        units = min(creditor_units, -debtor_units)
        working[creditor_name] = creditor_units - units
        working[debtor_name] = debtor_units + units

        amount = float(Decimal(units).scaleb(-digits))
        transfers.append(Transfer(sender=debtor_name, recipient=creditor_name, amount=amount))

    return transfers


def classify_transfers(
    transfers: Iterable[Transfer],
    min_transfer: float,
) -> tuple[tuple[Transfer, ...], tuple[Transfer, ...]]:
    """Split transfers into required and below-threshold, each ordered by payer then largest first."""
    ordered = sorted(transfers, key=lambda transfer: (transfer.sender, -transfer.amount))
    required = tuple(transfer for transfer in ordered if transfer.amount >= min_transfer)
    below_threshold = tuple(transfer for transfer in ordered if transfer.amount < min_transfer)
    return required, below_threshold


def settle(
    balances: Ledger,
    min_transfer: float | None = None,
    *,
    settings: SettlementSettings | None = None,
) -> SettlementResult:
    settings = settings or SettlementSettings()
    threshold = settings.min_transfer if min_transfer is None else min_transfer

    entries = ledger_entries(balances)
    ensure_balanced(entries, settings.epsilon)

    active = quantize_balances(
        aggregate_balances(entries, epsilon=settings.epsilon),
        settings.round_digits,
    )
    if len(active) < 2:
        return SettlementResult()

    groups = partition_zero_sum(
        active,
        digits=settings.round_digits,
        max_size=settings.max_partition_size,
    )
    transfers = [
        transfer
        for group in groups
        for transfer in settle_group(group, digits=settings.round_digits)
    ]
    required, below_threshold = classify_transfers(transfers, threshold)
    logger.debug(
        "settled %d balances in %d groups with %d transfers (%d below %.2f)",
        len(active),
        len(groups),
        len(transfers),
        len(below_threshold),
        threshold,
    )
    return SettlementResult(required=required, below_threshold=below_threshold, groups=tuple(groups))


def settle_ledgers(
    ledgers: Mapping[str, Ledger],
    min_transfer: float | None = None,
    *,
    settings: SettlementSettings | None = None,
) -> SettlementResult:
    """Settle several named ledgers (poker results, shared expenses, ...) together."""
    entries = list(chain.from_iterable(ledger_entries(ledger) for ledger in ledgers.values()))
    return settle(entries, min_transfer, settings=settings)


def settle_expenses(
    expenses: Sequence[SharedExpense],
    min_transfer: float | None = None,
    *,
    settings: SettlementSettings | None = None,
) -> SettlementResult:
    return settle(expense_ledger(expenses), min_transfer, settings=settings)


def reconcile(
    balances: Ledger,
    transfers: Iterable[Transfer],
    *,
    epsilon: float = 0.01,
) -> dict[str, float]:
    """Return ``settled - expected`` for every participant the transfers fail to reproduce."""
    expected: dict[str, float] = {}
    for name, amount in ledger_entries(balances):
        expected[name] = expected.get(name, 0.0) + amount

    settled: dict[str, float] = {name: 0.0 for name in expected}
    for transfer in transfers:
        settled[transfer.recipient] = settled.get(transfer.recipient, 0.0) + transfer.amount
        settled[transfer.sender] = settled.get(transfer.sender, 0.0) - transfer.amount

    residuals = {name: settled[name] - expected.get(name, 0.0) for name in sorted(settled)}
    return {name: residual for name, residual in residuals.items() if abs(residual) > epsilon}


def net_balances(balances: Sequence[Balance]) -> dict[str, float]:
    return {balance.participant: balance.amount for balance in balances}
