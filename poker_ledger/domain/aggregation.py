"""Merging of profit/loss and shared-expense ledgers into net balances."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_FLOOR, ROUND_HALF_EVEN, Decimal
from typing import Union

from .models import Balance, SharedExpense, normalize_participant

LedgerEntry = tuple[str, float]
Ledger = Union[Mapping[str, float], Iterable[LedgerEntry], Iterable[Balance]]


def profit_ledger(results: Mapping[str, float]) -> list[LedgerEntry]:
    return [(normalize_participant(name), float(profit)) for name, profit in results.items()]


def expense_ledger(expenses: Sequence[SharedExpense]) -> list[LedgerEntry]:
    """Payer is credited the full amount, every participant is debited an equal share."""
    entries: list[LedgerEntry] = []
    for expense in expenses:
        entries.append((expense.paid_by, expense.amount))
        share = expense.amount / len(expense.participants)
        for participant in expense.participants:
            entries.append((participant, -share))
    return entries


def ledger_entries(ledger: Ledger) -> list[LedgerEntry]:
    if isinstance(ledger, Mapping):
        return [(normalize_participant(name), float(amount)) for name, amount in ledger.items()]

    entries: list[LedgerEntry] = []
    for item in ledger:
        if isinstance(item, Balance):
            entries.append((item.participant, item.amount))
        else:
            name, amount = item
            entries.append((normalize_participant(name), float(amount)))
    return entries


def aggregate_balances(*ledgers: Ledger, epsilon: float = 0.01) -> list[Balance]:
    """Sum every ledger per participant, dropping participants that net to zero.

    The result is ordered by participant name so that downstream steps see the
    same order for the same input.
    """
    net: dict[str, float] = {}
    for ledger in ledgers:
        for name, amount in ledger_entries(ledger):
            net[name] = net.get(name, 0.0) + amount

    return [
        Balance(participant=name, amount=amount)
        for name, amount in sorted(net.items())
        if abs(amount) >= epsilon
    ]


def to_units(amount: float, digits: int = 2) -> int:
    """Nearest whole number of ``10 ** -digits`` units in ``amount``."""
    return int(Decimal(str(amount)).scaleb(digits).to_integral_value(rounding=ROUND_HALF_EVEN))


def quantize_balances(balances: Sequence[Balance], digits: int = 2) -> list[Balance]:
    """Round balances to ``10 ** -digits`` so that the rounded units sum to exactly zero.

    Every balance is floored first; the units still missing are handed out one
    at a time to the balances with the largest discarded fraction (ties by
    participant), the same way a pot is split with a remainder. Each balance
    moves by less than one unit unless the input itself is off by more than a
    unit. Balances that round to zero are dropped.
    """
    scaled = [Decimal(str(balance.amount)).scaleb(digits) for balance in balances]
    floors = [int(value.to_integral_value(rounding=ROUND_FLOOR)) for value in scaled]

    missing = -sum(floors)
    if missing >= 0:
        order = sorted(range(len(balances)), key=lambda idx: (floors[idx] - scaled[idx], balances[idx].participant))
    else:
        order = sorted(range(len(balances)), key=lambda idx: (scaled[idx] - floors[idx], balances[idx].participant))

    units = list(floors)
    if order:
        share, remainder = divmod(abs(missing), len(order))
        step = 1 if missing >= 0 else -1
        for position, idx in enumerate(order):
            units[idx] += step * (share + (1 if position < remainder else 0))

    unit = Decimal(1).scaleb(-digits)
    return [
        Balance(participant=balance.participant, amount=float(amount * unit))
        for balance, amount in zip(balances, units)
        if amount != 0
    ]
