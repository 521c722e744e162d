"""Splitting of balances into the largest number of independent zero-sum groups."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .aggregation import to_units
from .models import Balance, Group

logger = logging.getLogger("poker_ledger.domain.partition")

DEFAULT_MAX_PARTITION_SIZE = 15


def subset_sums(amounts: Sequence[int]) -> list[int]:
    """Sum of every subset of ``amounts``, indexed by bitmask."""
    sums = [0] * (1 << len(amounts))
    for mask in range(1, len(sums)):
        low = mask & -mask
        sums[mask] = sums[mask ^ low] + amounts[low.bit_length() - 1]
    return sums


def partition_zero_sum(
    balances: Sequence[Balance],
    *,
    digits: int = 2,
    max_size: int = DEFAULT_MAX_PARTITION_SIZE,
) -> list[Group]:
    """Partition ``balances`` into the maximum number of groups that each net to zero.

    A zero-sum set split into ``k`` zero-sum groups has ``k`` zero-sum prefixes
    for some ordering of its members, so ``best[mask]`` counts the most zero-sum
    prefixes any ordering of ``mask`` can produce and ``last[mask]`` records the
    member placed last in that ordering. Walking the recorded members back from
    the full mask cuts a group every time the remaining mask nets to zero.

    Amounts are compared as whole ``10 ** -digits`` units, so every group found
    nets to exactly zero; pass balances from ``quantize_balances`` to keep the
    full set zero-sum.

    Members are ordered by participant before bits are assigned and ties keep
    the lowest bit, so the same input always yields the same groups.
    """
    ordered = sorted(balances, key=lambda balance: balance.participant)
    count = len(ordered)
    if count == 0:
        return []
    if count > max_size:
        logger.warning(
            "%d active balances exceed the partition bound of %d, settling them as one group",
            count,
            max_size,
        )
        return [Group(members=tuple(ordered))]

    sums = subset_sums([to_units(balance.amount, digits) for balance in ordered])
    full = (1 << count) - 1
    best = [0] * (full + 1)
    last = [-1] * (full + 1)

    for mask in range(1, full + 1):
        score = -1
        choice = -1
        rest = mask
        while rest:
            low = rest & -rest
            candidate = best[mask ^ low]
            if candidate > score:
                score = candidate
                choice = low.bit_length() - 1
            rest ^= low
        best[mask] = score + (1 if sums[mask] == 0 else 0)
        last[mask] = choice

    groups: list[Group] = []
    current: list[Balance] = []
    mask = full
    while mask:
        index = last[mask]
        current.append(ordered[index])
        mask ^= 1 << index
        if mask == 0 or sums[mask] == 0:
            groups.append(Group(members=tuple(sorted(current, key=lambda balance: balance.participant))))
            current = []

    groups.sort(key=lambda group: group.participants)
    logger.debug("partitioned %d balances into %d zero-sum groups", count, len(groups))
    return groups
