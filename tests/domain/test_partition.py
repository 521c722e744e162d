import random

import pytest

from poker_ledger.domain import Balance, partition_zero_sum, quantize_balances, to_units
from poker_ledger.domain.partition import subset_sums


def _max_zero_sum_groups(amounts: list[int]) -> int:
    """Brute force over every way to split ``amounts`` into zero-sum groups."""
    if not amounts:
        return 0
    first, rest = amounts[0], amounts[1:]
    best = -1
    for mask in range(1 << len(rest)):
        chosen = [rest[idx] for idx in range(len(rest)) if mask >> idx & 1]
        if first + sum(chosen) != 0:
            continue
        remaining = [rest[idx] for idx in range(len(rest)) if not mask >> idx & 1]
        found = _max_zero_sum_groups(remaining)
        if found >= 0:
            best = max(best, found + 1)
    return best


def _zero_sum_chunks(seed: int, size: int) -> list[int]:
    rng = random.Random(seed)
    amounts: list[int] = []
    while len(amounts) < size:
        chunk = [rng.choice([-1, 1]) * rng.randint(1, 6) for _ in range(min(rng.randint(1, 3), size - len(amounts) - 1))]
        if not chunk:
            chunk = [rng.randint(1, 6)]
        amounts.extend(chunk)
        amounts.append(-sum(chunk))
    amounts = [amount if amount else 1 for amount in amounts[:size]]
    amounts[-1] -= sum(amounts)
    rng.shuffle(amounts)
    return amounts


def test_subset_sums_indexed_by_mask() -> None:
    assert subset_sums([1.0, 2.0, 4.0]) == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0]


def test_empty_input_has_no_groups() -> None:
    assert partition_zero_sum([]) == []


def test_pairs_are_split_into_separate_groups() -> None:
    balances = [Balance("A", 25), Balance("B", -5), Balance("C", 5), Balance("D", -25)]

    groups = partition_zero_sum(balances)

    assert [group.participants for group in groups] == [("A", "D"), ("B", "C")]


def test_three_way_group_is_kept_whole() -> None:
    balances = [Balance("A", 30), Balance("B", 10), Balance("C", -40)]

    groups = partition_zero_sum(balances)

    assert [group.participants for group in groups] == [("A", "B", "C")]


@pytest.mark.parametrize("seed", range(40))
def test_group_count_matches_brute_force(seed: int) -> None:
    amounts = _zero_sum_chunks(seed, size=2 + seed % 7)
    balances = [Balance(f"p{idx}", amount) for idx, amount in enumerate(amounts)]

    groups = partition_zero_sum(balances)

    assert len(groups) == _max_zero_sum_groups(amounts)
    for group in groups:
        assert group.total == pytest.approx(0, abs=0.01)


@pytest.mark.parametrize("seed", range(10))
def test_groups_cover_every_balance_once(seed: int) -> None:
    amounts = _zero_sum_chunks(seed, size=8)
    balances = [Balance(f"p{idx}", amount) for idx, amount in enumerate(amounts)]

    groups = partition_zero_sum(balances)

    members = [balance for group in groups for balance in group.members]
    assert sorted(members, key=lambda balance: balance.participant) == sorted(
        balances, key=lambda balance: balance.participant
    )


def test_partition_is_deterministic() -> None:
    balances = [Balance(name, amount) for name, amount in [("A", 5), ("B", -5), ("C", 5), ("D", -5)]]

    first = partition_zero_sum(balances)
    second = partition_zero_sum(list(reversed(balances)))

    assert first == second
    assert [group.participants for group in first] == [("A", "B"), ("C", "D")]


def test_fallback_above_bound_returns_one_group() -> None:
    balances = [Balance(f"p{idx:02d}", 1 if idx % 2 else -1) for idx in range(6)]

    groups = partition_zero_sum(balances, max_size=5)

    assert len(groups) == 1
    assert len(groups[0]) == 6


def test_unbalanced_remainder_becomes_one_group() -> None:
    balances = [Balance("A", 10), Balance("B", -10), Balance("C", 3)]

    groups = partition_zero_sum(balances)

    assert sorted(group.participants for group in groups) == [("A", "B"), ("C",)]


def test_sums_within_a_cent_count_as_zero() -> None:
    balances = [Balance("A", 1.004), Balance("B", -1.0), Balance("C", 2.5), Balance("D", -2.497)]

    groups = partition_zero_sum(balances)

    assert [group.participants for group in groups] == [("A", "B"), ("C", "D")]


def test_groups_off_in_opposite_directions_are_not_split() -> None:
    balances = [Balance("A", 1.009), Balance("B", -1.0), Balance("C", 5.0), Balance("D", -5.018)]

    groups = partition_zero_sum(balances)

    assert [group.participants for group in groups] == [("A", "B", "C", "D")]


@pytest.mark.parametrize("seed", range(10))
def test_groups_of_quantized_thirds_net_to_exact_units(seed: int) -> None:
    rng = random.Random(seed)
    amounts = [rng.randint(100, 5_000) / 3 for _ in range(3)]
    raw = [*amounts, -amounts[0], -(amounts[1] + amounts[2])]
    balances = quantize_balances([Balance(f"p{idx}", amount) for idx, amount in enumerate(raw)])

    groups = partition_zero_sum(balances)

    for group in groups:
        assert sum(to_units(balance.amount) for balance in group.members) == 0
    assert sum(len(group) for group in groups) == len(balances) == 5
