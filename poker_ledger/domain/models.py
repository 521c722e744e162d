from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Tuple


class DomainValidationError(ValueError):
    """Raised when settlement input breaks a domain rule."""


class UnbalancedInputError(DomainValidationError):
    """Raised when input balances do not net to zero."""

    def __init__(self, residual: float, epsilon: float) -> None:
        super().__init__(f"balances must sum to zero, residual is {residual:.4f} (epsilon {epsilon})")
        self.residual = residual
        self.epsilon = epsilon


MAX_PARTITION_SIZE_LIMIT = 24


@dataclass(frozen=True)
class SettlementSettings:
    min_transfer: float = 5.0
    epsilon: float = 0.01
    # Above this many active balances the whole set is settled as one group.
    max_partition_size: int = 15
    # Balances are settled in whole units of 10 ** -round_digits (cents by default).
    round_digits: int = 2

    def __post_init__(self) -> None:
        if self.epsilon <= 0:
            raise DomainValidationError("epsilon must be positive")
        if self.min_transfer < 0:
            raise DomainValidationError("min_transfer must not be negative")
        if not 1 <= self.max_partition_size <= MAX_PARTITION_SIZE_LIMIT:
            raise DomainValidationError(
                f"max_partition_size must be between 1 and {MAX_PARTITION_SIZE_LIMIT}"
            )
        if self.round_digits < 0:
            raise DomainValidationError("round_digits must not be negative")
        # A unit larger than epsilon would move balances by more than epsilon.
        if 10 ** -self.round_digits > self.epsilon * (1 + 1e-9):
            raise DomainValidationError("round_digits is too coarse for epsilon")


@dataclass(frozen=True)
class Balance:
    participant: str
    amount: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "participant", normalize_participant(self.participant))
        object.__setattr__(self, "amount", float(self.amount))


@dataclass(frozen=True)
class Transfer:
    sender: str
    recipient: str
    amount: float

    def __post_init__(self) -> None:
        sender = normalize_participant(self.sender)
        recipient = normalize_participant(self.recipient)
        if sender == recipient:
            raise DomainValidationError(f"transfer from {sender} to itself")
        if self.amount <= 0:
            raise DomainValidationError("transfer amount must be positive")
        object.__setattr__(self, "sender", sender)
        object.__setattr__(self, "recipient", recipient)

    def as_dict(self) -> dict[str, Any]:
        return {"from": self.sender, "to": self.recipient, "amount": self.amount}


@dataclass(frozen=True)
class Group:
    """Balances that net to zero and can be settled on their own."""

    members: Tuple[Balance, ...]

    def __post_init__(self) -> None:
        if not self.members:
            raise DomainValidationError("group must have at least one member")

    @property
    def participants(self) -> tuple[str, ...]:
        return tuple(balance.participant for balance in self.members)

    @property
    def total(self) -> float:
        return sum(balance.amount for balance in self.members)

    def __len__(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class SettlementResult:
    required: Tuple[Transfer, ...] = field(default_factory=tuple)
    below_threshold: Tuple[Transfer, ...] = field(default_factory=tuple)
    groups: Tuple[Group, ...] = field(default_factory=tuple)

    @property
    def transfers(self) -> tuple[Transfer, ...]:
        # Both lists are needed to fully settle; below-threshold ones are only optional in the UI.
        return self.required + self.below_threshold

    @property
    def total_amount(self) -> float:
        return sum(transfer.amount for transfer in self.transfers)

    def as_dict(self) -> dict[str, Any]:
        return {
            "required": [transfer.as_dict() for transfer in self.required],
            "below_threshold": [transfer.as_dict() for transfer in self.below_threshold],
            "groups": len(self.groups),
        }


@dataclass(frozen=True)
class SharedExpense:
    paid_by: str
    amount: float
    participants: Tuple[str, ...]
    description: str = ""

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise DomainValidationError("expense amount must be positive")
        participants = tuple(unique_preserve_order(self.participants))
        if not participants:
            raise DomainValidationError("expense must have at least one participant")
        object.__setattr__(self, "paid_by", normalize_participant(self.paid_by))
        object.__setattr__(self, "participants", participants)


def normalize_participant(name: str) -> str:
    value = name.strip()
    if not value:
        raise DomainValidationError("participant name must be non-empty")
    return value


def unique_preserve_order(participants: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for participant in participants:
        normalized = normalize_participant(participant)
        if normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result
