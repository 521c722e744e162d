from __future__ import annotations

import os
from collections.abc import Mapping

from poker_ledger.domain import DomainValidationError, SettlementSettings


class ConfigError(ValueError):
    """Raised when settlement settings in the environment are invalid."""


def load_settings(environ: Mapping[str, str] | None = None) -> SettlementSettings:
    env = os.environ if environ is None else environ

    min_transfer = _read(env, "SETTLEMENT_MIN_TRANSFER", "5", float)
    epsilon = _read(env, "SETTLEMENT_EPSILON", "0.01", float)
    max_partition_size = _read(env, "SETTLEMENT_MAX_PARTITION_SIZE", "15", int)
    round_digits = _read(env, "SETTLEMENT_ROUND_DIGITS", "2", int)

    try:
        return SettlementSettings(
            min_transfer=min_transfer,
            epsilon=epsilon,
            max_partition_size=max_partition_size,
            round_digits=round_digits,
        )
    except DomainValidationError as exc:
        raise ConfigError(f"invalid settlement settings: {exc}") from exc


def _read(env: Mapping[str, str], name: str, default: str, cast: type) -> float | int:
    raw = env.get(name, default)
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a valid {cast.__name__}, got {raw!r}") from exc
