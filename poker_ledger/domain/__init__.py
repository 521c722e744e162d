from .aggregation import (
    aggregate_balances,
    expense_ledger,
    ledger_entries,
    profit_ledger,
    quantize_balances,
    to_units,
)
from .models import (
    Balance,
    DomainValidationError,
    Group,
    SettlementResult,
    SettlementSettings,
    SharedExpense,
    Transfer,
    UnbalancedInputError,
    normalize_participant,
    unique_preserve_order,
)
from .partition import partition_zero_sum
from .settlement import (
    classify_transfers,
    ensure_balanced,
    net_balances,
    reconcile,
    settle,
    settle_expenses,
    settle_group,
    settle_ledgers,
)

__all__ = [
    "Balance",
    "DomainValidationError",
    "Group",
    "SettlementResult",
    "SettlementSettings",
    "SharedExpense",
    "Transfer",
    "UnbalancedInputError",
    "aggregate_balances",
    "classify_transfers",
    "ensure_balanced",
    "expense_ledger",
    "ledger_entries",
    "net_balances",
    "normalize_participant",
    "partition_zero_sum",
    "profit_ledger",
    "quantize_balances",
    "reconcile",
    "settle",
    "settle_expenses",
    "settle_group",
    "settle_ledgers",
    "to_units",
    "unique_preserve_order",
]
