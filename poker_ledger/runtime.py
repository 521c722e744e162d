from __future__ import annotations

from poker_ledger.config import load_settings

settings = load_settings()
