from __future__ import annotations

from fastapi import FastAPI

from poker_ledger.api.settlements import router as settlements_router

app = FastAPI(title="Poker Ledger Settlement API")
app.include_router(settlements_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
