from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Any | None = None


class SettleRequest(BaseModel):
    balances: dict[str, float] = Field(
        ...,
        description="Net result per participant, positive means the participant receives money",
        examples=[{"alice": 30, "bob": 10, "charlie": -40}],
    )
    min_transfer: float | None = Field(
        default=None,
        ge=0,
        description="Smallest transfer that is still required; defaults to the configured value",
        examples=[5],
    )


class ExpenseItem(BaseModel):
    paid_by: str = Field(..., examples=["alice"])
    amount: float = Field(..., gt=0, examples=[90])
    participants: list[str] = Field(..., min_length=1, examples=[["alice", "bob", "charlie"]])
    description: str = ""

    @model_validator(mode="after")
    def validate_participants(self) -> "ExpenseItem":
        if len(set(self.participants)) != len(self.participants):
            raise ValueError("expense participants must be unique")
        return self


class CombinedSettleRequest(BaseModel):
    profits: dict[str, float] = Field(default_factory=dict, examples=[{"alice": 100, "bob": -100}])
    expenses: list[ExpenseItem] = Field(default_factory=list)
    min_transfer: float | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_not_empty(self) -> "CombinedSettleRequest":
        if not self.profits and not self.expenses:
            raise ValueError("profits or expenses are required")
        return self


class TransferResponse(BaseModel):
    sender: str = Field(..., alias="from")
    recipient: str = Field(..., alias="to")
    amount: float

    model_config = {"populate_by_name": True}


class SettlementResponse(BaseModel):
    required: list[TransferResponse]
    below_threshold: list[TransferResponse]
    groups: int

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "required": [
                        {"from": "charlie", "to": "alice", "amount": 30},
                        {"from": "charlie", "to": "bob", "amount": 10},
                    ],
                    "below_threshold": [],
                    "groups": 1,
                }
            ]
        }
    }


class CombinedSettlementResponse(SettlementResponse):
    balances: dict[str, float]


class SettingsResponse(BaseModel):
    min_transfer: float
    epsilon: float
    max_partition_size: int
    round_digits: int
