from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from poker_ledger.domain import DomainValidationError, UnbalancedInputError


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def settlement_error(exc: DomainValidationError) -> HTTPException:
    if isinstance(exc, UnbalancedInputError):
        return api_error(
            code="unbalanced_input",
            message=str(exc),
            details={"residual": round(exc.residual, 4), "epsilon": exc.epsilon},
        )
    return api_error(code="invalid_settlement_input", message=str(exc))
