# api/errors.py
from decimal import Decimal

from fastapi import HTTPException, status

from core.config import settings
from core.services.results import OperationResult

# Failure code -> HTTP status
STATUS_BY_CODE = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "not_available": status.HTTP_409_CONFLICT,
    "already_issued": status.HTTP_409_CONFLICT,
    "already_returned": status.HTTP_409_CONFLICT,
    "validation_failed": status.HTTP_400_BAD_REQUEST,
    "transaction_failed": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def raise_for_result(result: OperationResult) -> None:
    """Turn a failed service result into an HTTPException"""
    if result.success:
        return
    status_code = STATUS_BY_CODE.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(status_code=status_code, detail=result.message)


def fine_message(fine: Decimal, days_overdue: int) -> str:
    """Human readable fine line shown after a return"""
    if fine > 0:
        return f"Fine of {settings.currency_symbol}{fine:.2f} applied for {days_overdue} days overdue"
    return "No fine applied"
