# api/routes/fines.py

from datetime import date
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_clock, get_fine_aggregator, get_fine_policy
from api.schemas.circulation import FinePreview
from api.schemas.fine import OutstandingReport
from core.services.fine_policy import FinePolicy
from core.services.fines import FineAggregator

router = APIRouter(prefix="/fines", tags=["fines"])

@router.get("", response_model=OutstandingReport)
def get_outstanding(
    live_preview: bool = Query(False, description="Also report fines accrued on open loans"),
    fines: FineAggregator = Depends(get_fine_aggregator)
):
    """
    Accounts that owe fines or still hold books, highest fines first.
    """
    report = fines.list_accounts_with_outstanding(live_preview=live_preview)
    if not report.success:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=report.message)
    return OutstandingReport.model_validate(report)

@router.get("/preview", response_model=FinePreview)
def preview_fine(
    issue_date: date = Query(..., description="Date the book was issued"),
    return_date: Optional[date] = Query(None, description="Defaults to today"),
    policy: FinePolicy = Depends(get_fine_policy),
    clock: Callable[[], date] = Depends(get_clock)
):
    """
    What a loan issued on ``issue_date`` owes if returned on ``return_date``.
    """
    return FinePreview.model_validate(policy.compute(issue_date, return_date or clock()))
