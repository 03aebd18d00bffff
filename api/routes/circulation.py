# api/routes/circulation.py

from fastapi import APIRouter, Depends, status

from api.dependencies import get_catalog_service, get_circulation_service
from api.errors import fine_message, raise_for_result
from api.schemas.circulation import (
    IssueRequest, IssueResponse, IssuedBook, IssuedBookList, ReturnResponse
)
from core.services.catalog import CatalogService
from core.services.circulation import CirculationService
from core.services.results import ReturnResult

router = APIRouter(prefix="/issues", tags=["circulation"])

def to_return_response(result: ReturnResult) -> ReturnResponse:
    raise_for_result(result)
    return ReturnResponse(
        message=result.message,
        fine=float(result.fine),
        days_overdue=result.days_overdue,
        fine_message=fine_message(result.fine, result.days_overdue)
    )

@router.post("", response_model=IssueResponse, status_code=status.HTTP_201_CREATED)
def issue_book(request: IssueRequest, circulation: CirculationService = Depends(get_circulation_service)):
    """
    Lend a copy of a book to an account.

    Returns 409 if no copy is available or the account already holds the book.
    """
    result = circulation.issue_book(request.account_id, request.book_id)
    raise_for_result(result)
    return IssueResponse(message=result.message, issue_id=result.issue_id)

@router.get("", response_model=IssuedBookList)
def get_all_issued_books(catalog: CatalogService = Depends(get_catalog_service)):
    """
    Every loan with its borrower, newest first. Open loans carry a preview of
    the fine they would owe if returned today.
    """
    views = catalog.get_all_issued_books()
    return IssuedBookList(items=[IssuedBook.model_validate(view) for view in views], total=len(views))

@router.post("/{issue_id}/return", response_model=ReturnResponse)
def return_book(issue_id: int, circulation: CirculationService = Depends(get_circulation_service)):
    """
    Close a loan and record any overdue fine.
    """
    return to_return_response(circulation.return_book(issue_id))
