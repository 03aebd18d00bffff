# api/routes/accounts.py

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import (
    get_account_service, get_catalog_service, get_circulation_service, get_fine_aggregator
)
from api.errors import raise_for_result
from api.routes.circulation import to_return_response
from api.schemas.account import AccountCreate, AccountCreated, AccountProfile
from api.schemas.circulation import IssuedBook, IssuedBookList, ReturnResponse
from core.exceptions import NotFound
from core.services.accounts import AccountService
from core.services.catalog import CatalogService
from core.services.circulation import CirculationService
from core.services.fines import FineAggregator

router = APIRouter(prefix="/accounts", tags=["accounts"])

@router.post("", response_model=AccountCreated, status_code=status.HTTP_201_CREATED)
def create_account(account: AccountCreate, accounts: AccountService = Depends(get_account_service)):
    result = accounts.register_account(account.username, account.password, account.name, account.email)
    raise_for_result(result)
    return AccountCreated(message=result.message, account_id=result.account_id)

@router.get("/{account_id}/profile", response_model=AccountProfile)
def get_profile(account_id: int, fines: FineAggregator = Depends(get_fine_aggregator)):
    """
    Account details with the number of books held and total fines paid at return.
    """
    try:
        summary = fines.get_account_summary(account_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return AccountProfile.model_validate(summary)

@router.get("/{account_id}/issues", response_model=IssuedBookList)
def get_issued_books(account_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    """
    Loan history of an account, newest first.
    """
    views = catalog.get_issued_books(account_id)
    return IssuedBookList(items=[IssuedBook.model_validate(view) for view in views], total=len(views))

@router.post("/{account_id}/books/{book_id}/return", response_model=ReturnResponse)
def return_book(
    account_id: int,
    book_id: int,
    circulation: CirculationService = Depends(get_circulation_service)
):
    """
    Return the account's copy of a book without knowing the issue ID.
    """
    return to_return_response(circulation.return_book_for_account(account_id, book_id))
