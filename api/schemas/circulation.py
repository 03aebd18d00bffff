# api/schemas/circulation.py
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

class IssueRequest(BaseModel):
    account_id: int
    book_id: int

class IssueResponse(BaseModel):
    message: str
    issue_id: int

class ReturnResponse(BaseModel):
    message: str
    fine: float
    days_overdue: int
    fine_message: str

class FinePreview(BaseModel):
    days_issued: int
    days_overdue: int
    fine_amount: float
    has_fine: bool

    model_config = ConfigDict(from_attributes=True)

class IssuedBook(BaseModel):
    issue_id: int
    book_id: int
    account_id: int
    issue_date: date
    return_date: Optional[date] = None
    status: str
    fine_amount: float
    title: str
    author: str
    isbn: str
    username: Optional[str] = None
    account_name: Optional[str] = None
    email: Optional[str] = None
    fine_preview: Optional[FinePreview] = None

    model_config = ConfigDict(from_attributes=True)

class IssuedBookList(BaseModel):
    items: List[IssuedBook]
    total: int
