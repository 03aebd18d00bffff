# api/schemas/fine.py
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

class AccountOutstanding(BaseModel):
    account_id: int
    username: str
    name: str
    email: str
    total_fines: float
    pending_books: int
    accrued_fines: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)

class OutstandingReport(BaseModel):
    accounts: List[AccountOutstanding]
    total_fines: float
    total_pending_books: int

    model_config = ConfigDict(from_attributes=True)
