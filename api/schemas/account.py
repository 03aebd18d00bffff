# api/schemas/account.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

class AccountCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)

class AccountCreated(BaseModel):
    message: str
    account_id: int

class AccountProfile(BaseModel):
    account_id: int
    username: str
    name: str
    email: str
    created_at: datetime
    issued_books: int
    total_fines: float

    model_config = ConfigDict(from_attributes=True)
