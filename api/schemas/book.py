# api/schemas/book.py
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field

# Required fields and stock counts are validated by CatalogService, which
# reports them as 400 with its own message
class BookBase(BaseModel):
    isbn: str = Field(max_length=20)
    title: str = Field(max_length=500)
    author: str = Field(max_length=255)
    quantity: int

class BookCreate(BookBase):
    pass

class BookUpdate(BookBase):
    available_quantity: int

class Book(BookBase):
    book_id: int
    available_quantity: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class BookList(BaseModel):
    items: List[Book]
    total: int

class BookMessage(BaseModel):
    message: str
    book_id: int
