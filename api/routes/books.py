# api/routes/books.py

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_catalog_service
from api.errors import raise_for_result
from api.schemas.book import Book, BookCreate, BookList, BookMessage, BookUpdate
from core.services.catalog import CatalogService

router = APIRouter(prefix="/books", tags=["books"])

@router.get("", response_model=BookList)
def get_books(catalog: CatalogService = Depends(get_catalog_service)):
    """
    Get every book in the catalog, ordered by title.
    """
    books = catalog.get_all_books()
    return BookList(items=[Book.model_validate(book) for book in books], total=len(books))

@router.get("/available", response_model=BookList)
def get_available_books(catalog: CatalogService = Depends(get_catalog_service)):
    """
    Get books with at least one copy on the shelf.
    """
    books = catalog.get_available_books()
    return BookList(items=[Book.model_validate(book) for book in books], total=len(books))

@router.get("/{book_id}", response_model=Book)
def get_book(book_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    book = catalog.get_book_by_id(book_id)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return Book.model_validate(book)

@router.post("", response_model=BookMessage, status_code=status.HTTP_201_CREATED)
def add_book(book: BookCreate, catalog: CatalogService = Depends(get_catalog_service)):
    """
    Add a book; every copy starts on the shelf.

    Returns 400 if the ISBN is already in the catalog.
    """
    result = catalog.add_book(book.isbn, book.title, book.author, book.quantity)
    raise_for_result(result)
    return BookMessage(message=result.message, book_id=result.book_id)

@router.put("/{book_id}", response_model=BookMessage)
def edit_book(book_id: int, book: BookUpdate, catalog: CatalogService = Depends(get_catalog_service)):
    """
    Overwrite a book's details and stock counts.

    The available quantity can never exceed the total quantity, nor the
    number of copies that are not currently on loan.
    """
    result = catalog.edit_book(
        book_id, book.isbn, book.title, book.author, book.quantity, book.available_quantity
    )
    raise_for_result(result)
    return BookMessage(message=result.message, book_id=book_id)
