from fastapi import APIRouter, Depends, Query

from readlog.deps import get_current_user, get_user_book_service
from readlog.models import User
from readlog.schemas.common import Envelope, MessageResponse
from readlog.schemas.user_book import UserBookCreate, UserBookDetail, UserBookResponse, UserBookUpdate
from readlog.services.user_book_service import UserBookService

router = APIRouter(prefix="/userbooks", tags=["userbooks"])


@router.post("", response_model=Envelope[UserBookResponse], status_code=201)
async def create_user_book(
    data: UserBookCreate,
    books: UserBookService = Depends(get_user_book_service),
    actor: User = Depends(get_current_user),
):
    book = await books.create_user_book(data, actor)
    return Envelope(message="User book created successfully", data=UserBookResponse.model_validate(book))


@router.get("", response_model=Envelope[list[UserBookResponse]])
async def list_user_books(
    user_id: int | None = Query(None, description="Only books owned by this user"),
    books: UserBookService = Depends(get_user_book_service),
    actor: User = Depends(get_current_user),
):
    result = await books.list_user_books(user_id)
    return Envelope(message="success", data=[UserBookResponse.model_validate(b) for b in result])


@router.get("/{user_book_id}", response_model=Envelope[UserBookDetail])
async def get_user_book(
    user_book_id: int,
    books: UserBookService = Depends(get_user_book_service),
    actor: User = Depends(get_current_user),
):
    book = await books.get_user_book_detail(user_book_id)
    return Envelope(message="success", data=UserBookDetail.model_validate(book))


@router.put("/{user_book_id}", response_model=Envelope[UserBookResponse])
async def update_user_book(
    user_book_id: int,
    data: UserBookUpdate,
    books: UserBookService = Depends(get_user_book_service),
    actor: User = Depends(get_current_user),
):
    book = await books.update_user_book(user_book_id, data, actor)
    return Envelope(message="User book updated successfully", data=UserBookResponse.model_validate(book))


@router.delete("/{user_book_id}", response_model=MessageResponse)
async def delete_user_book(
    user_book_id: int,
    books: UserBookService = Depends(get_user_book_service),
    actor: User = Depends(get_current_user),
):
    await books.soft_delete_user_book(user_book_id, actor)
    return MessageResponse(message="User book deleted successfully")
