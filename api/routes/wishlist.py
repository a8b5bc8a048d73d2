# api/routes/wishlist.py

from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_current_user
from api.schemas.common import PaginationMeta, MessageResponse
from api.schemas.requests import AddWishlistRequest, UpdateWishlistRequest, Pagination
from api.schemas.wishlist import WishlistItemSchema, WishlistItemWithBook, WishlistItemResponse, WishlistList
from api.validation import validate
from core.sa.models import User
from core.services.wishlist import WishlistLedger

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@router.get("", response_model=WishlistList)
def get_wishlist(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get the user's wishlist, highest priority first."""
    pagination = validate(Pagination, request.query_params).unwrap()
    page = WishlistLedger(db).list(user.id, page=pagination.page, limit=pagination.limit)
    return WishlistList(
        wishlist=[WishlistItemWithBook.model_validate(entry) for entry in page.items],
        pagination=PaginationMeta.from_page(page),
    )


@router.post("", response_model=WishlistItemResponse)
def add_to_wishlist(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Add a stored book to the wishlist. Body: {bookId, priority?, notes?}."""
    data = validate(AddWishlistRequest, payload).unwrap()
    entry = WishlistLedger(db).add(user.id, data.book_id, priority=data.priority, notes=data.notes)
    return WishlistItemResponse(
        wishlist_item=WishlistItemSchema.model_validate(entry),
        message="Book added to wishlist successfully",
    )


@router.delete("/{book_id}", response_model=MessageResponse)
def remove_from_wishlist(
    book_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    WishlistLedger(db).remove(user.id, book_id)
    return MessageResponse(message="Book removed from wishlist successfully")


@router.patch("/{book_id}", response_model=WishlistItemResponse)
def update_wishlist_item(
    book_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Change the priority and/or notes of a wishlist entry."""
    data = validate(UpdateWishlistRequest, payload).unwrap()
    entry = WishlistLedger(db).update(user.id, book_id, priority=data.priority, notes=data.notes)
    return WishlistItemResponse(
        wishlist_item=WishlistItemSchema.model_validate(entry),
        message="Wishlist item updated successfully",
    )
