# api/schemas/wishlist.py
from datetime import datetime
from typing import Optional, List
from .common import CamelModel, PaginationMeta
from .book import WishlistBookSummary


class WishlistItemSchema(CamelModel):
    id: str
    user_id: str
    book_id: str
    priority: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WishlistItemWithBook(WishlistItemSchema):
    book: Optional[WishlistBookSummary] = None


class WishlistItemResponse(CamelModel):
    wishlist_item: WishlistItemSchema
    message: str


class WishlistList(CamelModel):
    wishlist: List[WishlistItemWithBook]
    pagination: PaginationMeta
