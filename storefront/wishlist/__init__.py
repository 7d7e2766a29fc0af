"""Wishlist package."""
from .models import WishlistEntry, WishlistProduct
from .service import Wishlist, wishlist_storage_key

__all__ = ["Wishlist", "WishlistEntry", "WishlistProduct", "wishlist_storage_key"]
