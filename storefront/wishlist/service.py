"""Wishlist backed by the same key-value storage as the cart."""
import json
from typing import Any, Optional

from storefront.cart.models import NotificationType
from storefront.cart.storage import KeyValueStorage
from storefront.config import WISHLIST_STORAGE_KEY
from storefront.db import RedisKeys
from storefront.errors import MESSAGE_ADDED_TO_CART
from storefront.logging import get_logger, sanitize_id_for_logging

from .models import WishlistEntry

logger = get_logger(__name__)


class Wishlist:
    """
    Saved products, one entry per product id.

    Unlike the cart, every change is written to storage immediately.
    """

    def __init__(self, storage: KeyValueStorage, key: str = WISHLIST_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._entries: list[WishlistEntry] = []

    @property
    def entries(self) -> tuple[WishlistEntry, ...]:
        return tuple(self._entries)

    async def load(self) -> tuple[WishlistEntry, ...]:
        """Read the stored wishlist, dropping it if corrupted."""
        data = await self.storage.get(self.key)
        if data is None:
            self._entries = []
            return self.entries

        try:
            saved = json.loads(data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Corrupted wishlist data under {self.key}: {e}")
            saved = None

        if not isinstance(saved, list):
            if saved is not None:
                logger.warning(f"Corrupted wishlist data under {self.key}: expected a list")
            await self.storage.delete(self.key)
            self._entries = []
            return self.entries

        entries: dict[str, WishlistEntry] = {}
        for raw in saved:
            if isinstance(raw, dict):
                entry = WishlistEntry.from_product(raw)
                if entry.id:
                    entries.setdefault(entry.id, entry)
        self._entries = list(entries.values())
        return self.entries

    async def _save(self, entries: list[WishlistEntry]) -> None:
        """Write entries, then adopt them. A failed write leaves the wishlist as it was."""
        await self.storage.set(self.key, json.dumps([entry.to_dict() for entry in entries]))
        self._entries = entries

    async def toggle(self, product: Any) -> bool:
        """Add the product if absent, remove it if present. Returns whether it is now saved."""
        entry = WishlistEntry.from_product(product)
        if not entry.id:
            logger.warning("Ignoring wishlist toggle for a product without id")
            return False

        if self.contains(entry.id):
            updated = [saved for saved in self._entries if saved.id != entry.id]
            saved_now = False
        else:
            updated = [*self._entries, entry]
            saved_now = True

        await self._save(updated)
        logger.debug(f"Wishlist toggle {sanitize_id_for_logging(entry.id)}: saved={saved_now}")
        return saved_now

    def contains(self, product_id: str) -> bool:
        return any(entry.id == product_id for entry in self._entries)

    def get(self, product_id: str) -> Optional[WishlistEntry]:
        return next((entry for entry in self._entries if entry.id == product_id), None)

    def count(self) -> int:
        return len(self._entries)

    async def clear(self) -> None:
        await self._save([])

    def move_to_cart(self, product_id: str, store) -> bool:
        """
        Add one unit of a saved product to the cart; the entry stays saved.

        Returns False when the product is not saved or the cart refused it.
        """
        entry = self.get(product_id)
        if entry is None:
            return False
        before = store.notification
        state = store.add_to_cart(entry.to_cart_product())
        if state.notification != before and state.notification.type == NotificationType.ERROR:
            return False
        store.show_notification(MESSAGE_ADDED_TO_CART.format(name=entry.name))
        return True


def wishlist_storage_key(user_id: Optional[str] = None) -> str:
    if user_id:
        return RedisKeys.wishlist_key(user_id)
    return WISHLIST_STORAGE_KEY
