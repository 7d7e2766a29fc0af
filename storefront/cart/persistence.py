"""
Cart Persistence - mirrors cart items to durable storage.

Reads the stored cart once at startup and writes the item list back after
a short quiet period following each change. Writes are debounced: a burst
of changes inside one window produces a single write of the latest list.
A process that exits inside the window loses that last change unless
flush() is awaited first.
"""
import asyncio
import json
from collections.abc import Callable
from typing import Optional

from storefront.config import CART_SAVE_DEBOUNCE_SECONDS, CART_STORAGE_KEY
from storefront.logging import get_logger

from .models import CartState, LineItem
from .sanitizer import sanitize_item
from .storage import KeyValueStorage

logger = get_logger(__name__)


def serialize_items(items) -> str:
    """JSON array in the persisted LineItem shape."""
    return json.dumps([item.to_dict() for item in items])


class CartPersistence:
    """Debounced observer that writes the cart's item list to storage."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = CART_STORAGE_KEY,
        debounce_seconds: float = CART_SAVE_DEBOUNCE_SECONDS,
    ):
        self.storage = storage
        self.key = key
        self.debounce_seconds = debounce_seconds
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._pending: Optional[tuple[LineItem, ...]] = None
        self._writes: set[asyncio.Task] = set()
        self._unsubscribe: Optional[Callable[[], None]] = None

    async def hydrate(self) -> list[LineItem]:
        """
        Read the stored cart.

        Corrupted data (bad JSON or anything but an array) is dropped and
        removed from storage so the next start does not trip on it again.
        """
        data = await self.storage.get(self.key)
        if data is None:
            return []

        try:
            saved = json.loads(data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Corrupted cart data under {self.key}: {e}")
            await self.storage.delete(self.key)
            return []

        if not isinstance(saved, list):
            logger.warning(f"Corrupted cart data under {self.key}: expected a list, got {type(saved).__name__}")
            await self.storage.delete(self.key)
            return []

        # Re-validate: the stored shape may predate the current LineItem
        items = [sanitize_item(entry) for entry in saved]
        logger.debug(f"Hydrated {len(items)} cart items from {self.key}")
        return items

    def attach(self, store) -> None:
        """Start observing `store`. Call from inside the running event loop."""
        self._loop = asyncio.get_running_loop()
        self._unsubscribe = store.subscribe(self._on_change)

    def _on_change(self, previous: CartState, current: CartState) -> None:
        if current.items == previous.items:
            return
        self._pending = current.items
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self._loop.call_later(self.debounce_seconds, self._start_write)

    def _start_write(self) -> None:
        self._timer = None
        items, self._pending = self._pending, None
        if items is None:
            return
        task = self._loop.create_task(self._write(items))
        self._writes.add(task)
        task.add_done_callback(self._writes.discard)

    async def _write(self, items: tuple[LineItem, ...]) -> None:
        try:
            await self.storage.set(self.key, serialize_items(items))
        except Exception as e:
            # Nobody awaits this write; the cart keeps working from memory
            logger.error(f"Failed to save cart under {self.key}: {e}", exc_info=True)

    @property
    def has_pending_write(self) -> bool:
        return self._timer is not None or bool(self._writes)

    async def flush(self) -> None:
        """Write any pending change now and wait for in-flight writes."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        # Older writes first so they cannot land on top of the newest list
        if self._writes:
            await asyncio.gather(*list(self._writes))
        items, self._pending = self._pending, None
        if items is not None:
            await self._write(items)

    async def close(self) -> None:
        """Flush and stop observing the store."""
        await self.flush()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
