"""Cart store: the public surface the rest of the storefront talks to."""
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from storefront.config import (
    CART_NOTIFICATION_TIMEOUT_SECONDS,
    CART_REJECT_INVALID_PRICE,
    CART_SAVE_DEBOUNCE_SECONDS,
    CART_STORAGE_KEY,
)
from storefront.db import RedisKeys
from storefront.errors import ERROR_INVALID_PRICE
from storefront.logging import get_logger, sanitize_id_for_logging

from . import actions
from .models import CartState, LineItem, Notification, NotificationType
from .notifications import NotificationDismisser
from .persistence import CartPersistence
from .reducer import reduce
from .sanitizer import coerce_raw, has_price_defect
from .storage import KeyValueStorage

logger = get_logger(__name__)

Listener = Callable[[CartState, CartState], None]


class CartStore:
    """
    Holds the cart state and routes every change through the reducer.

    The wrappers add no logic of their own (strict price mode aside);
    getters are recomputed from the current state on every call.
    """

    def __init__(
        self,
        state: Optional[CartState] = None,
        reject_invalid_price: bool = CART_REJECT_INVALID_PRICE,
    ):
        self._state = state or CartState.initial()
        self._listeners: list[Listener] = []
        self.reject_invalid_price = reject_invalid_price

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def items(self) -> tuple[LineItem, ...]:
        return self._state.items

    @property
    def notification(self) -> Notification:
        return self._state.notification

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(previous, current)` after every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: actions.Action) -> CartState:
        previous = self._state
        self._state = reduce(previous, action)
        if self._state is not previous:
            for listener in list(self._listeners):
                listener(previous, self._state)
        return self._state

    # Actions

    def add_to_cart(self, product: Any) -> CartState:
        if self.reject_invalid_price and has_price_defect(product):
            product_id = coerce_raw(product).id
            logger.warning(f"Refusing to add item {sanitize_id_for_logging(product_id)} with invalid price")
            return self.show_notification(ERROR_INVALID_PRICE, NotificationType.ERROR.value)
        return self.dispatch(actions.add(product))

    def remove_from_cart(self, line_item_key: str) -> CartState:
        return self.dispatch(actions.remove(line_item_key))

    def update_quantity(self, line_item_key: str, quantity: int) -> CartState:
        return self.dispatch(actions.update_quantity(line_item_key, quantity))

    def update_customization(
        self, line_item_key: str, customization: Optional[Mapping[str, Any]] = None, **fields: Any
    ) -> CartState:
        return self.dispatch(actions.update_customization(line_item_key, customization, **fields))

    def toggle_select(self, line_item_key: str) -> CartState:
        return self.dispatch(actions.toggle_select(line_item_key))

    def select_all(self) -> CartState:
        return self.dispatch(actions.select_all())

    def deselect_all(self) -> CartState:
        return self.dispatch(actions.deselect_all())

    def clear_cart(self) -> CartState:
        return self.dispatch(actions.clear())

    def show_notification(self, message: str, type: str = NotificationType.SUCCESS.value) -> CartState:
        return self.dispatch(actions.show_notification(message, type))

    def hide_notification(self) -> CartState:
        return self.dispatch(actions.hide_notification())

    # Getters

    def get_selected_items(self) -> list[LineItem]:
        return [item for item in self._state.items if item.selected]

    def get_selected_total(self) -> Decimal:
        return sum((item.total_price for item in self.get_selected_items()), Decimal("0"))

    def get_cart_items_count(self) -> int:
        return sum(item.quantity for item in self._state.items)

    def get_cart_total(self) -> Decimal:
        return sum((item.total_price for item in self._state.items), Decimal("0"))


def cart_storage_key(user_id: Optional[str] = None) -> str:
    """Local cart key when signed out, one Redis key per user otherwise."""
    if user_id:
        return RedisKeys.cart_key(user_id)
    return CART_STORAGE_KEY


@dataclass
class CartSession:
    """A hydrated store plus the observers open_cart attached to it."""
    store: CartStore
    persistence: CartPersistence
    dismisser: Optional[NotificationDismisser] = None

    async def close(self) -> None:
        """Write any pending change, then detach every observer."""
        if self.dismisser is not None:
            self.dismisser.close()
        await self.persistence.close()


async def open_cart(
    storage: KeyValueStorage,
    key: str = CART_STORAGE_KEY,
    debounce_seconds: float = CART_SAVE_DEBOUNCE_SECONDS,
    notification_timeout: Optional[float] = CART_NOTIFICATION_TIMEOUT_SECONDS,
    reject_invalid_price: bool = CART_REJECT_INVALID_PRICE,
) -> CartSession:
    """
    Build a store backed by `storage`.

    Hydrates once from `key`, then mirrors every item change back after
    `debounce_seconds`. Must be awaited inside the event loop that will
    drive the store. Call `await session.close()` on shutdown to write any
    pending change and stop the toast timer.
    """
    store = CartStore(reject_invalid_price=reject_invalid_price)
    persistence = CartPersistence(storage, key=key, debounce_seconds=debounce_seconds)

    items = await persistence.hydrate()
    if items:
        store.dispatch(actions.load(items))

    persistence.attach(store)
    dismisser = None
    if notification_timeout is not None:
        dismisser = NotificationDismisser(store, notification_timeout)
        dismisser.attach()

    logger.debug(f"Cart opened with {len(store.items)} items")
    return CartSession(store=store, persistence=persistence, dismisser=dismisser)
