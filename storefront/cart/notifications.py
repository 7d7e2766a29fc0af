"""Auto-hide for cart toasts."""
import asyncio
from collections.abc import Callable
from typing import Optional

from storefront.config import CART_NOTIFICATION_TIMEOUT_SECONDS

from .models import CartState


class NotificationDismisser:
    """Hides a visible notification after `delay` seconds."""

    def __init__(self, store, delay: float = CART_NOTIFICATION_TIMEOUT_SECONDS):
        self.store = store
        self.delay = delay
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def has_pending_hide(self) -> bool:
        return self._timer is not None

    def attach(self) -> None:
        """Start watching the store. Call from inside the running event loop."""
        if self._unsubscribe is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._unsubscribe = self.store.subscribe(self._on_change)

    def close(self) -> None:
        """Stop watching and drop any scheduled hide. Safe to call twice."""
        self._cancel_timer()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_change(self, previous: CartState, current: CartState) -> None:
        if current.notification == previous.notification:
            return
        self._cancel_timer()
        if current.notification.show:
            self._timer = self._loop.call_later(self.delay, self._dismiss)

    def _dismiss(self) -> None:
        self._timer = None
        self.store.hide_notification()
