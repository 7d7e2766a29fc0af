"""Cart package: line items, reducer, persistence, and the store facade."""
from .actions import Action, ActionType
from .keys import CUSTOMIZATION_FIELDS, line_item_key
from .models import CartState, LineItem, Notification, NotificationType
from .notifications import NotificationDismisser
from .persistence import CartPersistence
from .reducer import reduce
from .sanitizer import RawProduct, has_price_defect, sanitize_item
from .service import CartSession, CartStore, cart_storage_key, open_cart
from .storage import KeyValueStorage, MemoryStorage, RedisStorage

__all__ = [
    "Action",
    "ActionType",
    "CUSTOMIZATION_FIELDS",
    "CartPersistence",
    "CartSession",
    "CartState",
    "CartStore",
    "KeyValueStorage",
    "LineItem",
    "MemoryStorage",
    "Notification",
    "NotificationDismisser",
    "NotificationType",
    "RawProduct",
    "RedisStorage",
    "cart_storage_key",
    "has_price_defect",
    "line_item_key",
    "open_cart",
    "reduce",
    "sanitize_item",
]
