"""Cart configuration read from the environment."""
import os


def _get_float(name: str, default: float) -> float:
    value = os.environ.get(name, "").strip()
    return float(value) if value else default


def _get_int(name: str, default: int) -> int:
    value = os.environ.get(name, "").strip()
    return int(value) if value else default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name, "").strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


# Durable storage key for the local (signed-out) cart
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cartItems")

# Quiet period before the item list is mirrored to storage
CART_SAVE_DEBOUNCE_SECONDS = _get_float("CART_SAVE_DEBOUNCE_SECONDS", 0.05)

# How long a toast stays visible
CART_NOTIFICATION_TIMEOUT_SECONDS = _get_float("CART_NOTIFICATION_TIMEOUT_SECONDS", 2.5)

CART_MIN_QUANTITY = 1
CART_MAX_QUANTITY = _get_int("CART_MAX_QUANTITY", 99)

# Refuse to add items whose catalog price is unusable instead of pricing them at 0
CART_REJECT_INVALID_PRICE = _get_bool("CART_REJECT_INVALID_PRICE", False)

CART_PLACEHOLDER_IMAGE = os.environ.get(
    "CART_PLACEHOLDER_IMAGE", "https://placehold.co/300x300?text=No+Image"
)
CART_PLACEHOLDER_NAME = "Unnamed product"
CART_PLACEHOLDER_DESCRIPTION = "No description available"
CART_UNKNOWN_SELLER = "Unknown Seller"
CART_UNSPECIFIED_ID = "item_unspecified"

WISHLIST_STORAGE_KEY = os.environ.get("WISHLIST_STORAGE_KEY", "wishlist")
