"""
Cart Sanitizer - the boundary between loosely-typed product data and LineItem.

Product-like dicts reach the cart from the catalog, the wishlist, buy-now
links and hydrated storage, each with its own shape. Everything passes
through sanitize_item(), which always returns a valid LineItem: bad values
are defaulted and logged, never raised.
"""
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.config import (
    CART_MAX_QUANTITY,
    CART_MIN_QUANTITY,
    CART_PLACEHOLDER_DESCRIPTION,
    CART_PLACEHOLDER_IMAGE,
    CART_PLACEHOLDER_NAME,
    CART_UNKNOWN_SELLER,
    CART_UNSPECIFIED_ID,
)
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from storefront.services.money import ZERO, non_negative, parse_decimal

from .keys import to_camel
from .models import LineItem

logger = get_logger(__name__)

# Largest stock figure kept; anything above is treated as this many units
STOCK_CEILING = Decimal(1_000_000_000)


class RawProduct(BaseModel):
    """Any product-like input. Every field optional, unknown fields ignored."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: Any = None
    mongo_id: Any = Field(default=None, alias="_id")
    product_id: Any = None
    name: Any = None
    price: Any = None
    original_price: Any = None
    quantity: Any = None
    selected: Any = None
    image: Any = None
    description: Any = None
    stock: Any = None
    variant_id: Any = None
    brand: Any = None
    seller_id: Any = None
    seller_name: Any = None
    seller: Any = None
    selected_color: Any = None
    selected_size: Any = None
    selected_material: Any = None
    selected_ram: Any = None


def coerce_raw(raw: Any) -> RawProduct:
    """Turn whatever a caller passed into a RawProduct."""
    if isinstance(raw, RawProduct):
        return raw
    if isinstance(raw, LineItem):
        raw = raw.to_dict()
    elif raw is None:
        raw = {}
    elif not isinstance(raw, Mapping):
        raw = vars(raw) if hasattr(raw, "__dict__") else {}
    data = {key: value for key, value in raw.items() if isinstance(key, str)}
    return RawProduct.model_validate(data)


def _text(value: Any) -> str:
    """Stringify scalars; containers and None become ""."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    return str(value).strip()


def _seller_field(seller: Any, name: str) -> str:
    if isinstance(seller, Mapping):
        return _text(seller.get(name))
    return ""


def has_price_defect(raw: Any) -> bool:
    """True when a price was supplied but cannot be read as a number."""
    product = coerce_raw(raw)
    return product.price is not None and parse_decimal(product.price) is None


def _sanitize_quantity(value: Any) -> int:
    parsed = parse_decimal(value)
    if parsed is None:
        return CART_MIN_QUANTITY
    # Bound while still a Decimal: int() of "1e50000000" would build a huge int
    bounded = max(Decimal(CART_MIN_QUANTITY), min(Decimal(CART_MAX_QUANTITY), parsed))
    return int(bounded)


def _sanitize_stock(value: Any) -> Optional[int]:
    parsed = parse_decimal(value)
    if parsed is None:
        return None
    return int(max(ZERO, min(STOCK_CEILING, parsed)))


def sanitize_item(raw: Any) -> LineItem:
    """
    Normalize any product-like input into a LineItem.

    Guarantees price >= 0, 1 <= quantity <= CART_MAX_QUANTITY, placeholder
    text instead of missing name/image/description, and a computed
    line_item_key. A present-but-unreadable price is logged as a catalog
    defect and replaced by 0.
    """
    product = coerce_raw(raw)

    item_id = _text(product.id) or _text(product.mongo_id) or CART_UNSPECIFIED_ID

    parsed_price = parse_decimal(product.price)
    if product.price is not None and parsed_price is None:
        logger.warning(
            f"Invalid catalog price {sanitize_string_for_logging(product.price)} "
            f"for item {sanitize_id_for_logging(item_id)}, defaulting to 0"
        )
    price = non_negative(parsed_price)

    parsed_original = parse_decimal(product.original_price)
    original_price = non_negative(parsed_original) if parsed_original is not None else price

    item = LineItem(
        id=item_id,
        product_id=_text(product.product_id) or item_id,
        name=_text(product.name) or CART_PLACEHOLDER_NAME,
        price=price,
        original_price=original_price,
        quantity=_sanitize_quantity(product.quantity),
        selected=product.selected is not False,
        image=_text(product.image) or CART_PLACEHOLDER_IMAGE,
        description=_text(product.description) or CART_PLACEHOLDER_DESCRIPTION,
        selected_color=_text(product.selected_color),
        selected_size=_text(product.selected_size),
        selected_material=_text(product.selected_material),
        selected_ram=_text(product.selected_ram),
        variant_id=_text(product.variant_id) or None,
        brand=_text(product.brand) or None,
        seller_id=_text(product.seller_id) or _seller_field(product.seller, "uid") or None,
        seller_name=(
            _text(product.seller_name)
            or _seller_field(product.seller, "displayName")
            or CART_UNKNOWN_SELLER
        ),
        stock=_sanitize_stock(product.stock),
    )
    return item.rekeyed()
