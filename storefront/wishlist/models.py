"""Wishlist models."""
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from storefront.cart.keys import to_camel
from storefront.cart.models import LineItem
from storefront.services.money import non_negative, parse_decimal, to_decimal


class WishlistProduct(BaseModel):
    """Product-like input accepted by the wishlist."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: Any = None
    name: Any = None
    price: Any = None
    final_price: Any = None
    image: Any = None
    original_price: Any = None
    discount: Any = None
    rating: Any = None
    added_at: Any = None


@dataclass(frozen=True)
class WishlistEntry:
    """A saved product."""
    id: str
    name: str
    price: Decimal
    image: Optional[str] = None
    original_price: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    rating: Optional[Decimal] = None
    added_at: str = ""

    @classmethod
    def from_product(cls, product: Any) -> "WishlistEntry":
        """
        Build an entry from a WishlistProduct, any mapping or a cart LineItem.

        Price falls back price -> finalPrice -> 0.
        """
        if isinstance(product, WishlistProduct):
            raw = product
        else:
            if isinstance(product, LineItem):
                product = product.to_dict()
            data = product if isinstance(product, Mapping) else {}
            raw = WishlistProduct.model_validate({k: v for k, v in data.items() if isinstance(k, str)})

        price = parse_decimal(raw.price) or parse_decimal(raw.final_price) or Decimal("0")
        return cls(
            id=str(raw.id) if raw.id is not None else "",
            name=str(raw.name) if raw.name is not None else "",
            price=non_negative(price),
            image=str(raw.image) if raw.image else None,
            original_price=parse_decimal(raw.original_price),
            discount=parse_decimal(raw.discount),
            rating=parse_decimal(raw.rating),
            added_at=str(raw.added_at) if raw.added_at else datetime.now(timezone.utc).isoformat(),
        )

    def to_dict(self) -> dict:
        """Persisted storage shape."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "image": self.image,
            "originalPrice": str(self.original_price) if self.original_price is not None else None,
            "discount": str(self.discount) if self.discount is not None else None,
            "rating": str(self.rating) if self.rating is not None else None,
            "addedAt": self.added_at,
        }

    def to_cart_product(self) -> dict:
        """What the cart needs to add this entry as one unit."""
        return {
            "id": self.id,
            "name": self.name,
            "price": to_decimal(self.price),
            "quantity": 1,
            "image": self.image,
        }
