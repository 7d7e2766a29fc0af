"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Optional

from storefront.services.money import multiply

from .keys import line_item_key


class NotificationType(str, Enum):
    """Toast flavours shown by the cart."""
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class LineItem:
    """One cart row: a product with a specific customization and quantity."""
    id: str
    name: str
    price: Decimal
    quantity: int
    line_item_key: str = ""
    selected: bool = True
    image: str = ""
    description: str = ""
    original_price: Decimal = Decimal("0")
    selected_color: str = ""
    selected_size: str = ""
    selected_material: str = ""
    selected_ram: str = ""
    product_id: str = ""
    variant_id: Optional[str] = None
    brand: Optional[str] = None
    seller_id: Optional[str] = None
    seller_name: str = ""
    stock: Optional[int] = None  # None: stock is not tracked for this item

    @property
    def total_price(self) -> Decimal:
        """Price for all units of this row."""
        return multiply(self.price, self.quantity)

    def rekeyed(self, **changes) -> "LineItem":
        """Copy with `changes` applied and the line-item key recomputed."""
        updated = replace(self, **changes)
        return replace(updated, line_item_key=line_item_key(updated))

    def to_dict(self) -> dict:
        """Persisted storage shape (camelCase, prices as strings)."""
        return {
            "id": self.id,
            "lineItemKey": self.line_item_key,
            "productId": self.product_id,
            "name": self.name,
            "price": str(self.price),
            "originalPrice": str(self.original_price),
            "quantity": self.quantity,
            "selected": self.selected,
            "image": self.image,
            "description": self.description,
            "selectedColor": self.selected_color,
            "selectedSize": self.selected_size,
            "selectedMaterial": self.selected_material,
            "selectedRam": self.selected_ram,
            "variantId": self.variant_id,
            "brand": self.brand,
            "sellerId": self.seller_id,
            "sellerName": self.seller_name,
            "stock": self.stock,
        }


@dataclass(frozen=True)
class Notification:
    """Transient toast. Never persisted."""
    show: bool = False
    message: str = ""
    type: NotificationType = NotificationType.SUCCESS

    @classmethod
    def hidden(cls) -> "Notification":
        return cls()


@dataclass(frozen=True)
class CartState:
    """Everything the reducer owns."""
    items: tuple[LineItem, ...] = ()
    notification: Notification = field(default_factory=Notification.hidden)

    @classmethod
    def initial(cls) -> "CartState":
        return cls()

    def find(self, key: str) -> Optional[LineItem]:
        """Row with the given line-item key, if any."""
        return next((item for item in self.items if item.line_item_key == key), None)
