"""Line-item identity: product id plus the chosen customization."""
from collections.abc import Mapping
from typing import Any

# Order matters: it is the order the parts appear in the key.
CUSTOMIZATION_FIELDS: tuple[str, ...] = (
    "selected_color",
    "selected_size",
    "selected_material",
    "selected_ram",
)

KEY_SEPARATOR = "_"


def to_camel(name: str) -> str:
    """selected_color -> selectedColor"""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def read_field(item: Any, name: str) -> Any:
    """Read a snake_case field from a mapping (snake or camelCase keys) or an object."""
    if isinstance(item, Mapping):
        if name in item:
            return item[name]
        return item.get(to_camel(name))
    return getattr(item, name, None)


def line_item_key(item: Any) -> str:
    """
    Build the identity of a cart row.

    "<id>_<color>_<size>_<material>_<ram>" with empty parts left out
    entirely, so a product without customization is keyed by its id alone.
    """
    product_id = read_field(item, "id")
    parts = [str(product_id) if product_id not in (None, "") else ""]
    for field_name in CUSTOMIZATION_FIELDS:
        value = read_field(item, field_name)
        if value:
            parts.append(str(value))
    return KEY_SEPARATOR.join(parts)
