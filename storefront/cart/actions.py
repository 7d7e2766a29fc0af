"""Cart actions and their builders."""
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .models import NotificationType
from .sanitizer import sanitize_item


class ActionType(str, Enum):
    """Everything the cart reducer understands."""
    ADD = "ADD"
    REMOVE = "REMOVE"
    UPDATE_QTY = "UPDATE_QTY"
    UPDATE_CUSTOMIZATION = "UPDATE_CUSTOMIZATION"
    TOGGLE_SELECT = "TOGGLE_SELECT"
    SELECT_ALL = "SELECT_ALL"
    DESELECT_ALL = "DESELECT_ALL"
    CLEAR = "CLEAR"
    LOAD = "LOAD"
    SHOW_NOTIFICATION = "SHOW_NOTIFICATION"
    HIDE_NOTIFICATION = "HIDE_NOTIFICATION"


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None


def add(product: Any) -> Action:
    return Action(ActionType.ADD, sanitize_item(product))


def remove(line_item_key: str) -> Action:
    return Action(ActionType.REMOVE, {"line_item_key": line_item_key})


def update_quantity(line_item_key: str, quantity: int) -> Action:
    return Action(ActionType.UPDATE_QTY, {"line_item_key": line_item_key, "quantity": quantity})


def update_customization(
    line_item_key: str, fields: Optional[Mapping[str, Any]] = None, **custom: Any
) -> Action:
    """Customization may be given as a mapping, as keywords, or both."""
    merged = {**(fields or {}), **custom}
    return Action(ActionType.UPDATE_CUSTOMIZATION, {"line_item_key": line_item_key, "fields": merged})


def toggle_select(line_item_key: str) -> Action:
    return Action(ActionType.TOGGLE_SELECT, {"line_item_key": line_item_key})


def select_all() -> Action:
    return Action(ActionType.SELECT_ALL)


def deselect_all() -> Action:
    return Action(ActionType.DESELECT_ALL)


def clear() -> Action:
    return Action(ActionType.CLEAR)


def load(items: Iterable[Any]) -> Action:
    return Action(ActionType.LOAD, tuple(items))


def show_notification(message: str, type: str = NotificationType.SUCCESS.value) -> Action:
    return Action(ActionType.SHOW_NOTIFICATION, {"message": message, "type": type})


def hide_notification() -> Action:
    return Action(ActionType.HIDE_NOTIFICATION)
