"""
Cart Reducer - pure state transitions over the cart.

reduce(state, action) never touches storage and never raises: actions that
name a missing row, carry a malformed payload or have an unknown type
return the state unchanged. The one invariant every transition keeps is
that line_item_key is unique across state.items.
"""
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from decimal import Decimal
from typing import Any, Optional

from storefront.errors import ERROR_OUT_OF_STOCK, ERROR_STOCK_LIMIT
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from storefront.services.money import parse_decimal

from .actions import Action, ActionType
from .keys import CUSTOMIZATION_FIELDS, to_camel
from .models import CartState, LineItem, Notification, NotificationType
from .sanitizer import sanitize_item

Handler = Callable[[CartState, Any], CartState]

logger = get_logger(__name__)

# Floats and Decimals with magnitude 10**MAX_QUANTITY_DIGITS or more are not quantities
MAX_QUANTITY_DIGITS = 18


def _payload_key(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, Mapping):
        key = payload.get("line_item_key", payload.get("lineItemKey"))
        return key if isinstance(key, str) else None
    return None


def _notify(state: CartState, message: str, kind: NotificationType) -> CartState:
    return replace(state, notification=Notification(show=True, message=message, type=kind))


def _add(state: CartState, payload: Any) -> CartState:
    new_item = payload if isinstance(payload, LineItem) else sanitize_item(payload)
    key = new_item.line_item_key
    existing = state.find(key)

    if existing is not None:
        # Fresh catalog stock wins over what was stored with the row
        limit = new_item.stock if new_item.stock is not None else existing.stock
        quantity = existing.quantity + new_item.quantity
        if limit is not None:
            if existing.quantity >= limit:
                return _notify(state, ERROR_STOCK_LIMIT.format(stock=limit), NotificationType.ERROR)
            quantity = min(quantity, limit)
        return replace(
            state,
            items=tuple(
                replace(item, quantity=quantity, stock=limit) if item.line_item_key == key else item
                for item in state.items
            ),
        )

    if new_item.stock is not None:
        if new_item.stock <= 0:
            return _notify(state, ERROR_OUT_OF_STOCK, NotificationType.ERROR)
        new_item = replace(new_item, quantity=min(new_item.quantity, new_item.stock))

    return replace(state, items=state.items + (replace(new_item, selected=True),))


def _remove(state: CartState, payload: Any) -> CartState:
    key = _payload_key(payload)
    if state.find(key) is None:
        return state
    return replace(state, items=tuple(item for item in state.items if item.line_item_key != key))


def _whole_quantity(value: Any) -> Optional[int]:
    """int as is; 3.0 or Decimal('4') as int; anything else (str, bool, 2.5) None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, (float, Decimal)):
        return None
    parsed = parse_decimal(value)
    if parsed is None or parsed.adjusted() >= MAX_QUANTITY_DIGITS:
        return None
    if parsed != parsed.to_integral_value():
        return None
    return int(parsed)


def _update_quantity(state: CartState, payload: Any) -> CartState:
    # No [1, 99] clamp here, unlike the sanitizer on ADD
    key = _payload_key(payload)
    if not isinstance(payload, Mapping) or state.find(key) is None:
        return state
    quantity = _whole_quantity(payload.get("quantity"))
    if quantity is None:
        logger.warning(
            f"Ignoring quantity update for {sanitize_id_for_logging(key)}: "
            f"{sanitize_string_for_logging(payload.get('quantity'))} is not a whole number"
        )
        return state
    if quantity <= 0:
        return _remove(state, key)
    return replace(
        state,
        items=tuple(
            replace(item, quantity=quantity) if item.line_item_key == key else item
            for item in state.items
        ),
    )


def _customization_changes(fields: Any) -> dict[str, str]:
    if not isinstance(fields, Mapping):
        return {}
    changes = {}
    for name in CUSTOMIZATION_FIELDS:
        for candidate in (name, to_camel(name)):
            if candidate in fields:
                value = fields[candidate]
                changes[name] = "" if value is None else str(value).strip()
    return changes


def _update_customization(state: CartState, payload: Any) -> CartState:
    old_key = _payload_key(payload)
    item = state.find(old_key)
    if item is None:
        return state

    fields = payload.get("fields") if isinstance(payload, Mapping) else None
    updated = item.rekeyed(**_customization_changes(fields))
    new_key = updated.line_item_key

    target = None
    if new_key != old_key:
        target = state.find(new_key)

    if target is not None:
        # The new customization already has its own row: fold this one into it
        return replace(
            state,
            items=tuple(
                replace(row, quantity=row.quantity + updated.quantity) if row.line_item_key == new_key else row
                for row in state.items
                if row.line_item_key != old_key
            ),
        )

    return replace(
        state,
        items=tuple(updated if row.line_item_key == old_key else row for row in state.items),
    )


def _toggle_select(state: CartState, payload: Any) -> CartState:
    key = _payload_key(payload)
    if state.find(key) is None:
        return state
    return replace(
        state,
        items=tuple(
            replace(item, selected=not item.selected) if item.line_item_key == key else item
            for item in state.items
        ),
    )


def _set_all_selected(selected: bool) -> Handler:
    def handler(state: CartState, payload: Any) -> CartState:
        return replace(state, items=tuple(replace(item, selected=selected) for item in state.items))
    return handler


def _clear(state: CartState, payload: Any) -> CartState:
    return replace(state, items=())


def _load(state: CartState, payload: Any) -> CartState:
    if isinstance(payload, (str, bytes, Mapping)) or not isinstance(payload, Iterable):
        return state

    rows: dict[str, LineItem] = {}
    for entry in payload:
        item = entry if isinstance(entry, LineItem) else sanitize_item(entry)
        item = item.rekeyed()
        existing = rows.get(item.line_item_key)
        if existing is not None:
            # Stored data written by an older build may repeat a key
            item = replace(existing, quantity=existing.quantity + item.quantity)
        rows[item.line_item_key] = item
    return replace(state, items=tuple(rows.values()))


def _show_notification(state: CartState, payload: Any) -> CartState:
    if not isinstance(payload, Mapping):
        return state
    raw_type = payload.get("type")
    kind = NotificationType.SUCCESS
    if isinstance(raw_type, str) and raw_type in {member.value for member in NotificationType}:
        kind = NotificationType(raw_type)
    return _notify(state, str(payload.get("message") or ""), kind)


def _hide_notification(state: CartState, payload: Any) -> CartState:
    return replace(state, notification=Notification.hidden())


_HANDLERS: dict[str, Handler] = {
    ActionType.ADD: _add,
    ActionType.REMOVE: _remove,
    ActionType.UPDATE_QTY: _update_quantity,
    ActionType.UPDATE_CUSTOMIZATION: _update_customization,
    ActionType.TOGGLE_SELECT: _toggle_select,
    ActionType.SELECT_ALL: _set_all_selected(True),
    ActionType.DESELECT_ALL: _set_all_selected(False),
    ActionType.CLEAR: _clear,
    ActionType.LOAD: _load,
    ActionType.SHOW_NOTIFICATION: _show_notification,
    ActionType.HIDE_NOTIFICATION: _hide_notification,
}


def reduce(state: CartState, action: Action) -> CartState:
    """Apply one action. Unknown action types leave the state untouched."""
    handler = _HANDLERS.get(getattr(action, "type", None))
    if handler is None:
        return state
    return handler(state, action.payload)
