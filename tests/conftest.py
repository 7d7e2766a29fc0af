"""Pytest configuration and fixtures"""
import os

import pytest

# Keep tests independent of the developer's environment
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.pop("CART_REJECT_INVALID_PRICE", None)

from storefront.cart import CartStore, MemoryStorage  # noqa: E402


@pytest.fixture
def memory_storage():
    """Empty in-process storage"""
    return MemoryStorage()


@pytest.fixture
def store():
    """Empty cart store with default settings"""
    return CartStore(reject_invalid_price=False)


@pytest.fixture
def sample_product():
    """Catalog product as the storefront pages pass it to the cart"""
    return {
        "id": "prod-123",
        "name": "Wireless Mouse",
        "description": "2.4GHz, 1600 DPI",
        "price": 499,
        "originalPrice": 799,
        "image": "https://cdn.example.com/mouse.jpg",
        "brand": "Logi",
        "quantity": 1,
        "seller": {"uid": "seller-1", "displayName": "Gadget Hub"},
        "rating": 4.5,
        "category": "electronics",
    }


@pytest.fixture
def phone_product():
    """Product with RAM/color customization"""
    return {
        "id": "phone-1",
        "name": "Phone X",
        "price": "15999.50",
        "selectedColor": "Black",
        "selectedRam": "8GB",
        "quantity": 1,
    }
