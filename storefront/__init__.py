"""Storefront client state: shopping cart and wishlist."""
