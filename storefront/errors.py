"""
Common Error Constants

User-facing cart and wishlist messages, kept in one place.
"""

# Cart errors
ERROR_OUT_OF_STOCK = "This product is out of stock"
ERROR_STOCK_LIMIT = "Only {stock} items available in stock"
ERROR_INVALID_PRICE = "This product is temporarily unavailable"

# Storage errors
ERROR_REDIS_NOT_CONFIGURED = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"

# Cart messages
MESSAGE_ADDED_TO_CART = "{name} added to cart!"
