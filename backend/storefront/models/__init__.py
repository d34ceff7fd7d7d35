from storefront.models.product import Product
from storefront.models.user import CartItem, User

__all__ = [
    "CartItem",
    "Product",
    "User",
]
