from .client import Client
from .product import Product
from .user import User

__all__ = [
    "Client",
    "Product",
    "User",
]
