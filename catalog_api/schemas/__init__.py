from .auth import LoginRequest, Token, TokenData
from .client import ClientCreate
from .common import Envelope, PageMeta
from .product import ProductCreate, ProductListItem, ProductRead, ProductUpdate
from .user import UserCreate, UserListItem, UserRead

__all__ = [
    "LoginRequest", "Token", "TokenData",
    "ClientCreate",
    "Envelope", "PageMeta",
    "ProductCreate", "ProductListItem", "ProductRead", "ProductUpdate",
    "UserCreate", "UserListItem", "UserRead",
]
