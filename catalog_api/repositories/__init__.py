"""Repositories package."""

from catalog_api.repositories.base import Page, PageParams, paginate
from catalog_api.repositories.client_repository import ClientRepository
from catalog_api.repositories.product_repository import ProductFilter, ProductRepository
from catalog_api.repositories.user_repository import UserFilter, UserRepository

__all__ = [
    "Page",
    "PageParams",
    "paginate",
    "ClientRepository",
    "ProductFilter",
    "ProductRepository",
    "UserFilter",
    "UserRepository",
]
