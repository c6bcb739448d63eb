"""
Product Endpoints Module

Read-only access to the shared phone catalog. Any authenticated client may
browse every product.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlmodel import Session

from catalog_api.api import deps
from catalog_api.api.links import cached_json, envelope, resource_url
from catalog_api.core.config import settings
from catalog_api.core.errors import NotFound
from catalog_api.db.session import get_db
from catalog_api.models.client import Client
from catalog_api.models.product import Product
from catalog_api.repositories.base import PageParams
from catalog_api.repositories.product_repository import ProductFilter, ProductRepository
from catalog_api.schemas.product import ProductListItem, ProductRead

router = APIRouter()


def _product_url(request: Request, product: Product) -> str:
    return resource_url(request, f"{settings.API_PREFIX}/products/{product.id}")


@router.get("")
def list_products(
    request: Request,
    page: Optional[int] = Query(default=None, description="Page number, starting at 1"),
    limit: Optional[int] = Query(default=None, description="Items per page (1-100)"),
    brand: Optional[str] = Query(default=None, description="Brand substring filter"),
    db: Session = Depends(get_db),
    current_client: Client = Depends(deps.get_current_client),
):
    """
    Retrieve a page of products, newest first.

    Args:
        page: Page number (defaults to 1, values below 1 count as 1)
        limit: Page size (defaults to 20, clamped to 1..100)
        brand: Case-insensitive substring matched literally against the brand

    Returns:
        Paginated envelope with data, meta and _links
    """
    params = PageParams.from_query(page, limit, default_limit=settings.PRODUCT_PAGE_SIZE)
    result = ProductRepository(db).list(ProductFilter(brand=brand), params)

    data = [
        {
            **ProductListItem.model_validate(product).model_dump(mode="json", by_alias=True),
            "_links": {"self": _product_url(request, product)},
        }
        for product in result.items
    ]
    content = envelope(request, result, data, {"brand": brand})
    return cached_json(content, settings.PRODUCT_LIST_MAX_AGE)


@router.get("/{product_id:int}")
def read_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_client: Client = Depends(deps.get_current_client),
):
    """
    Get a single product with its description and specifications.

    Raises:
        NotFound: No product has this id
    """
    product = ProductRepository(db).get(product_id)
    if product is None:
        raise NotFound("Product not found")

    content = {
        **ProductRead.model_validate(product).model_dump(mode="json", by_alias=True),
        "_links": {
            "self": _product_url(request, product),
            "list": resource_url(request, f"{settings.API_PREFIX}/products"),
        },
    }
    return cached_json(content, settings.PRODUCT_SHOW_MAX_AGE)
