"""Repository for catalog product queries and writes."""
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, col, select

from catalog_api.models.product import Product
from catalog_api.repositories.base import Page, PageParams, contains, paginate
from catalog_api.schemas.product import ProductCreate, ProductUpdate

NULLABLE_FIELDS = {"description"}


@dataclass(frozen=True)
class ProductFilter:
    """Optional brand substring; empty means every product."""
    brand: Optional[str] = None

    def clauses(self) -> List[ColumnElement]:
        if self.brand:
            return [contains(col(Product.brand), self.brand)]
        return []


class ProductRepository:
    """Repository for Product CRUD operations."""

    ORDERING = (col(Product.created_at).desc(), col(Product.id).desc())

    def __init__(self, session: Session):
        self.session = session

    def list(self, filters: ProductFilter, params: PageParams) -> Page[Product]:
        """Newest products first, filtered and paginated."""
        statement = select(Product).where(*filters.clauses())
        return paginate(self.session, statement, params, self.ORDERING)

    def get(self, product_id: int) -> Optional[Product]:
        return self.session.get(Product, product_id)

    def create(self, product_in: ProductCreate) -> Product:
        product = Product(**product_in.model_dump())
        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)
        return product

    def update(self, product: Product, product_in: ProductUpdate) -> Product:
        """Apply the provided fields and re-stamp ``updated_at``."""
        for field, value in product_in.model_dump(exclude_unset=True).items():
            # Only the description may be cleared
            if value is None and field not in NULLABLE_FIELDS:
                continue
            setattr(product, field, value)
        product.touch()
        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)
        return product
