# inventory/models.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(BaseModel):
    """A single inventory item.

    The store assigns ``id`` on insert; callers leave it as None when adding.
    Business rules (non-empty name, non-negative quantity/price) are enforced
    by the store, not here, so a candidate can always be constructed.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    name: str
    description: str = ""
    quantity: int = 0
    price: Decimal = Decimal("0")
    category: str = ""
    last_updated: datetime = Field(default_factory=utcnow, alias="lastUpdated")

    def __str__(self) -> str:
        return f"{self.name} - {self.quantity} pcs."


class ProductIn(BaseModel):
    """Request body for creating or replacing a product over HTTP."""

    name: str
    description: str = ""
    quantity: int = 0
    price: Decimal = Decimal("0")
    category: str = ""

    def to_product(self, product_id: Optional[int] = None) -> Product:
        return Product(id=product_id, **self.model_dump())


ProductList = TypeAdapter(List[Product])


def dump_products(products: List[Product]) -> bytes:
    return ProductList.dump_json(products, by_alias=True, indent=2)


def load_products(raw: bytes) -> List[Product]:
    return ProductList.validate_json(raw)
