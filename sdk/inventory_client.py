# sdk/inventory_client.py
from typing import List, Optional

import requests

from inventory.errors import NotFoundError, ValidationError
from inventory.models import Product

_FIELDS = {"name", "description", "quantity", "price", "category"}


class InventoryClient:
    """HTTP client for the inventory API with the same surface as InventoryStore."""

    def __init__(self, base_url: str = "http://localhost:8085", timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _check(self, r):
        if r.status_code == 400:
            raise ValidationError(r.json().get("detail", "invalid product"))
        if r.status_code == 404:
            raise NotFoundError(r.json().get("detail", "product not found"))
        r.raise_for_status()
        return r.json()

    @staticmethod
    def _body(product: Product) -> dict:
        return product.model_dump(mode="json", include=_FIELDS)

    def add_product(self, product: Product) -> Product:
        r = self.session.post(f"{self.base_url}/products", json=self._body(product), timeout=self.timeout)
        return Product.model_validate(self._check(r))

    def update_product(self, product: Product) -> Product:
        if product.id is None:
            raise NotFoundError("product has no id")
        r = self.session.put(f"{self.base_url}/products/{product.id}", json=self._body(product), timeout=self.timeout)
        return Product.model_validate(self._check(r))

    def delete_product(self, product_id: int) -> bool:
        r = self.session.delete(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return self._check(r)["deleted"]

    def get_product(self, product_id: int) -> Product:
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return Product.model_validate(self._check(r))

    def list_products(self, category: Optional[str] = None, available_only: bool = False) -> List[Product]:
        params = {}
        if category is not None:
            params["category"] = category
        if available_only:
            params["available_only"] = "true"
        r = self.session.get(f"{self.base_url}/products", params=params, timeout=self.timeout)
        return [Product.model_validate(p) for p in self._check(r)]

    def get_all_products(self) -> List[Product]:
        return self.list_products()

    def search_products(self, term: str) -> List[Product]:
        r = self.session.get(f"{self.base_url}/products/search", params={"term": term}, timeout=self.timeout)
        return [Product.model_validate(p) for p in self._check(r)]
