# inventory/store.py
import logging
import os
import stat
import tempfile
import threading
from pathlib import Path
from typing import Callable, List, Optional, Union

from pydantic import ValidationError as ModelValidationError

from .errors import CorruptStoreError, NotFoundError, NullInputError, ValidationError
from .models import Product, dump_products, load_products, utcnow

logger = logging.getLogger(__name__)


class InventoryStore:
    """Owns the product collection and mirrors it to a JSON file.

    Every mutating call rewrites the whole file before returning. Records
    are copied on the way in and on the way out, so callers never hold a
    reference into the store's own list.
    """

    def __init__(
        self,
        path: Union[str, Path],
        *,
        strict: bool = False,
        clock: Optional[Callable] = None,
    ):
        self.path = Path(path)
        self.strict = strict
        self._clock = clock or utcnow
        self._lock = threading.RLock()
        self._products: List[Product] = []
        self.reload()

    # ---------------------------
    # Persistence
    # ---------------------------
    def reload(self) -> None:
        """Replace the in-memory collection with the contents of the backing file."""
        with self._lock:
            self._products = self._load()

    def _load(self) -> List[Product]:
        if not self.path.exists():
            logger.info("No inventory file at %s, starting empty", self.path)
            return []
        try:
            products = load_products(self.path.read_bytes())
            self._check_loaded(products)
        except (OSError, ModelValidationError, ValidationError) as e:
            if self.strict:
                raise CorruptStoreError(f"cannot load {self.path}: {e}") from e
            logger.warning("Could not load inventory from %s, starting empty: %s", self.path, e)
            return []
        logger.info("Loaded %d products from %s", len(products), self.path)
        return products

    def _check_loaded(self, products: List[Product]) -> None:
        seen = set()
        for p in products:
            if p.id is None:
                raise ValidationError(f"record {p.name!r} has no id")
            if p.id in seen:
                raise ValidationError(f"duplicate id {p.id}")
            seen.add(p.id)
            self._validate(p)

    def _save(self) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "wb") as f:
                # mkstemp creates 0600; keep the mode of the file being replaced
                if self.path.exists():
                    os.chmod(tmp, stat.S_IMODE(self.path.stat().st_mode))
                f.write(dump_products(self._products))
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except FileNotFoundError:
                pass
            raise
        logger.debug("Saved %d products to %s", len(self._products), self.path)

    def _commit(self, previous: List[Product]) -> None:
        # keep memory and disk in sync if the write fails
        try:
            self._save()
        except OSError:
            self._products = previous
            logger.exception("Failed to save inventory to %s", self.path)
            raise

    # ---------------------------
    # Helpers
    # ---------------------------
    @staticmethod
    def _validate(product: Product) -> None:
        if not product.name or not product.name.strip():
            raise ValidationError("product name must not be empty")
        if product.quantity < 0:
            raise ValidationError("quantity must not be negative")
        if product.price < 0:
            raise ValidationError("price must not be negative")

    def _index_of(self, product_id: int) -> Optional[int]:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return None

    def _next_id(self) -> int:
        return max((p.id for p in self._products), default=0) + 1

    # ---------------------------
    # Mutations
    # ---------------------------
    def add_product(self, candidate: Optional[Product]) -> Product:
        if candidate is None:
            raise NullInputError("product is required")
        self._validate(candidate)

        with self._lock:
            record = candidate.model_copy(deep=True)
            record.id = self._next_id()
            record.last_updated = self._clock()

            previous = list(self._products)
            self._products.append(record)
            self._commit(previous)

        logger.info("Added product %d (%s)", record.id, record.name)
        return record.model_copy(deep=True)

    def update_product(self, candidate: Optional[Product]) -> Product:
        if candidate is None:
            raise NullInputError("product is required")

        with self._lock:
            idx = self._index_of(candidate.id)
            if idx is None:
                raise NotFoundError(f"product {candidate.id} not found")
            self._validate(candidate)

            current = self._products[idx]
            updated = current.model_copy(
                update={
                    "name": candidate.name,
                    "description": candidate.description,
                    "quantity": candidate.quantity,
                    "price": candidate.price,
                    "category": candidate.category,
                    "last_updated": self._clock(),
                },
                deep=True,
            )

            previous = list(self._products)
            self._products[idx] = updated
            self._commit(previous)

        logger.info("Updated product %d", updated.id)
        return updated.model_copy(deep=True)

    def delete_product(self, product_id: int) -> bool:
        with self._lock:
            idx = self._index_of(product_id)
            if idx is None:
                logger.debug("Delete of unknown product %s ignored", product_id)
                return False

            previous = list(self._products)
            del self._products[idx]
            self._commit(previous)

        logger.info("Deleted product %d", product_id)
        return True

    # ---------------------------
    # Queries
    # ---------------------------
    def get_product(self, product_id: int) -> Product:
        with self._lock:
            idx = self._index_of(product_id)
            if idx is None:
                raise NotFoundError(f"product {product_id} not found")
            return self._products[idx].model_copy(deep=True)

    def get_all_products(self) -> List[Product]:
        with self._lock:
            return [p.model_copy(deep=True) for p in self._products]

    def list_products(self, category: Optional[str] = None, available_only: bool = False) -> List[Product]:
        out = []
        for p in self.get_all_products():
            if category is not None and p.category != category:
                continue
            if available_only and p.quantity <= 0:
                continue
            out.append(p)
        return out

    def search_products(self, term: Optional[str]) -> List[Product]:
        if term is None:
            raise NullInputError("search term is required")
        needle = term.casefold()
        return [
            p for p in self.get_all_products()
            if needle in p.name.casefold() or needle in p.description.casefold()
        ]
