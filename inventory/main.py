# inventory/main.py
import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import configure_logging, get_settings
from .errors import NotFoundError, NullInputError, ValidationError
from .models import Product, ProductIn
from .store import InventoryStore

logger = logging.getLogger(__name__)


def create_app(store: Optional[InventoryStore] = None) -> FastAPI:
    if store is None:
        settings = get_settings()
        store = InventoryStore(settings.data_file, strict=settings.strict_load)

    app = FastAPI(title="inventory manager")
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------
    # Error mapping
    # ---------------------------
    @app.exception_handler(ValidationError)
    @app.exception_handler(NullInputError)
    async def bad_request(request: Request, exc: Exception):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    # ---------------------------
    # Product endpoints
    # ---------------------------
    def get_store(request: Request) -> InventoryStore:
        return request.app.state.store

    @app.post("/products", status_code=201, response_model=Product, response_model_by_alias=True)
    def add_product(payload: ProductIn, store: InventoryStore = Depends(get_store)):
        return store.add_product(payload.to_product())

    @app.get("/products", response_model=List[Product], response_model_by_alias=True)
    def list_products(
        category: Optional[str] = None,
        available_only: bool = False,
        store: InventoryStore = Depends(get_store),
    ):
        return store.list_products(category=category, available_only=available_only)

    @app.get("/products/search", response_model=List[Product], response_model_by_alias=True)
    def search_products(term: str = Query(...), store: InventoryStore = Depends(get_store)):
        return store.search_products(term)

    @app.get("/products/{product_id}", response_model=Product, response_model_by_alias=True)
    def get_product(product_id: int, store: InventoryStore = Depends(get_store)):
        return store.get_product(product_id)

    @app.put("/products/{product_id}", response_model=Product, response_model_by_alias=True)
    def update_product(product_id: int, payload: ProductIn, store: InventoryStore = Depends(get_store)):
        return store.update_product(payload.to_product(product_id))

    @app.delete("/products/{product_id}")
    def delete_product(product_id: int, store: InventoryStore = Depends(get_store)):
        return {"deleted": store.delete_product(product_id)}

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Serving %s on %s:%d", settings.data_file, settings.api_host, settings.api_port)
    uvicorn.run(create_app(), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
