# shop_api/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, settings as default_settings
from .core import ProductService
from .database import ProductStore
from .errors import ShopError
from .logging_config import setup_logging
from .models import ProductIn

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app shared by the HTTP and HTTPS listeners.

    The catalog document is created here if it is missing, so this runs
    once per process, before any request is served.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    store = ProductStore(settings.products_file)
    store.ensure_exists()
    service = ProductService(
        store,
        serialize_writes=settings.serialize_writes,
        id_max_attempts=settings.id_max_attempts,
    )

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------
    # Error mapping
    # ---------------------------
    @app.exception_handler(ShopError)
    async def shop_error_handler(request: Request, exc: ShopError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Rejected request body on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/api/products")
    async def list_products():
        catalog = await service.list_products()
        return catalog.model_dump()

    @app.post("/api/products", status_code=201)
    async def create_product(payload: ProductIn):
        product = await service.create_product(payload.name, payload.image_url, payload.price)
        return {"message": "Product added", "product": product.model_dump()}

    @app.delete("/api/products/{product_id}")
    async def delete_product(product_id: str):
        return await service.delete_product(product_id)

    return app
