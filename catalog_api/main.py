# catalog_api/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from fastapi import APIRouter, Depends, FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import Settings, get_settings
from .core import check_api_key, decode_json_body, validate_product
from .database import get_catalog
from .error_handlers import register_error_handlers
from .logic import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, product_stats_logic, search_products_logic,
    update_product_logic
)
from .models import Product
from .observability import setup_logging

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("catalog_api.access")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Server is running on http://{settings.host}:{settings.port}")
    yield
    logger.info("Server shutting down")


app = FastAPI(title="catalog-api (in-memory demo)", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# ---------------------------
# Access log (outermost, runs before routing)
# ---------------------------
@app.middleware("http")
async def log_requests(request: Request, call_next):
    url = request.url.path
    if request.url.query:
        url += f"?{request.url.query}"
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    access_logger.info(
        f"{request.method} {url} - {timestamp}",
        extra={"method": request.method, "path": request.url.path},
    )
    return await call_next(request)


# ---------------------------
# Dependencies
# ---------------------------
async def parse_json_body(request: Request) -> Any:
    """Decode the body of every /api request, ahead of auth and validation."""
    return decode_json_body(await request.body(), request.headers.get("content-type"))


async def require_api_key(x_api_key: Optional[str] = Header(None),
                          settings: Settings = Depends(get_settings)):
    error = check_api_key(x_api_key, settings.api_key)
    if error is not None:
        raise error


async def read_product_body(payload: Any = Depends(parse_json_body)) -> Dict[str, Any]:
    error = validate_product(payload)
    if error is not None:
        raise error
    return payload


# Router dependencies run before the route's own, so a malformed body is
# reported before the api key is checked.
router = APIRouter(prefix="/api", dependencies=[Depends(parse_json_body)])


# ---------------------------
# Routes
# ---------------------------
@app.get("/", response_class=PlainTextResponse)
async def hello():
    return "Hello World!"


@router.get("/products")
async def list_products(category: Optional[str] = None, page: Optional[str] = None,
                        limit: Optional[str] = None,
                        catalog: Sequence[Product] = Depends(get_catalog),
                        settings: Settings = Depends(get_settings)):
    return await list_products_logic(catalog, category, page, limit, settings.simulated_latency_ms)


@router.get("/products/search")
async def search_products(q: Optional[str] = None,
                          catalog: Sequence[Product] = Depends(get_catalog),
                          settings: Settings = Depends(get_settings)):
    return await search_products_logic(catalog, q, settings.simulated_latency_ms)


@router.get("/products/stats")
async def product_stats(catalog: Sequence[Product] = Depends(get_catalog),
                        settings: Settings = Depends(get_settings)):
    return await product_stats_logic(catalog, settings.simulated_latency_ms)


@router.get("/products/{product_id}")
async def get_product(product_id: str,
                      catalog: Sequence[Product] = Depends(get_catalog),
                      settings: Settings = Depends(get_settings)):
    return await get_product_logic(catalog, product_id, settings.simulated_latency_ms)


@router.post("/products", status_code=201, dependencies=[Depends(require_api_key)])
async def create_product(payload: Dict[str, Any] = Depends(read_product_body),
                         settings: Settings = Depends(get_settings)):
    return await create_product_logic(payload, settings.simulated_latency_ms)


@router.put("/products/{product_id}", dependencies=[Depends(require_api_key)])
async def update_product(product_id: str,
                         payload: Dict[str, Any] = Depends(read_product_body),
                         settings: Settings = Depends(get_settings)):
    return await update_product_logic(product_id, payload, settings.simulated_latency_ms)


@router.delete("/products/{product_id}", dependencies=[Depends(require_api_key)])
async def delete_product(product_id: str, settings: Settings = Depends(get_settings)):
    return await delete_product_logic(product_id, settings.simulated_latency_ms)


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("catalog_api.main:app", host=settings.host, port=settings.port)
