import asyncio
from typing import Any, Dict, Optional, Sequence

from .core import (
    coerce_int_param, compute_stats, filter_by_category, id_generator,
    paginate, parse_product_id, search_by_name
)
from .errors import NotFoundError, ValidationError
from .models import Product

# This file contains the logic behind every /api/products endpoint.
# Handlers raise CatalogError subclasses and never catch; main.py turns
# failures into responses.

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


async def simulate_latency(latency_ms: int):
    if latency_ms > 0:
        await asyncio.sleep(latency_ms / 1000)


def _as_dicts(catalog: Sequence[Product]):
    return [p.to_dict() for p in catalog]


def _format_id(product_id) -> str:
    # ids that are not numbers print as NaN, like the id echoed as null
    return "NaN" if product_id is None else str(product_id)


# Read endpoints
async def list_products_logic(catalog: Sequence[Product], category: Optional[str] = None,
                              page: Optional[str] = None, limit: Optional[str] = None,
                              latency_ms: int = 0) -> Dict[str, Any]:
    filtered = filter_by_category(_as_dicts(catalog), category)
    page_no = coerce_int_param(page, DEFAULT_PAGE)
    per_page = coerce_int_param(limit, DEFAULT_LIMIT)
    result = paginate(filtered, page_no, per_page)
    await simulate_latency(latency_ms)
    return result


async def search_products_logic(catalog: Sequence[Product], q: Optional[str],
                                latency_ms: int = 0) -> Dict[str, Any]:
    if not q:
        raise ValidationError('Search query parameter "q" is required')
    results = search_by_name(_as_dicts(catalog), q)
    await simulate_latency(latency_ms)
    return {"searchTerm": q, "results": results, "count": len(results)}


async def product_stats_logic(catalog: Sequence[Product], latency_ms: int = 0) -> Dict[str, Any]:
    stats = compute_stats(_as_dicts(catalog))
    await simulate_latency(latency_ms)
    return stats


async def get_product_logic(catalog: Sequence[Product], raw_id: str,
                            latency_ms: int = 0) -> Dict[str, Any]:
    await simulate_latency(latency_ms)
    product_id = parse_product_id(raw_id)
    product = next((p for p in catalog if p.id == product_id), None)
    if product is None:
        raise NotFoundError("Product not found")
    return {"product": product.to_dict()}


# Write endpoints: the response echoes the record, the catalog is untouched
async def create_product_logic(payload: Dict[str, Any], latency_ms: int = 0) -> Dict[str, Any]:
    await simulate_latency(latency_ms)
    product = dict(payload)
    product["id"] = id_generator.next_id()
    return {"message": "Product created successfully", "product": product}


async def update_product_logic(raw_id: str, payload: Dict[str, Any],
                               latency_ms: int = 0) -> Dict[str, Any]:
    product_id = parse_product_id(raw_id)
    await simulate_latency(latency_ms)
    product = dict(payload)
    product["id"] = product_id
    return {"message": "Product updated successfully", "product": product}


async def delete_product_logic(raw_id: str, latency_ms: int = 0) -> Dict[str, Any]:
    product_id = parse_product_id(raw_id)
    await simulate_latency(latency_ms)
    return {"message": f"Product with ID {_format_id(product_id)} deleted successfully"}
