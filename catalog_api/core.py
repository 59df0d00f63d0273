import json
import math
import re
import time
from typing import Any, Dict, List, Optional, Union

from .errors import AuthError, BodyParseError, ValidationError

REQUIRED_FIELDS = ("name", "description", "price", "category", "inStock")

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)", re.ASCII)
_DECIMAL = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$", re.ASCII)
_PREFIXED = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$", re.ASCII)

Number = Union[int, float]


# ---------------------------
# Query / path coercion
# ---------------------------
def coerce_int_param(raw: Optional[str], default: int) -> int:
    """Read a leading integer from raw ("2abc" -> 2, "-1" -> -1).

    No leading integer, or a zero, gives default.
    """
    if raw is None:
        return default
    m = _LEADING_INT.match(raw)
    if not m:
        return default
    return int(m.group(1)) or default


def parse_product_id(raw: str) -> Optional[Number]:
    """Read a numeric literal ("3", "3.0", "1e2", "0x10"); None when raw is not one.

    Whole values come back as int. Non-finite values count as not a number.
    """
    text = raw.strip()
    if _PREFIXED.match(text):
        return int(text, 0)
    if not _DECIMAL.match(text):
        return None
    if re.fullmatch(r"[+-]?[0-9]+", text, re.ASCII):
        return int(text)
    value = float(text)
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


# ---------------------------
# Auth gate
# ---------------------------
def check_api_key(provided: Optional[str], expected: str) -> Optional[AuthError]:
    if not provided or provided != expected:
        return AuthError("Invalid API key")
    return None


# ---------------------------
# Validation
# ---------------------------
def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def validate_product(payload: Any) -> Optional[ValidationError]:
    """Check a create/update payload.

    Presence comes first: name, description, price and category must be
    truthy and inStock must be present (false and null both count). Only
    then is price checked for being a positive number.
    """
    if not isinstance(payload, dict):
        return ValidationError("All fields are required: " + ", ".join(REQUIRED_FIELDS))
    missing = [f for f in REQUIRED_FIELDS[:-1] if not payload.get(f)]
    if missing or "inStock" not in payload:
        return ValidationError("All fields are required: " + ", ".join(REQUIRED_FIELDS))
    if not _is_positive_number(payload["price"]):
        return ValidationError("Price must be a positive number")
    return None


def _reject_constant(token: str):
    # NaN, Infinity and -Infinity are not JSON
    raise BodyParseError(f"invalid JSON token: {token}")


def decode_json_body(raw: bytes, content_type: Optional[str]) -> Any:
    """Decode a request body the way a JSON body parser would.

    Non-JSON content types and empty bodies decode to {}. Only objects and
    arrays are accepted at the top level.
    """
    ctype = (content_type or "").split(";")[0].strip().lower()
    if ctype != "application/json" and not ctype.endswith("+json"):
        return {}
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as e:
        raise BodyParseError(str(e)) from e
    if not isinstance(body, (dict, list)):
        raise BodyParseError(f"unexpected top-level JSON type: {type(body).__name__}")
    return body


# ---------------------------
# Catalog queries
# ---------------------------
def filter_by_category(products: List[Dict[str, Any]], category: Optional[str]) -> List[Dict[str, Any]]:
    if not category:
        return list(products)
    wanted = category.lower()
    return [p for p in products if p["category"].lower() == wanted]


def paginate(items: List[Dict[str, Any]], page: int, limit: int) -> Dict[str, Any]:
    start = (page - 1) * limit
    end = page * limit
    return {
        "products": items[start:end],
        "pagination": {
            "currentPage": page,
            "totalPages": math.ceil(len(items) / limit),
            "totalProducts": len(items),
        },
    }


def search_by_name(products: List[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
    term = term.lower()
    return [p for p in products if term in p["name"].lower()]


def compute_stats(products: List[Dict[str, Any]]) -> Dict[str, Any]:
    category_stats: Dict[str, int] = {}
    for p in products:
        category_stats[p["category"]] = category_stats.get(p["category"], 0) + 1
    in_stock = sum(1 for p in products if p["inStock"])
    return {
        "totalProducts": len(products),
        "categoryStats": category_stats,
        "stockStats": {"inStock": in_stock, "outOfStock": len(products) - in_stock},
    }


# ---------------------------
# Id generation
# ---------------------------
class TimestampIdGenerator:
    """Millisecond timestamps, bumped so ids never repeat within a process.

    Two processes (or a restart with a clock step back) can still hand out
    the same id.
    """

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0

    def next_id(self) -> int:
        now = int(self._clock() * 1000)
        self._last = max(now, self._last + 1)
        return self._last


id_generator = TimestampIdGenerator()
