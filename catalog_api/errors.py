"""Error kinds raised by the catalog service.

Each CatalogError carries the HTTP status it maps to and a kind name that is
sent to clients as the "error" field. BodyParseError sits outside the
hierarchy: it has no status of its own and is translated separately.
"""

from typing import Any, Dict


class CatalogError(Exception):
    """Base class for classified failures."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.name, "message": self.message}


class AuthError(CatalogError):
    status_code = 401


class ValidationError(CatalogError):
    status_code = 400


class NotFoundError(CatalogError):
    status_code = 404


class BodyParseError(Exception):
    """Request body could not be decoded as a JSON object or array."""
