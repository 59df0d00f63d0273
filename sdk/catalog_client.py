# sdk/catalog_client.py
from typing import Any, Dict, Optional

import httpx
import requests
from rich import print

API_KEY_HEADER = "x-api-key"


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({API_KEY_HEADER: api_key})

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None):
        r = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r

    # Root
    def hello(self) -> str:
        return self._get("/").text

    # Reads
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None,
                      limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return self._get("/api/products", params=params).json()

    def search_products(self, q: str):
        return self._get("/api/products/search", params={"q": q}).json()

    def get_stats(self):
        return self._get("/api/products/stats").json()

    def get_product(self, product_id: int):
        return self._get(f"/api/products/{product_id}").json()

    # Writes (need an api key)
    @staticmethod
    def _product_body(name: str, description: str, price: float, category: str, in_stock: bool):
        return {
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "inStock": in_stock,
        }

    def create_product(self, name: str, description: str, price: float, category: str,
                       in_stock: bool = True):
        r = self.session.post(f"{self.base_url}/api/products",
                              json=self._product_body(name, description, price, category, in_stock),
                              timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: int, name: str, description: str, price: float,
                       category: str, in_stock: bool = True):
        r = self.session.put(f"{self.base_url}/api/products/{product_id}",
                             json=self._product_body(name, description, price, category, in_stock),
                             timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: int):
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async search (example)
    async def search_async(self, q: str):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.get(f"{self.base_url}/api/products/search", params={"q": q})
            r.raise_for_status()
            return r.json()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Catalog API CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000", help="Server base URL")
    parser.add_argument("--api-key", help="Value for the x-api-key header (writes only)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter products by category")
    lp.add_argument("--page", type=int, help="Page number (1-based)")
    lp.add_argument("--limit", type=int, help="Products per page")

    sp = subparsers.add_parser("search", help="Search for products by name")
    sp.add_argument("--q", required=True, help="Text to look for in product names")

    subparsers.add_parser("stats", help="Show catalog statistics")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    for cmd, help_text in (("create-product", "Create a product"), ("update-product", "Replace a product")):
        p = subparsers.add_parser(cmd, help=help_text)
        if cmd == "update-product":
            p.add_argument("--product-id", type=int, required=True, help="ID of the product")
        p.add_argument("--name", required=True, help="Product name")
        p.add_argument("--description", required=True, help="Product description")
        p.add_argument("--price", type=float, required=True, help="Price")
        p.add_argument("--category", required=True, help="Product category")
        p.add_argument("--out-of-stock", action="store_true", help="Mark the product as out of stock")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url, api_key=args.api_key)

    try:
        if args.command == "list-products":
            print(c.list_products(args.category, args.page, args.limit))
        elif args.command == "search":
            print(c.search_products(args.q))
        elif args.command == "stats":
            print(c.get_stats())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.description, args.price, args.category,
                                   not args.out_of_stock))
        elif args.command == "update-product":
            print(c.update_product(args.product_id, args.name, args.description, args.price,
                                   args.category, not args.out_of_stock))
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
    except requests.exceptions.HTTPError as e:
        print(f"[red]{e.response.status_code}[/red] {e.response.text}")
        raise SystemExit(1)
