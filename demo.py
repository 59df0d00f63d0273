#!/usr/bin/env python
import requests
from sdk.catalog_client import CatalogClient

def main():
    c = CatalogClient(base_url="http://127.0.0.1:3000", api_key="my-secret-key")

    # -----------------------------
    # Root
    # -----------------------------
    print("Pinging server...")
    print(c.hello())

    # -----------------------------
    # List products (filtered + paginated)
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())
    print("\nElectronics, page 2 of 2 per page...")
    print(c.list_products(category="electronics", page=2, limit=2))

    # -----------------------------
    # Search + stats
    # -----------------------------
    print("\nSearching for 'lap'...")
    print(c.search_products("lap"))
    print("\nCatalog stats...")
    print(c.get_stats())

    # -----------------------------
    # Get by id
    # -----------------------------
    print("\nFetching product 3...")
    print(c.get_product(3))
    try:
        c.get_product(999)
    except requests.exceptions.HTTPError as e:
        print("Product 999:", e.response.status_code, e.response.json())

    # -----------------------------
    # Writes are echoed, never stored
    # -----------------------------
    print("\nCreating a product...")
    created = c.create_product("Drone", "Camera drone", 799, "Electronics", True)
    print(created)
    print("\nUpdating product 1...")
    print(c.update_product(1, "Phones", "Latest smartphones", 649, "Electronics", True))
    print("\nDeleting product 2...")
    print(c.delete_product(2))

    print("\nCatalog after writes (still the six seed products)...")
    print(c.get_stats()["totalProducts"])

    # -----------------------------
    # Without an api key
    # -----------------------------
    anon = CatalogClient(base_url=c.base_url)
    try:
        anon.delete_product(1)
    except requests.exceptions.HTTPError as e:
        print("\nDelete without key:", e.response.status_code, e.response.json())

if __name__ == "__main__":
    main()
