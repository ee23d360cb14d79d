#!/usr/bin/env python
import os
from sdk.shop_client import StoreClient

def main():
    c = StoreClient(base_url=os.getenv("SHOP_API_URL", "http://127.0.0.1"))

    # -----------------------------
    # Add products
    # -----------------------------
    print("\nAdding products...")
    laptop = c.add_product("Laptop", "https://example.com/img/laptop.jpg", "1499.00")["product"]
    mouse = c.add_product("Mouse", "https://example.com/img/mouse.jpg", "$19.99")["product"]
    print(laptop)
    print(mouse)

    # -----------------------------
    # List products
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    # -----------------------------
    # Delete one again
    # -----------------------------
    print(f"\nDeleting {laptop['id']}...")
    print(c.delete_product(laptop["id"]))

    print("\nCatalog now:")
    print(c.list_products())

if __name__ == "__main__":
    main()
