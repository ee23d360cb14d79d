# sdk/shop_client.py
import requests
import httpx
from typing import Any, Dict, Union
from rich import print


class StoreClient:
    def __init__(self, base_url: str = "http://localhost", timeout: int = 10, verify: Union[bool, str] = True):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.session.verify = verify
        self.timeout = timeout
        self.verify = verify

    def list_products(self) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}/api/products", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def add_product(self, name: str, image_url: str, price: str) -> Dict[str, Any]:
        r = self.session.post(f"{self.base_url}/api/products", json={
            "name": name, "image_url": image_url, "price": price
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: Union[int, str]) -> Dict[str, Any]:
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async create, handy for firing several requests at once
    async def add_product_async(self, name: str, image_url: str, price: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, verify=self.verify) as client:
            return await client.post(f"{self.base_url}/api/products", json={
                "name": name, "image_url": image_url, "price": price
            })


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Shop API client")
    parser.add_argument("--base-url", default="http://127.0.0.1", help="Server address")
    parser.add_argument("--insecure", action="store_true", help="Skip TLS certificate checks")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    ap = subparsers.add_parser("add-product", help="Add a new product")
    ap.add_argument("--name", required=True, help="Product name")
    ap.add_argument("--image-url", required=True, help="Product image URL")
    ap.add_argument("--price", required=True, help="Price, e.g. 19.99 or $19.99")

    dp = subparsers.add_parser("delete-product", help="Delete a product by its ID")
    dp.add_argument("--product-id", required=True, help="6-digit product ID")

    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url, verify=not args.insecure)

    if args.command == "list-products":
        print(c.list_products())
    elif args.command == "add-product":
        print(c.add_product(args.name, args.image_url, args.price))
    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))
