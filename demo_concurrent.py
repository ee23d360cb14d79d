import asyncio
import os
from sdk.shop_client import StoreClient

N = 20

async def add_one(client, i):
    r = await client.add_product_async(f"Concurrent item {i}", f"https://example.com/img/{i}.jpg", f"{i}.50")
    if r.status_code == 201:
        return r.json()["product"]["id"]
    print(f"❌ request {i} failed: {r.status_code} {r.text}")
    return None

async def main():
    c = StoreClient(base_url=os.getenv("SHOP_API_URL", "http://127.0.0.1"))

    before = len(c.list_products()["products"])
    print(f"📦 Catalog holds {before} products")

    print(f"\n⚡ Sending {N} creates at once...")
    ids = await asyncio.gather(*(add_one(c, i) for i in range(N)))
    created = [pid for pid in ids if pid is not None]

    stored = {p["id"] for p in c.list_products()["products"]}
    lost = [pid for pid in created if pid not in stored]
    print(f"✅ {len(created)} accepted, {len(created) - len(lost)} persisted")
    if lost:
        print(f"⚠️  lost updates: {lost}")

    # clean up after ourselves
    for pid in created:
        if pid in stored:
            c.delete_product(pid)

if __name__ == "__main__":
    asyncio.run(main())
