# tests/test_concurrency.py
import asyncio
import json

import httpx


async def _add(ac, i):
    return await ac.post("/api/products", json={
        "name": f"item {i}", "image_url": f"https://example.com/{i}.jpg", "price": f"{i}.99",
    })


async def _add_many(app, n):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await asyncio.gather(*(_add(ac, i) for i in range(n)))


def test_concurrent_creates_are_all_persisted(app, settings):
    results = asyncio.run(_add_many(app, 20))
    assert [r.status_code for r in results] == [201] * 20

    with open(settings.products_file, encoding="utf-8") as f:
        stored = json.load(f)["products"]
    ids = [p["id"] for p in stored]
    assert len(stored) == 20
    assert len(set(ids)) == 20
    assert set(ids) == {r.json()["product"]["id"] for r in results}
