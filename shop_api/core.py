import asyncio
import logging
import random
import re
from typing import Any, Dict, Iterable, Optional

from .database import ProductStore
from .errors import CatalogFullError, NotFoundError, ValidationError
from .models import Catalog, Product

# This file holds the business rules behind every endpoint.

logger = logging.getLogger(__name__)

ID_MIN = 100000
ID_MAX = 999999
CURRENCY_PREFIX = "$"

_PRODUCT_ID_RE = re.compile(r"[0-9]{6}")
_NOT_NUMERIC_RE = re.compile(r"[^0-9.]")


# ---------------------------
# Helpers
# ---------------------------
def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _is_utf8(value: str) -> bool:
    # JSON lets lone surrogates like "\ud800" through; they can't be stored
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def normalize_price(raw: str) -> str:
    """Return ``raw`` trimmed and ``$``-prefixed, or raise ValidationError.

    The numeric payload is whatever is left after dropping the prefix and
    every character that is not a digit or a dot; it has to parse as a
    non-negative number.
    """
    price = raw.strip()
    if not price.startswith(CURRENCY_PREFIX):
        price = CURRENCY_PREFIX + price

    body = price[len(CURRENCY_PREFIX):].lstrip()
    if body.startswith("-"):
        raise ValidationError("Price must not be negative")

    digits = _NOT_NUMERIC_RE.sub("", body)
    try:
        value = float(digits)
    except ValueError:
        raise ValidationError("Invalid price")
    if value < 0:
        raise ValidationError("Price must not be negative")
    return price


def is_valid_product_id(text: str) -> bool:
    return bool(_PRODUCT_ID_RE.fullmatch(text))


def generate_product_id(
    existing: Iterable[int],
    rng: Optional[random.Random] = None,
    max_attempts: int = 1000,
) -> int:
    taken = set(existing)
    rng = rng or random
    for _ in range(max_attempts):
        candidate = rng.randint(ID_MIN, ID_MAX)
        if candidate not in taken:
            return candidate

    # random draws kept colliding, the id space is nearly full
    for candidate in range(ID_MIN, ID_MAX + 1):
        if candidate not in taken:
            return candidate
    raise CatalogFullError("No free product id left")


class _NoLock:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


# ---------------------------
# Service
# ---------------------------
class ProductService:
    """List, create and delete products on top of a ``ProductStore``.

    Every call loads a fresh catalog from disk.  Mutations write the whole
    catalog back.  File I/O runs in worker threads, so requests interleave
    between load and save.  With ``serialize_writes`` enabled a single lock
    is held for the full load -> modify -> save cycle, so two concurrent
    creates can't overwrite each other.  Without it the last writer wins.
    The lock only covers this process.
    """

    def __init__(
        self,
        store: ProductStore,
        serialize_writes: bool = True,
        id_max_attempts: int = 1000,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.id_max_attempts = id_max_attempts
        self._rng = rng or random.Random()
        self._write_lock = asyncio.Lock() if serialize_writes else _NoLock()

    async def list_products(self) -> Catalog:
        return await asyncio.to_thread(self.store.load)

    async def create_product(
        self, name: Optional[str], image_url: Optional[str], price: Optional[str]
    ) -> Product:
        if _is_blank(name) or _is_blank(image_url) or _is_blank(price):
            logger.warning("Rejected product: missing field")
            raise ValidationError("All fields are required")
        if not all(_is_utf8(v) for v in (name, image_url, price)):
            logger.warning("Rejected product: text is not valid UTF-8")
            raise ValidationError("Fields must be valid UTF-8 text")

        try:
            price = normalize_price(price)
        except ValidationError as e:
            logger.warning("Rejected product %r: %s (price=%r)", name, e.message, price)
            raise

        async with self._write_lock:
            catalog = await asyncio.to_thread(self.store.load)
            product_id = generate_product_id(
                (p.id for p in catalog.products), self._rng, self.id_max_attempts
            )
            product = Product(id=product_id, name=name, image_url=image_url, price=price)
            catalog.products.append(product)
            await asyncio.to_thread(self.store.save, catalog)

        logger.info("Product %s added: %s", product.id, product.name)
        return product

    async def delete_product(self, product_id: str) -> Dict[str, Any]:
        if not is_valid_product_id(product_id):
            logger.warning("Rejected delete: bad id %r", product_id)
            raise ValidationError("Product id must be 6 digits")
        numeric_id = int(product_id)

        async with self._write_lock:
            catalog = await asyncio.to_thread(self.store.load)
            for index, p in enumerate(catalog.products):
                if p.id == numeric_id:
                    break
            else:
                raise NotFoundError("Product not found")
            del catalog.products[index]
            await asyncio.to_thread(self.store.save, catalog)

        logger.info("Product %s deleted", numeric_id)
        return {"message": f"Product {numeric_id} deleted"}
