# shop_api/models.py
from pydantic import BaseModel, ConfigDict, field_validator
from typing import Any, List, Optional


class Product(BaseModel):
    # keep fields we don't know about (e.g. older "stock" columns) on rewrite
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    image_url: str
    price: str


class Catalog(BaseModel):
    products: List[Product] = []


class ProductIn(BaseModel):
    name: Optional[str] = None
    image_url: Optional[str] = None
    price: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def _price_as_text(cls, v: Any) -> Any:
        # 19.99 and "19.99" are the same price
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v
