from decimal import Decimal
from pydantic import BaseModel
from typing import Optional


class CartItemCreate(BaseModel):
    product_id: int


class CartItem(BaseModel):
    id: Optional[int] = None
    source_type: str
    source_id: str
    name: str
    price: Decimal
    quantity: int

    class Config:
        from_attributes = True
