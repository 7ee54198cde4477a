from decimal import Decimal
from pydantic import BaseModel
from typing import List, Optional
from .cart_item import CartItem


class CartTotals(BaseModel):
    id: Optional[int] = None
    subtotal: Decimal
    discount: Decimal
    discount_percentage: Decimal
    coupon_id: Optional[int] = None
    shipping_charges: Decimal
    net_total: Decimal
    tax: Decimal
    total: Decimal
    round_off: Decimal
    payable: Decimal


class Cart(CartTotals):
    items: List[CartItem] = []
