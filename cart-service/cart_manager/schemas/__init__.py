from .cart import Cart, CartTotals
from .cart_item import CartItem, CartItemCreate

__all__ = ["Cart", "CartTotals", "CartItem", "CartItemCreate"]
