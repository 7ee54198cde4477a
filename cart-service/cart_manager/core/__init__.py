from .cart import Cart
from .cart_item import CartItem
from .config import CartConfig, RoundOff
from .drivers import CartDriver, MemoryCartDriver
from .exceptions import (
    CartError,
    MissingName,
    MissingPrice,
    NegativePrice,
    IndexOutOfRange,
    CartRecordNotFound,
)

__all__ = [
    "Cart",
    "CartItem",
    "CartConfig",
    "RoundOff",
    "CartDriver",
    "MemoryCartDriver",
    "CartError",
    "MissingName",
    "MissingPrice",
    "NegativePrice",
    "IndexOutOfRange",
    "CartRecordNotFound",
]
