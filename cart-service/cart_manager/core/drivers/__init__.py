from .base import CartDriver, TOTAL_FIELDS
from .memory import MemoryCartDriver

__all__ = ["CartDriver", "MemoryCartDriver", "TOTAL_FIELDS"]
