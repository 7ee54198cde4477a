import copy
import itertools
import logging
from typing import Any, Dict, Optional

from ..exceptions import CartRecordNotFound
from .base import CartDriver

logger = logging.getLogger(__name__)


class MemoryCartDriver(CartDriver):
    """Хранилище корзин в памяти процесса (тесты, локальный запуск)"""

    def __init__(self):
        self.carts: Dict[Any, Dict[str, Any]] = {}
        self.owners: Dict[str, Any] = {}
        self._cart_ids = itertools.count(1)
        self._item_ids = itertools.count(1)

    def load_cart(self, owner: str) -> Optional[Dict[str, Any]]:
        cart_id = self.owners.get(owner)
        if cart_id is None:
            return None
        return copy.deepcopy(self.carts[cart_id])

    def store_new_cart(self, owner: str, cart_data: Dict[str, Any]) -> None:
        cart_id = next(self._cart_ids)
        items = cart_data.get("items", [])

        stored = {key: value for key, value in cart_data.items() if key != "items"}
        stored["id"] = cart_id
        stored["items"] = [dict(item, id=next(self._item_ids)) for item in items]

        self.carts[cart_id] = stored
        self.owners[owner] = cart_id
        logger.info(f"Cart {cart_id} created for owner {owner}")

    def update_cart(self, cart_data: Dict[str, Any]) -> None:
        stored = self._get_cart(cart_data["id"])
        stored.update({key: value for key, value in cart_data.items() if key != "items"})

    def add_cart_item(self, cart_id: Any, item_data: Dict[str, Any]) -> None:
        self._get_cart(cart_id)["items"].append(dict(item_data, id=next(self._item_ids)))

    def set_item_quantity(self, item_id: Any, quantity: int) -> None:
        if item_id is None:
            return

        item = self._find_item(item_id)
        if item is None:
            raise CartRecordNotFound("Cart item", item_id)
        item["quantity"] = quantity

    def remove_item(self, item_id: Any) -> None:
        if item_id is None:
            return
        if self._find_item(item_id) is None:
            raise CartRecordNotFound("Cart item", item_id)

        for cart in self.carts.values():
            cart["items"] = [item for item in cart["items"] if item["id"] != item_id]

    def _get_cart(self, cart_id: Any) -> Dict[str, Any]:
        if cart_id not in self.carts:
            raise CartRecordNotFound("Cart", cart_id)
        return self.carts[cart_id]

    def _find_item(self, item_id: Any) -> Optional[Dict[str, Any]]:
        for cart in self.carts.values():
            for item in cart["items"]:
                if item["id"] == item_id:
                    return item
        return None
