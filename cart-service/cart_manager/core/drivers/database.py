import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models.cart import Cart as CartModel
from ...models.cart_item import CartItem as CartItemModel
from ..exceptions import CartRecordNotFound
from .base import TOTAL_FIELDS, CartDriver

logger = logging.getLogger(__name__)

ITEM_FIELDS = ("source_type", "source_id", "name", "price", "quantity")


class DatabaseCartDriver(CartDriver):
    """
    Хранилище корзин в БД через SQLAlchemy-сессию.

    Драйвер только отправляет изменения в БД (flush). Фиксирует их один раз
    за операцию корзины владелец сессии (CartService): commit после успешной
    операции, rollback при любой ошибке.
    """

    def __init__(self, db: Session):
        self.db = db

    def load_cart(self, owner: str) -> Optional[Dict[str, Any]]:
        cart = self.db.query(CartModel).filter(CartModel.owner == owner).first()
        if not cart:
            return None

        cart_data = {field: getattr(cart, field) for field in TOTAL_FIELDS}
        cart_data["id"] = cart.id
        cart_data["items"] = [self._item_to_dict(item) for item in cart.items]
        return cart_data

    def store_new_cart(self, owner: str, cart_data: Dict[str, Any]) -> None:
        cart = CartModel(owner=owner, **self._totals(cart_data))
        for item_data in cart_data.get("items", []):
            cart.items.append(self._build_item(item_data))

        self.db.add(cart)
        self._flush(f"store new cart for owner {owner}")
        logger.info(f"Cart {cart.id} created for owner {owner}")

    def update_cart(self, cart_data: Dict[str, Any]) -> None:
        cart = self._get(CartModel, cart_data["id"], "Cart")

        for field, value in self._totals(cart_data).items():
            setattr(cart, field, value)
        self._flush(f"update cart {cart.id}")

    def add_cart_item(self, cart_id: Any, item_data: Dict[str, Any]) -> None:
        item = self._build_item(item_data)
        item.cart_id = cart_id

        self.db.add(item)
        self._flush(f"add item to cart {cart_id}")

    def set_item_quantity(self, item_id: Any, quantity: int) -> None:
        # Позиция еще не сохранена: писать нечего
        if item_id is None:
            return

        item = self._get(CartItemModel, item_id, "Cart item")
        item.quantity = quantity
        self._flush(f"set quantity of item {item_id}")

    def remove_item(self, item_id: Any) -> None:
        if item_id is None:
            return

        item = self._get(CartItemModel, item_id, "Cart item")
        self.db.delete(item)
        self._flush(f"remove item {item_id}")

    def _get(self, model, record_id: Any, entity: str):
        record = self.db.get(model, record_id)
        if record is None:
            logger.error(f"❌ {entity} {record_id} not found in storage")
            raise CartRecordNotFound(entity, record_id)
        return record

    def _flush(self, action: str) -> None:
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to {action}: {e}")
            raise

    @staticmethod
    def _totals(cart_data: Dict[str, Any]) -> Dict[str, Any]:
        return {field: cart_data[field] for field in TOTAL_FIELDS if field in cart_data}

    @staticmethod
    def _build_item(item_data: Dict[str, Any]) -> CartItemModel:
        return CartItemModel(
            source_type=item_data["source_type"],
            source_id=str(item_data["source_id"]),
            name=item_data["name"],
            price=item_data["price"],
            quantity=item_data["quantity"],
        )

    @staticmethod
    def _item_to_dict(item: CartItemModel) -> Dict[str, Any]:
        item_data = {field: getattr(item, field) for field in ITEM_FIELDS}
        item_data["id"] = item.id
        return item_data
