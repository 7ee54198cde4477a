import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from .cart_item import CartItem
from .config import CartConfig
from .drivers.base import TOTAL_FIELDS, CartDriver
from .exceptions import IndexOutOfRange
from .money import ZERO, apply_round_off, round_money, to_decimal

logger = logging.getLogger(__name__)


class Cart:
    """
    Корзина покупок.

    Хранит упорядоченный список позиций и производные итоги. Любое
    изменение состава корзины пересчитывает итоги целиком и только
    после этого передает новое состояние драйверу хранилища.
    """

    def __init__(self, driver: CartDriver, owner: str, config: Optional[CartConfig] = None):
        self._driver = driver
        self._owner = owner
        self._config = config or CartConfig()

        self._id = None
        self._items: List[CartItem] = []

        self._subtotal = ZERO
        self._discount = ZERO
        self._discount_percentage = ZERO
        self._coupon_id = None
        self._shipping_charges = ZERO
        self._net_total = ZERO
        self._tax = ZERO
        self._total = ZERO
        self._round_off = ZERO
        self._payable = ZERO

        cart_data = self._driver.load_cart(owner)
        if cart_data:
            self._set_items(cart_data.get("items") or [])
            self._set_properties(cart_data)

    def _set_items(self, records) -> None:
        for record in records:
            self._items.append(CartItem.from_record(record))

    def _set_properties(self, attributes: Dict[str, Any]) -> None:
        # Сохраненному состоянию доверяем как есть, без пересчета
        self._id = attributes.get("id")
        for field in TOTAL_FIELDS:
            if field not in attributes:
                continue
            value = attributes[field]
            if field == "coupon_id":
                self._coupon_id = value
            else:
                setattr(self, f"_{field}", to_decimal(value))

    # Публичные операции

    def add_item(self, entity: Any) -> Dict[str, Any]:
        """Добавляет сущность в корзину или увеличивает количество уже добавленной"""
        index = self._find_item(entity)

        if index is not None:
            self._update_quantity(index, self._items[index].quantity + 1)
            is_new_item = False
        else:
            self._items.append(CartItem.from_entity(entity))
            is_new_item = True

        return self._cart_updates(is_new_item)

    def remove_at(self, index: int) -> Dict[str, Any]:
        """Удаляет позицию по индексу"""
        item = self._item_at(index)

        self._driver.remove_item(item.id)
        del self._items[index]

        return self._cart_updates()

    def increment_quantity_at(self, index: int) -> Dict[str, Any]:
        """Увеличивает количество позиции на 1"""
        item = self._item_at(index)
        self._update_quantity(index, item.quantity + 1)

        return self._cart_updates()

    def decrement_quantity_at(self, index: int) -> Dict[str, Any]:
        """Уменьшает количество позиции на 1, последнюю единицу удаляет"""
        item = self._item_at(index)

        if item.quantity == 1:
            return self.remove_at(index)

        self._update_quantity(index, item.quantity - 1)

        return self._cart_updates()

    def clear(self) -> Dict[str, Any]:
        """Удаляет все позиции"""
        for item in self._items:
            self._driver.remove_item(item.id)
        self._items = []

        self._update_totals()
        if self._id is not None:
            self._driver.update_cart(self.to_dict(with_items=False))

        return self.to_dict()

    # Внутренняя кухня

    def _find_item(self, entity: Any) -> Optional[int]:
        source_type = CartItem.resolve_source_type(entity)
        for index, item in enumerate(self._items):
            if item.matches(source_type, entity.id):
                return index
        return None

    def _item_at(self, index: int) -> CartItem:
        if not 0 <= index < len(self._items):
            raise IndexOutOfRange(index, len(self._items))
        return self._items[index]

    def _update_quantity(self, index: int, quantity: int) -> None:
        item = self._items[index]
        item.quantity = quantity
        self._driver.set_item_quantity(item.id, item.quantity)

    def _cart_updates(self, is_new_item: bool = False, keep_discount: bool = False) -> Dict[str, Any]:
        self._update_totals(keep_discount)
        self._store_cart_data(is_new_item)

        return self.to_dict()

    def _update_totals(self, keep_discount: bool = False) -> None:
        """Пересчитывает все итоги корзины"""
        self._set_subtotal()

        if not keep_discount:
            self._discount = ZERO
            self._discount_percentage = ZERO
            self._coupon_id = None

        self._set_shipping_charges()

        self._net_total = round_money(self._subtotal - self._discount + self._shipping_charges)
        self._tax = round_money(self._net_total * self._config.tax_percentage / Decimal("100"))
        self._total = round_money(self._net_total + self._tax)

        self._set_payable_and_round_off()

    def _set_subtotal(self) -> None:
        self._subtotal = round_money(
            sum((item.price * item.quantity for item in self._items), Decimal("0"))
        )

    def _set_shipping_charges(self) -> None:
        self._shipping_charges = ZERO
        order_amount = self._subtotal - self._discount

        if 0 < order_amount < self._config.shipping_charges_threshold:
            if self._config.shipping_charges > 0:
                self._shipping_charges = round_money(self._config.shipping_charges)

    def _set_payable_and_round_off(self) -> None:
        self._payable = apply_round_off(self._total, self._config.round_off_to)
        self._round_off = round_money(self._total - self._payable)

    def _store_cart_data(self, is_new_item: bool = False) -> None:
        if self._id is None:
            self._driver.store_new_cart(self._owner, self.to_dict())
            logger.debug(f"Stored new cart for owner {self._owner}")
            return

        self._driver.update_cart(self.to_dict(with_items=False))

        if is_new_item:
            self._driver.add_cart_item(self._id, self._items[-1].to_dict())

    # Представление

    def to_dict(self, with_items: bool = True) -> Dict[str, Any]:
        """Снимок корзины: итоги, id (если есть) и позиции"""
        cart_data = {field: getattr(self, f"_{field}") for field in TOTAL_FIELDS}

        if self._id is not None:
            cart_data["id"] = self._id

        if with_items:
            cart_data["items"] = [item.to_dict() for item in self._items]

        return cart_data

    @property
    def id(self):
        return self._id

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def items(self) -> Tuple[CartItem, ...]:
        # Копии: снаружи позиции корзины не меняются
        return tuple(CartItem.from_record(item.to_dict()) for item in self._items)

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def subtotal(self) -> Decimal:
        return self._subtotal

    @property
    def discount(self) -> Decimal:
        return self._discount

    @property
    def discount_percentage(self) -> Decimal:
        return self._discount_percentage

    @property
    def coupon_id(self):
        return self._coupon_id

    @property
    def shipping_charges(self) -> Decimal:
        return self._shipping_charges

    @property
    def net_total(self) -> Decimal:
        return self._net_total

    @property
    def tax(self) -> Decimal:
        return self._tax

    @property
    def total(self) -> Decimal:
        return self._total

    @property
    def round_off(self) -> Decimal:
        return self._round_off

    @property
    def payable(self) -> Decimal:
        return self._payable
