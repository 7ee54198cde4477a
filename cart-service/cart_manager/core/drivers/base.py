from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

# Поля итогов корзины в порядке сериализации
TOTAL_FIELDS = (
    "subtotal",
    "discount",
    "discount_percentage",
    "coupon_id",
    "shipping_charges",
    "net_total",
    "tax",
    "total",
    "round_off",
    "payable",
)


class CartDriver(ABC):
    """
    Контракт хранилища корзины.

    Корзина ничего не знает о том, где лежат ее данные: все чтения
    и записи идут через драйвер. Ошибки драйвера пробрасываются как есть;
    запись, которой нет в хранилище, дает CartRecordNotFound. Позиция
    без id еще не сохранена, операции над ней ничего не пишут.
    """

    @abstractmethod
    def load_cart(self, owner: str) -> Optional[Dict[str, Any]]:
        """Атрибуты корзины владельца вместе со списком items или None"""

    @abstractmethod
    def store_new_cart(self, owner: str, cart_data: Dict[str, Any]) -> None:
        """Сохраняет новую корзину вместе с позициями"""

    @abstractmethod
    def update_cart(self, cart_data: Dict[str, Any]) -> None:
        """Обновляет итоги существующей корзины (без позиций)"""

    @abstractmethod
    def add_cart_item(self, cart_id: Any, item_data: Dict[str, Any]) -> None:
        """Добавляет позицию в существующую корзину"""

    @abstractmethod
    def set_item_quantity(self, item_id: Any, quantity: int) -> None:
        """Устанавливает количество для позиции"""

    @abstractmethod
    def remove_item(self, item_id: Any) -> None:
        """Удаляет позицию"""
