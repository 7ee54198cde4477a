from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from .exceptions import MissingName, MissingPrice, NegativePrice
from .money import to_decimal


class CartItem:
    """
    Позиция корзины.

    Создается либо из товарной сущности (при добавлении в корзину),
    либо из ранее сохраненной записи (при загрузке корзины).
    """

    def __init__(
            self,
            source_type: str,
            source_id: Any,
            name: str,
            price: Decimal,
            quantity: int = 1,
            id: Optional[Any] = None
    ):
        self.id = id
        self.source_type = source_type
        # В хранилище source_id лежит строкой, держим ту же форму и в памяти
        self.source_id = str(source_id)
        self.name = name
        self.price = price
        self.quantity = quantity

    @classmethod
    def from_entity(cls, entity: Any) -> "CartItem":
        """Создает позицию из товарной сущности"""
        source_type = cls.resolve_source_type(entity)

        return cls(
            source_type=source_type,
            source_id=entity.id,
            name=cls._resolve_name(entity, source_type),
            price=cls._resolve_price(entity, source_type),
        )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CartItem":
        """Восстанавливает позицию из сохраненной записи"""
        return cls(
            id=record.get("id"),
            source_type=record["source_type"],
            source_id=record["source_id"],
            name=record["name"],
            price=to_decimal(record["price"]),
            quantity=int(record["quantity"]),
        )

    @staticmethod
    def resolve_source_type(entity: Any) -> str:
        """Дискриминатор типа: cart_source_type сущности или имя ее класса"""
        return getattr(entity, "cart_source_type", None) or type(entity).__name__

    @staticmethod
    def _resolve_name(entity: Any, source_type: str) -> str:
        get_name = getattr(entity, "get_name", None)
        if callable(get_name):
            name = get_name()
        else:
            name = getattr(entity, "name", None)

        if not name:
            raise MissingName(source_type)
        return str(name)

    @staticmethod
    def _resolve_price(entity: Any, source_type: str) -> Decimal:
        get_price = getattr(entity, "get_price", None)
        if callable(get_price):
            price = get_price()
        else:
            price = getattr(entity, "price", None)

        if price is None:
            raise MissingPrice(source_type)

        price = to_decimal(price)
        if price < 0:
            raise NegativePrice(source_type, price)
        return price

    def matches(self, source_type: str, source_id: Any) -> bool:
        return self.source_type == source_type and self.source_id == str(source_id)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация позиции"""
        data = {
            "source_type": self.source_type,
            "source_id": self.source_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
        }

        if self.id is not None:
            data["id"] = self.id

        return data

    def __repr__(self) -> str:
        return (
            f"CartItem(id={self.id!r}, source_type={self.source_type!r}, "
            f"source_id={self.source_id!r}, quantity={self.quantity})"
        )
