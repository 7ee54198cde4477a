import logging
from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..core.cart import Cart
from ..core.config import CartConfig
from ..core.drivers.base import CartDriver
from ..core.drivers.database import DatabaseCartDriver
from .catalog_client import CatalogClient
from .kafka_client import KafkaClient, kafka_client

logger = logging.getLogger(__name__)


class ProductNotFound(Exception):
    """Товара нет в каталоге"""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class CartService:
    """
    Работа с корзиной в рамках одного запроса.

    Собирает Cart для владельца поверх драйвера хранилища, берет товары
    из каталога и публикует события об изменении корзины. Все записи одной
    операции фиксируются одним commit; при ошибке сессия откатывается.
    """

    def __init__(
            self,
            db: Optional[Session],
            owner: str,
            catalog_client: Optional[CatalogClient] = None,
            events: Optional[KafkaClient] = None,
            config: Optional[CartConfig] = None,
            driver: Optional[CartDriver] = None
    ):
        self.db = db
        self.owner = owner
        self.catalog_client = catalog_client or CatalogClient()
        self.events = events or kafka_client
        self.driver = driver or DatabaseCartDriver(db)
        self.cart = Cart(self.driver, owner, config or settings.cart_config())

    def get_cart(self) -> Dict[str, Any]:
        """Текущее состояние корзины"""
        return self.cart.to_dict()

    async def add_product(self, product_id: int) -> Dict[str, Any]:
        """Добавить товар каталога в корзину"""
        product = await self.catalog_client.get_product(product_id)
        if product is None:
            raise ProductNotFound(product_id)

        cart_data = self._apply(f"add product {product_id}", self.cart.add_item, product)
        logger.info(f"Added product {product_id} to cart of {self.owner}")

        await self._publish_cart_updated("item_added", cart_data)
        return cart_data

    async def remove_at(self, index: int) -> Dict[str, Any]:
        """Удалить позицию корзины"""
        cart_data = self._apply(f"remove item #{index}", self.cart.remove_at, index)
        logger.info(f"Removed item #{index} from cart of {self.owner}")

        await self._publish_cart_updated("item_removed", cart_data)
        return cart_data

    async def increment_quantity_at(self, index: int) -> Dict[str, Any]:
        cart_data = self._apply(f"increment item #{index}", self.cart.increment_quantity_at, index)
        await self._publish_cart_updated("quantity_incremented", cart_data)
        return cart_data

    async def decrement_quantity_at(self, index: int) -> Dict[str, Any]:
        cart_data = self._apply(f"decrement item #{index}", self.cart.decrement_quantity_at, index)
        await self._publish_cart_updated("quantity_decremented", cart_data)
        return cart_data

    async def clear_cart(self) -> Dict[str, Any]:
        """Очистить корзину"""
        items_count = self.cart.item_count
        cart_data = self._apply("clear cart", self.cart.clear)

        logger.info(f"🧹 Cart cleared for {self.owner}: {items_count} items removed")

        await self.events.publish_event(
            topic="cart.cleared",
            event_type="cart_cleared",
            payload={"owner": self.owner, "cart_id": cart_data.get("id"), "items_removed": items_count},
            key=self.owner
        )
        return cart_data

    def _apply(self, action: str, operation: Callable[..., Dict[str, Any]], *args) -> Dict[str, Any]:
        try:
            cart_data = operation(*args)
            if self.db is not None:
                self.db.commit()
            return cart_data
        except Exception as e:
            if self.db is not None:
                self.db.rollback()
            logger.error(f"❌ Failed to {action} for {self.owner}: {e}")
            raise

    async def _publish_cart_updated(self, action: str, cart_data: Dict[str, Any]) -> None:
        payload = {
            "owner": self.owner,
            "cart_id": cart_data.get("id"),
            "action": action,
            "total_items": sum(item["quantity"] for item in cart_data["items"]),
            "payable": cart_data["payable"],
        }

        await self.events.publish_event(
            topic=settings.kafka_cart_topic,
            event_type="cart_updated",
            payload=payload,
            key=self.owner
        )
