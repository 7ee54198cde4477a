import httpx
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..config import settings

logger = logging.getLogger(__name__)


@dataclass
class Product:
    """Товар каталога, который можно положить в корзину"""
    id: int
    name: str
    price: Decimal

    cart_source_type = "product"


class CatalogClient:
    """Клиент для взаимодействия с Catalog Service"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = base_url or settings.catalog_service_url
        self.timeout = timeout or settings.catalog_timeout

    async def get_product(self, product_id: int) -> Optional[Product]:
        """Получить товар из каталога"""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(f"{self.base_url}/products/{product_id}")

                if response.status_code == 200:
                    return self._to_product(response.json())
                elif response.status_code == 404:
                    logger.warning(f"Product {product_id} not found")
                    return None
                else:
                    logger.error(f"Error fetching product {product_id}: {response.status_code}")
                    return None

        except httpx.TimeoutException:
            logger.error(f"Timeout when fetching product {product_id}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error fetching product {product_id}: {e}")
            return None

    @staticmethod
    def _to_product(data: dict) -> Product:
        price = data.get("price")
        return Product(
            id=data["id"],
            name=data.get("name"),
            price=Decimal(str(price)) if price is not None else None,
        )
