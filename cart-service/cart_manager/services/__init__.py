from .cart_service import CartService, ProductNotFound
from .catalog_client import CatalogClient, Product
from .kafka_client import KafkaClient, kafka_client

__all__ = [
    "CartService",
    "ProductNotFound",
    "CatalogClient",
    "Product",
    "KafkaClient",
    "kafka_client"
]
