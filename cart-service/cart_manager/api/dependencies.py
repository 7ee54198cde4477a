from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.cart_service import CartService
from ..services.catalog_client import CatalogClient
from ..services.kafka_client import KafkaClient, get_kafka_client

DEFAULT_SESSION_ID = "anonymous"


def get_current_user_or_session(x_session_id: Optional[str] = Header(None)) -> str:
    """ID сессии/пользователя, которому принадлежит корзина"""
    # Аутентификация живет в gateway, сюда приходит только заголовок
    return x_session_id or DEFAULT_SESSION_ID


def get_catalog_client() -> CatalogClient:
    """Dependency для получения CatalogClient"""
    return CatalogClient()


def get_cart_service(
        owner: str = Depends(get_current_user_or_session),
        db: Session = Depends(get_db),
        catalog_client: CatalogClient = Depends(get_catalog_client),
        events: KafkaClient = Depends(get_kafka_client)
) -> CartService:
    """Dependency для получения CartService"""
    return CartService(db, owner, catalog_client=catalog_client, events=events)
