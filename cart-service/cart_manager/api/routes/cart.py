import logging
from fastapi import APIRouter, Depends, HTTPException

from ...core.exceptions import IndexOutOfRange, MissingName, MissingPrice, NegativePrice
from ...schemas.cart import Cart
from ...schemas.cart_item import CartItemCreate
from ...services.cart_service import CartService, ProductNotFound
from ..dependencies import get_cart_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/cart", response_model=Cart)
async def get_cart(cart_service: CartService = Depends(get_cart_service)):
    """Получение текущей корзины пользователя"""
    return cart_service.get_cart()


@router.post("/cart/items", response_model=Cart)
async def add_item_to_cart(
        item: CartItemCreate,
        cart_service: CartService = Depends(get_cart_service)
):
    """Добавление товара в корзину"""
    try:
        return await cart_service.add_product(item.product_id)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (MissingName, MissingPrice, NegativePrice) as e:
        logger.warning(f"Product {item.product_id} rejected: {e}")
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/cart/items/{index}", response_model=Cart)
async def remove_item_from_cart(
        index: int,
        cart_service: CartService = Depends(get_cart_service)
):
    """Удаление позиции из корзины"""
    try:
        return await cart_service.remove_at(index)
    except IndexOutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/cart/items/{index}/increment", response_model=Cart)
async def increment_item_quantity(
        index: int,
        cart_service: CartService = Depends(get_cart_service)
):
    """Увеличение количества позиции"""
    try:
        return await cart_service.increment_quantity_at(index)
    except IndexOutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/cart/items/{index}/decrement", response_model=Cart)
async def decrement_item_quantity(
        index: int,
        cart_service: CartService = Depends(get_cart_service)
):
    """Уменьшение количества позиции (последняя единица удаляет позицию)"""
    try:
        return await cart_service.decrement_quantity_at(index)
    except IndexOutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/cart", response_model=Cart)
async def clear_cart(cart_service: CartService = Depends(get_cart_service)):
    """Очистка корзины"""
    return await cart_service.clear_cart()
