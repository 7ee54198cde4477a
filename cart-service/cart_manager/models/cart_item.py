from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id"), nullable=False, index=True)

    # Ссылка на товарную сущность
    source_type = Column(String(100), nullable=False)
    source_id = Column(String(100), nullable=False)

    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)  # Цена на момент добавления
    quantity = Column(Integer, nullable=False, default=1)

    # Связь с корзиной
    cart = relationship("Cart", back_populates="items")
