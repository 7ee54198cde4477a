from sqlalchemy import Column, Integer, String, Numeric, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base


class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    owner = Column(String, unique=True, index=True, nullable=False)  # session_id или user_id

    # Итоги корзины
    subtotal = Column(Numeric(10, 2), default=0)
    discount = Column(Numeric(10, 2), default=0)
    discount_percentage = Column(Numeric(5, 2), default=0)
    coupon_id = Column(Integer, nullable=True)
    shipping_charges = Column(Numeric(10, 2), default=0)
    net_total = Column(Numeric(10, 2), default=0)
    tax = Column(Numeric(10, 2), default=0)
    total = Column(Numeric(10, 2), default=0)
    round_off = Column(Numeric(10, 2), default=0)
    payable = Column(Numeric(10, 2), default=0)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Позиции в порядке добавления
    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.id"
    )
