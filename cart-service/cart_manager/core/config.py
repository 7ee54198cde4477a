import logging
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class RoundOff(str, Enum):
    """Шаг округления суммы к оплате"""
    FIVE_CENTS = "0.05"
    TEN_CENTS = "0.1"
    HALF = "0.5"
    WHOLE = "1"


def parse_round_off(value: Any) -> Optional[RoundOff]:
    """
    Приводит шаг округления к RoundOff.

    Принимает числа и строки (0.5, 1, "1.0"); неизвестный шаг означает
    отсутствие округления.
    """
    if value is None or isinstance(value, RoundOff):
        return value
    if isinstance(value, str) and not value.strip():
        return None

    try:
        step = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        logger.warning(f"Unrecognised round-off step {value!r}, payable will not be rounded")
        return None

    for round_off in RoundOff:
        if Decimal(round_off.value) == step:
            return round_off

    logger.warning(f"Unsupported round-off step {value!r}, payable will not be rounded")
    return None


class CartConfig(BaseModel):
    """Настройки расчета итогов корзины"""

    tax_percentage: Decimal = Field(Decimal("0"), ge=0)
    shipping_charges_threshold: Decimal = Decimal("0")
    shipping_charges: Decimal = Decimal("0")
    round_off_to: Optional[RoundOff] = None

    class Config:
        frozen = True

    @field_validator("round_off_to", mode="before")
    @classmethod
    def _normalize_round_off(cls, value):
        return parse_round_off(value)
