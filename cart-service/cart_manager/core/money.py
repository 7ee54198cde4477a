from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Optional, Union

from .config import RoundOff

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
TENTH = Decimal("0.1")
UNIT = Decimal("1")
TWO = Decimal("2")
ZERO = Decimal("0.00")


def to_decimal(value: Optional[Number]) -> Decimal:
    """Приводит значение к Decimal (float через str, чтобы не тащить двоичный хвост)"""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Number, precision: Decimal = CENT) -> Decimal:
    """Округление half-away-from-zero до заданной точности"""
    return to_decimal(value).quantize(precision, rounding=ROUND_HALF_UP)


def _to_five_cents(total: Decimal) -> Decimal:
    return round_money(total * TWO, TENTH) / TWO


def _to_ten_cents(total: Decimal) -> Decimal:
    return round_money(total, TENTH)


def _to_half(total: Decimal) -> Decimal:
    return round_money(total * TWO, UNIT) / TWO


def _to_whole(total: Decimal) -> Decimal:
    return round_money(total, UNIT)


ROUNDING_POLICIES: Dict[RoundOff, Callable[[Decimal], Decimal]] = {
    RoundOff.FIVE_CENTS: _to_five_cents,
    RoundOff.TEN_CENTS: _to_ten_cents,
    RoundOff.HALF: _to_half,
    RoundOff.WHOLE: _to_whole,
}


def apply_round_off(total: Decimal, round_off_to: Optional[RoundOff]) -> Decimal:
    """Возвращает сумму к оплате; без политики округления это сам total"""
    policy = ROUNDING_POLICIES.get(round_off_to) if round_off_to is not None else None
    if policy is None:
        return round_money(total)
    return round_money(policy(total))
