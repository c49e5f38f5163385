"""Утилиты форматирования денежных сумм."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

_TWO_PLACES = Decimal("0.01")
_SYMBOLS = {"BRL": "R$", "USD": "US$", "EUR": "€", "COP": "COL$", "PAB": "B/."}


def _to_decimal(value: Any) -> Decimal | None:
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def format_money(value: Any, currency: str | None = "BRL") -> str:
    """Сумма в формате pt-BR: ``R$ 1.234,50``.

    Нечисловое значение возвращается как есть, ``None`` даёт ``-``.
    """

    amount = _to_decimal(value)
    if amount is None:
        return "-" if value in (None, "") else f"{currency or ''} {value}".strip()
    amount = amount.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    formatted = f"{amount:,.2f}".replace(",", "\x00").replace(".", ",").replace("\x00", ".")
    symbol = _SYMBOLS.get((currency or "").upper(), currency or "")
    return f"{symbol} {formatted}".strip()
