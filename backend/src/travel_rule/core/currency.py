"""Static currency conversion and formatting helpers.

Rates come from settings and are expressed as units of currency per 1 USD.
"""

from __future__ import annotations

from typing import Mapping, Optional

CURRENCY_SYMBOLS = {"ZAR": "R", "EUR": "€", "USD": "$"}


def convert_to_usd(amount: float, currency: str, rates: Mapping[str, float]) -> Optional[float]:
    rate = rates.get(currency)
    if not rate:
        return None
    return amount / rate


def convert_from_usd(amount: float, currency: str, rates: Mapping[str, float]) -> Optional[float]:
    rate = rates.get(currency)
    if not rate:
        return None
    return amount * rate


def currency_symbol(currency: str) -> str:
    return CURRENCY_SYMBOLS.get(currency, currency)


def format_currency(amount: float, currency: str) -> str:
    return f"{currency} {amount:,.2f}"


def format_threshold(threshold: float, currency: str) -> str:
    if threshold == 0:
        return f"{currency} 0 (all transfers)"
    return f"{currency} {threshold:,g}"


__all__ = [
    "convert_from_usd",
    "convert_to_usd",
    "currency_symbol",
    "format_currency",
    "format_threshold",
]
