from __future__ import annotations

import re

from estimate_wizard.core.config import settings


def format_currency(amount: int, symbol: str | None = None) -> str:
    """Thousands-grouped amount, e.g. 1800 -> "$1,800"."""
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    return f"{symbol}{amount:,}"


def format_cost_range(minimum: int, maximum: int, symbol: str | None = None) -> str:
    if minimum == maximum:
        return format_currency(minimum, symbol)
    return f"{format_currency(minimum, symbol)} - {format_currency(maximum, symbol)}"


def slugify_category_id(title: str) -> str:
    """"Home Renovations" -> "home-renovations"."""
    slug = re.sub(r"\s+", "-", title.strip().lower())
    return re.sub(r"[^a-z0-9-]", "", slug)
