"""Display formatting for amounts: dot thousands grouping, comma decimals."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from accountant.config import get_settings


def format_amount(amount: Union[Decimal, int, float]) -> str:
    """Format as 1.234,56 (always two fraction digits)."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    # Python's grouping uses ',' and '.', so swap them afterwards
    grouped = f"{abs(value):,.2f}"
    return sign + grouped.replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(
    amount: Union[Decimal, int, float],
    symbol: Optional[str] = None,
) -> str:
    """Format with the configured currency symbol in front, e.g. ₺1.234,56."""
    if symbol is None:
        symbol = get_settings().app.currency_symbol
    return f"{symbol}{format_amount(amount)}"
