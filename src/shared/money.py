"""Rupiah price formatting used everywhere a price is shown.

Amounts are whole rupiah. The rendering follows the ``id-ID`` locale:
``Rp`` symbol, a non-breaking space, ``.`` as the thousands separator and
no fractional digits, e.g. ``Rp 13.000``.
"""

CURRENCY_CODE = "IDR"
CURRENCY_SYMBOL = "Rp"
THOUSANDS_SEPARATOR = "."
NBSP = "\u00a0"


def format_price(amount: int) -> str:
    """Format an integer rupiah amount for display."""
    grouped = f"{abs(int(amount)):,}".replace(",", THOUSANDS_SEPARATOR)
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{NBSP}{grouped}"
