"""Template filters for displaying amounts in Indonesian Rupiah."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django import template

register = template.Library()


def format_idr(amount: Decimal | int | float | str | None) -> str:
    """Format an amount as "Rp 1.250.000" (dot thousands separator, no cents)."""
    try:
        value = Decimal(str(amount if amount is not None else 0))
    except InvalidOperation:
        return ""
    rounded = int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return f"{sign}Rp {abs(rounded):,}".replace(",", ".")


register.filter("idr", format_idr)
