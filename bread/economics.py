from decimal import Decimal, InvalidOperation, localcontext

from bread.config import DECIMALS, UNITS_PER_TOKEN


def parse_bread(amount) -> int:
    """
    Convert a whole-token amount ("1.5", 2, Decimal) to base units.
    Raises ValueError for negative values or more than DECIMALS fractional digits.
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid token amount: {amount!r}")

    if not value.is_finite() or value < 0:
        raise ValueError(f"Invalid token amount: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = 100
        units = value * UNITS_PER_TOKEN
    if units != units.to_integral_value():
        raise ValueError(f"Token amount has more than {DECIMALS} decimals: {amount!r}")

    return int(units)


def format_bread(units: int) -> str:
    """
    Render base units as a whole-token string without trailing zeros.
    """
    whole, fraction = divmod(int(units), UNITS_PER_TOKEN)
    if not fraction:
        return str(whole)
    digits = str(fraction).rjust(DECIMALS, "0").rstrip("0")
    return f"{whole}.{digits}"
