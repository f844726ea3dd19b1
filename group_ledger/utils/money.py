from decimal import Decimal, ROUND_HALF_UP, getcontext, localcontext

ZERO = Decimal("0")
CENTS = Decimal("0.01")

# Bounds for money fields accepted from callers
MAX_DIGITS = 20
DECIMAL_PLACES = 6


def round_decimal(value: Decimal, precision: Decimal = CENTS) -> Decimal:
    """
    Round a Decimal value to the specified precision, halves rounding up.

    The context precision is widened to fit the rounded result, so large
    amounts don't overflow the default 28 significant digits.

    Example:
        >>> round_decimal(Decimal("43.335"))
        Decimal('43.34')
    """
    needed = value.adjusted() - precision.as_tuple().exponent + 2
    with localcontext() as ctx:
        ctx.prec = max(getcontext().prec, needed)
        return value.quantize(precision, rounding=ROUND_HALF_UP)


def zero(precision: Decimal = CENTS) -> Decimal:
    """Zero carrying the given number of decimal places"""
    return ZERO.quantize(precision)
