import math

from cloofy.core.constants import MAX_SALE_QUANTITY
from cloofy.core.errors import InvalidQuantity

DEFAULT_SALE_QUANTITY = 1


def parse_quantity(value, *, default: int | None = DEFAULT_SALE_QUANTITY) -> int:
    """Coerce a loosely typed request value into a positive sale quantity.

    ``None`` falls back to ``default``; integral floats and digit strings are
    accepted up to ``MAX_SALE_QUANTITY``; everything else (bools, fractions,
    zero, negatives) is rejected.
    """
    if value is None:
        if default is None:
            raise InvalidQuantity(value)
        return default
    if isinstance(value, bool):
        raise InvalidQuantity(value)

    if isinstance(value, int):
        qty = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise InvalidQuantity(value)
        qty = int(value)
    elif isinstance(value, str):
        value_text = value.strip()
        try:
            qty = int(value_text)
        except ValueError:
            try:
                as_float = float(value_text)
            except ValueError:
                raise InvalidQuantity(value) from None
            if not math.isfinite(as_float) or not as_float.is_integer():
                raise InvalidQuantity(value)
            qty = int(as_float)
    else:
        raise InvalidQuantity(value)

    if qty <= 0:
        raise InvalidQuantity(value)
    if qty > MAX_SALE_QUANTITY:
        raise InvalidQuantity(value, f"Quantity cannot exceed {MAX_SALE_QUANTITY}")
    return qty
