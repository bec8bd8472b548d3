"""Money amount parsing."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from .exceptions import InvalidAmountError

CENT = Decimal("0.01")


def to_amount(value: Decimal | int | float | str) -> Decimal:
    """Coerce ``value`` to a Decimal with at most two decimal places.

    Floats go through ``str`` so ``7.5`` becomes ``Decimal("7.5")`` rather
    than its binary expansion.
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        if not amount.is_finite():
            raise InvalidAmountError(f"Invalid amount: {value!r}")
        quantized = amount.quantize(CENT)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from exc

    if amount != quantized:
        raise InvalidAmountError("Amounts support at most two decimal places")
    return quantized


__all__ = ["CENT", "to_amount"]
