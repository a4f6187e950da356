"""
Conversions between lamports and SOL.

All arithmetic goes through :class:`decimal.Decimal`; floats are accepted as
input but are converted via their string form first.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Union

__all__ = [
    "LAMPORTS_PER_SOL",
    "SOL_DECIMALS",
    "format_decimal",
    "lamports_to_sol",
    "sol_to_lamports",
    "to_decimal",
    "to_decimal_unit",
    "to_smallest_unit",
]

SOL_DECIMALS = 9
LAMPORTS_PER_SOL = 10**SOL_DECIMALS

Amount = Union[Decimal, str, int, float]


def to_decimal(amount: Amount) -> Decimal:
    """Coerce ``amount`` to a finite :class:`Decimal`."""
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, float):
        value = Decimal(repr(amount))
    else:
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation as exc:
            raise ValueError(f"'{amount}' is not a valid decimal amount") from exc
    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got {amount!r}")
    return value


def to_smallest_unit(amount: Amount, exponent: int = SOL_DECIMALS) -> int:
    """
    Scale a human-denominated amount to integer smallest units.

    Digits beyond ``exponent`` fractional places are rounded half-up.
    """
    value = to_decimal(amount)
    if value < 0:
        raise ValueError(f"Amount must not be negative, got {value}")
    scaled = value.scaleb(exponent)
    return int(scaled.to_integral_value(rounding=ROUND_HALF_UP))


def to_decimal_unit(smallest_unit: Union[int, str], exponent: int = SOL_DECIMALS) -> Decimal:
    try:
        integral = int(smallest_unit)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"'{smallest_unit}' is not an integer amount of smallest units"
        ) from exc
    return Decimal(integral).scaleb(-exponent)


def format_decimal(amount: Amount, precision: int = 4) -> str:
    """Render ``amount`` with exactly ``precision`` fractional digits."""
    if precision < 0:
        raise ValueError("precision must not be negative")
    value = to_decimal(amount)
    with localcontext() as ctx:
        # Room for every integer digit plus the requested fraction.
        ctx.prec = max(ctx.prec, max(value.adjusted(), 0) + precision + 2)
        quantum = Decimal(1).scaleb(-precision)
        return format(value.quantize(quantum, rounding=ROUND_HALF_UP), "f")


def sol_to_lamports(sol: Amount) -> int:
    return to_smallest_unit(sol, SOL_DECIMALS)


def lamports_to_sol(lamports: Union[int, str]) -> Decimal:
    return to_decimal_unit(lamports, SOL_DECIMALS)
