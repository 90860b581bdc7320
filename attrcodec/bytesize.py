"""
Byte quantities to and from human readable strings.

Formats an integer byte count as "12 KiB" or "1.5 GB" using one of the unit tables
from attrcodec.units, and parses such strings (or (number, unit) pairs) back into an
integer byte count.

Parsing follows a permissive input policy: strings without a leading number yield
None instead of raising, so the functions can sit directly behind form inputs.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import re
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidArgumentError
from .units import COMBINED, KbSize, bytes_conf, canonical_unit, select_table
from .validators import validate_precision

# @formatter:off

_NUMBER_RE = re.compile(r"\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))")
_UNIT_RE = re.compile(r"([kmgtpezy]?i?b)\s*$", re.IGNORECASE)

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def format_bytes(
        n: int | float,
        unit: str | None = None,
        precision: int | None = None,
        policy: KbSize | str | int | None = None,
) -> str:
    """
    Format a byte count as a human readable string.

    With an explicit unit the count is divided by that unit's multiplier (1 if the unit is
    unknown to the selected table) and rendered with exactly `precision` decimals.

    Without a unit the largest unit not exceeding the count is chosen. The quotient is
    truncated, not rounded, to `precision` decimals and an all-zero fraction is dropped.
    Counts below one byte are returned as a plain number.

    Args:
        n: Number of bytes.
        unit: Unit to express the count in, e.g. "KiB". Case-insensitive.
        precision: Decimal digits; defaults to bytes_conf.precision (0).
        policy: kb-size policy token; defaults to bytes_conf.policy.

    Returns:
        String like "12 KiB".

    Raises:
        TypeError: If n is not int or float.
        InvalidArgumentError: If n is infinite or NaN.
        InvalidArgumentError: If precision is outside [0, 18].

    Examples:
        >>> format_bytes(900)
        '900 B'
        >>> format_bytes(12345)
        '12 KiB'
        >>> format_bytes(9999999999, precision=2)
        '9.31 GiB'
        >>> format_bytes(123456789, "KiB", precision=1)
        '120563.3 KiB'
    """
    if isinstance(n, bool) or not isinstance(n, (int, float)):
        raise TypeError(f"byte count must be int | float, got {type(n)}")
    if not math.isfinite(n):
        raise InvalidArgumentError(f"byte count must be finite, got {n!r}")
    precision = validate_precision(bytes_conf.precision if precision is None else precision)
    table = select_table(bytes_conf.policy if policy is None else policy)

    if unit is not None:
        key = canonical_unit(unit)
        if key in table:
            return f"{n / table[key]:.{precision}f} {key}"
        return f"{n:.{precision}f} {unit}"

    for name, multiplier in sorted(table.items(), key=lambda item: -item[1]):
        if n >= multiplier:
            return f"{_truncate(Decimal(n) / multiplier, precision)} {name}"
    return str(n)


def parse_bytes(
        value: str | int | float | Sequence,
        policy: KbSize | str | int | None = None,
        precision: int = 2,
) -> int | None:
    """
    Parse a human readable byte quantity into an integer number of bytes.

    Accepts "1.5 KiB", "1kb", "2048", a (number, unit) pair, or a plain number of bytes.
    Units are matched case-insensitively; a unit missing from the policy table is looked up
    in the combined table, an unrecognized or absent unit means bytes.

    The number keeps `precision` decimal digits through the multiplication, then the result
    is truncated to whole bytes: int(number * 10**precision) * multiplier // 10**precision.

    Returns:
        Number of bytes, or None when the string holds no leading number or the
        number is infinite or NaN.

    Raises:
        TypeError: If value is of an unsupported type.
        InvalidArgumentError: If precision is outside [0, 18].

    Examples:
        >>> parse_bytes("1.5 KiB")
        1536
        >>> parse_bytes("1 gb", policy="decimal")
        1000000000
        >>> parse_bytes("1kb", policy=1024)
        1024
        >>> parse_bytes((2, "kib"))
        2048
    """
    precision = validate_precision(precision)

    if isinstance(value, bool):
        raise TypeError("byte quantity must not be bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number, unit = str(value), None
    elif isinstance(value, str):
        match = _NUMBER_RE.match(value)
        if match is None:
            return None
        number = match.group(1)
        unit_match = _UNIT_RE.search(value, match.end())
        unit = unit_match.group(1) if unit_match else None
    elif isinstance(value, (tuple, list)) and len(value) == 2:
        number, unit = value
        number = str(number)
    else:
        raise TypeError(f"byte quantity must be str | int | float | (number, unit), got {type(value)}")

    try:
        amount = Decimal(number)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None

    multiplier = _unit_multiplier(unit, bytes_conf.policy if policy is None else policy)
    scale = 10 ** precision
    return int(amount * scale) * multiplier // scale


# Private Methods ------------------------------------------------------------------------------------------------------

def _unit_multiplier(unit: str | None, policy) -> int:
    """Multiplier for unit from the policy table, then from the combined table, else 1."""
    if not unit:
        return 1
    key = canonical_unit(str(unit))
    table = select_table(policy)
    if key in table:
        return table[key]
    return COMBINED.get(key, 1)


def _truncate(quotient: Decimal, precision: int) -> str:
    """
    Cut the decimal representation after `precision` fractional digits.

    "1.00" becomes "1" while "1.50" is kept as is.
    """
    text = f"{quotient.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_DOWN):f}"
    whole, _, fraction = text.partition(".")
    if fraction.strip("0"):
        return text
    return whole
