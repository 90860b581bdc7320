"""
Attrcodec Argument Validators

Shared checks for arguments that several codecs accept, such as the number of
decimal digits kept by byte-size and fixed-point formatting.
"""

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidArgumentError

# Constants ------------------------------------------------------------------------------------------------------------

MAX_PRECISION = 18


# Methods --------------------------------------------------------------------------------------------------------------

def validate_precision(precision: int) -> int:
    """
    Validate a count of decimal digits.

    Byte-size and fixed-point codecs share the bound [0, MAX_PRECISION].

    Args:
        precision: Number of digits after the decimal point.

    Returns:
        int: The original precision if valid.

    Raises:
        TypeError: If precision is not an int (bool is rejected).
        InvalidArgumentError: If precision is outside [0, MAX_PRECISION].
    """
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise TypeError(f"precision must be int, got {type(precision)}")
    if not 0 <= precision <= MAX_PRECISION:
        raise InvalidArgumentError(f"precision must be in range [0, {MAX_PRECISION}], got {precision}")
    return precision
