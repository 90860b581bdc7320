"""
Fixed-point decimal quantities stored as scaled integers.

A money amount of 123.45 with precision 2 is stored as the integer 12345. This module
renders such integers as text and parses text back, driven by a FixedPointRule:

- precision: digits after the implied decimal point
- separator / delimiter: decimal point and thousands separator substitutes
- positive / negative / zero / nil: patterns chosen by the sign of the value
- unit: prefix such as "$"
- blank: value returned for empty or unparseable input
- negative_regex: detects trailing negative markers such as "CR"

Patterns use a small printf-like language, `prefix%[flags][width][.digits](f|m)suffix`,
where the directive formats the scaled integer without going through float. A pattern
with no directive is used verbatim, so zero="free" renders zero as "free".
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import math
import re
from dataclasses import dataclass, field
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidArgumentError
from .validators import validate_precision

# @formatter:off

DEFAULT_NEGATIVE_REGEX = re.compile(
    r"^(?P<sign>[-+]?)\s*(?P<number>\d*\.?\d*)\s*(?P<marker>cr)?",
    re.IGNORECASE,
)

_DIRECTIVE_RE = re.compile(r"%(?P<flags>[-+ 0#]*)(?P<width>\d*)(?:\.(?P<cprec>\d+))?(?P<kind>[fm])")
_LEADING_JUNK_RE = re.compile(r"^[^\d+\-.,]+")
_DIGIT_RUN_RE = re.compile(r"(?P<head>\D*)(?P<digits>\d+)(?P<tail>.*)", re.DOTALL)

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class FixedPointRule:
    """
    Configuration for rendering and parsing one kind of fixed-point quantity.

    Patterns left as None fall back to `positive`, which itself defaults to
    "%.{precision}m". A distinct `negative` pattern receives the absolute value, so it
    must carry its own sign indication, e.g. "%.2f CR".

    Custom `negative_regex` patterns are matched against the cleaned input and should
    define the named groups `number`, and optionally `sign` (leading "-") and `marker`
    (any trailing negative marker).
    """

    precision: int = 2
    separator: str | None = "."
    delimiter: str | None = None
    positive: str | None = None
    negative: str | None = None
    zero: str | None = None
    nil: str | None = None
    unit: str | None = None
    blank: Any = None
    negative_regex: re.Pattern | str = field(default=DEFAULT_NEGATIVE_REGEX, repr=False)

    def __post_init__(self):
        validate_precision(self.precision)

        for name in ("separator", "delimiter", "positive", "negative", "zero", "nil", "unit"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{name} must be str | None, got {type(value)}")

        if self.delimiter:
            point = self.separator or "."
            if point in self.delimiter or any(ch.isdigit() or ch in "+-" for ch in self.delimiter):
                raise InvalidArgumentError(
                    f"delimiter must not contain digits, signs or the decimal point {point!r}, got {self.delimiter!r}"
                )

        if isinstance(self.negative_regex, str):
            object.__setattr__(self, 'negative_regex', re.compile(self.negative_regex, re.IGNORECASE))
        elif not isinstance(self.negative_regex, re.Pattern):
            raise TypeError(f"negative_regex must be str | re.Pattern, got {type(self.negative_regex)}")

    @property
    def positive_pattern(self) -> str:
        """Pattern for positive values, also the fallback for every other pattern."""
        if self.positive is not None:
            return self.positive
        return f"%.{self.precision}m"

    def pattern_for(self, value: int | None) -> str:
        """Select the nil, zero, negative or positive pattern for value."""
        if value is None:
            return self.nil if self.nil is not None else self.positive_pattern
        if value == 0 and self.zero is not None:
            return self.zero
        if value < 0 and self.negative is not None:
            return self.negative
        return self.positive_pattern

    def replace(self, **changes) -> 'FixedPointRule':
        """Return a copy of the rule with the given fields replaced."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class Directive:
    """
    Parsed `%[flags][width][.cprec](f|m)` directive of a fixed-point pattern.

    Attributes:
        prefix: Literal text before the directive.
        flags: printf flags applied to the integer part, e.g. "0" for zero padding.
        width: Minimum width of the integer part including its sign, 0 for none.
        cprec: Number of fractional digits to display, 0 omits the decimal point.
        suffix: Literal text after the directive.
    """
    prefix: str = ""
    flags: str = ""
    width: int = 0
    cprec: int = 0
    suffix: str = ""


# Methods --------------------------------------------------------------------------------------------------------------

def parse_directive(pattern: str) -> Directive | None:
    """
    Parse the first `%...f` or `%...m` directive of pattern.

    A literal percent sign is written "%%" in the text around the directive.

    Returns:
        Directive, or None if the pattern holds no directive.

    Examples:
        >>> parse_directive("%07.2m")
        Directive(prefix='', flags='0', width=7, cprec=2, suffix='')
        >>> parse_directive("%.2f CR").suffix
        ' CR'
        >>> parse_directive("free") is None
        True
    """
    if not isinstance(pattern, str):
        raise TypeError(f"pattern must be str, got {type(pattern)}")

    match = _DIRECTIVE_RE.search(pattern)
    if match is None:
        return None

    return Directive(
        prefix=pattern[:match.start()].replace("%%", "%"),
        flags=match.group("flags"),
        width=int(match.group("width") or 0),
        cprec=int(match.group("cprec") or 0),
        suffix=pattern[match.end():].replace("%%", "%"),
    )


def format_fixed_point(
        value: int,
        pattern: str | None = None,
        rule: FixedPointRule | None = None,
        **overrides,
) -> str:
    """
    Render a scaled integer through a single pattern.

    The integer is split into whole and fractional parts with the rule precision. The whole
    part honors the directive width and flags; the fractional part is zero-padded to the
    rule precision, then cut or padded to the directive's digits (never rounded). A negative
    value with a zero whole part keeps its "-" sign.

    Args:
        value: Scaled integer, e.g. 12345 for 123.45 at precision 2.
        pattern: Pattern to use; defaults to the rule's positive pattern.
        rule: FixedPointRule; defaults to DEFAULT_RULE.
        **overrides: FixedPointRule fields overriding those of rule.

    Returns:
        Formatted string, or pattern unchanged if it holds no directive.

    Examples:
        >>> format_fixed_point(12345)
        '123.45'
        >>> format_fixed_point(12345, "%07.3m")
        '0000123.450'
        >>> format_fixed_point(-12345, "%07.1m")
        '-000123.4'
        >>> format_fixed_point(-1)
        '-0.01'
        >>> format_fixed_point(111, precision=0)
        '111'
    """
    rule = _resolve_rule(rule, overrides)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"value must be int, got {type(value)}")

    if pattern is None:
        pattern = rule.positive_pattern
    directive = parse_directive(pattern)
    if directive is None:
        return pattern

    whole, cents = divmod(abs(value), 10 ** rule.precision)
    negative = value < 0

    whole_text = f"%{directive.flags}{directive.width or ''}d" % (-whole if negative else whole)
    if negative and whole == 0:
        whole_text = "-" + whole_text

    if directive.cprec == 0:
        number = whole_text
    else:
        cents_text = f"{cents:0{rule.precision}d}" if rule.precision else ""
        cents_text = cents_text.ljust(directive.cprec, "0")[:directive.cprec]
        number = f"{whole_text}.{cents_text}"

    return f"{directive.prefix}{number}{directive.suffix}"


def integer_to_fixed_point(value: int | None, rule: FixedPointRule | None = None, **overrides) -> str:
    """
    Render a scaled integer as text using the rule's patterns and punctuation.

    The pattern is chosen by value: nil for None (rendered as 0), zero for 0, negative for
    values below zero (rendered with the absolute value), positive otherwise. The result is
    then prefixed with the unit, the decimal point is replaced with the separator, and the
    first run of digits is grouped in threes with the delimiter.

    Examples:
        >>> integer_to_fixed_point(12345)
        '123.45'
        >>> integer_to_fixed_point(-1, negative="%.2f CR")
        '0.01 CR'
        >>> integer_to_fixed_point(12345678900, separator=",", delimiter=".")
        '123.456.789,00'
        >>> integer_to_fixed_point(100, unit="$")
        '$1.00'
    """
    rule = _resolve_rule(rule, overrides)
    pattern = rule.pattern_for(value)

    if value is None:
        value = 0
    elif value < 0 and rule.negative is not None:
        value = -value

    text = format_fixed_point(value, pattern, rule)

    if rule.unit:
        text = f"{rule.unit}{text}"
    if rule.separator and rule.separator != ".":
        text = text.replace(".", rule.separator)
    if rule.delimiter:
        text = _delimit(text, rule.delimiter)
    return text


def fixed_point_to_integer(text: str | int | float | None, rule: FixedPointRule | None = None, **overrides) -> Any:
    """
    Parse fixed-point text into a scaled integer.

    Delimiters are removed, the separator becomes ".", and leading currency symbols or
    whitespace are dropped. A leading "-" and a trailing negative marker ("CR" by default)
    each flip the sign, so "$-2.34 CR" parses as positive. Extra fractional digits are
    truncated, missing ones are zero-filled.

    Integers are returned unchanged (already scaled); floats go through float_to_integer().

    Returns:
        Scaled integer, or rule.blank if the input holds no digits or is an infinite or
        NaN float.

    Examples:
        >>> fixed_point_to_integer("1.23")
        123
        >>> fixed_point_to_integer("4.56CR")
        -456
        >>> fixed_point_to_integer("-0.50")
        -50
        >>> fixed_point_to_integer("$123.456.789,00 CR", separator=",", delimiter=".")
        -12345678900
        >>> fixed_point_to_integer("") is None
        True
    """
    rule = _resolve_rule(rule, overrides)

    if text is None:
        return rule.blank
    if isinstance(text, bool):
        raise TypeError("fixed-point value must not be bool")
    if isinstance(text, int):
        return text
    if isinstance(text, float):
        if not math.isfinite(text):
            return rule.blank
        return float_to_integer(text, rule.precision)
    if not isinstance(text, str):
        raise TypeError(f"fixed-point value must be str | int | float | None, got {type(text)}")

    if rule.delimiter:
        text = text.replace(rule.delimiter, "")
    if rule.separator and rule.separator != ".":
        text = text.replace(rule.separator, ".")
    text = _LEADING_JUNK_RE.sub("", text.strip())

    if not any(ch.isdigit() for ch in text):
        return rule.blank

    match = rule.negative_regex.search(text)
    if match is None or not any(ch.isdigit() for ch in match.group("number")):
        return rule.blank

    groups = match.groupdict()
    negative = (groups.get("sign") == "-") != bool(groups.get("marker"))

    whole, _, fraction = match.group("number").partition(".")
    fraction = fraction.ljust(rule.precision, "0")[:rule.precision]
    result = int(whole or 0) * 10 ** rule.precision + int(fraction or 0)
    return -result if negative else result


def integer_to_float(value: int | None, precision: int = 2) -> float | None:
    """
    Convert a scaled integer to float, None passes through.

    Examples:
        >>> integer_to_float(1)
        0.01
        >>> integer_to_float(9999888, precision=3)
        9999.888
    """
    validate_precision(precision)
    if value is None:
        return None
    return value / 10 ** precision


def float_to_integer(value: float | None, precision: int = 2) -> int | None:
    """
    Convert a float to a scaled integer, truncating toward zero. None passes through.

    The value is scaled with one extra digit and then divided by 10, so binary
    representation error such as 1.15 * 100 == 114.99999999999999 does not lose a cent.

    Examples:
        >>> float_to_integer(1.001)
        100
        >>> float_to_integer(1.15)
        115
        >>> float_to_integer(-1.23)
        -123

    Raises:
        InvalidArgumentError: If value is infinite or NaN.
    """
    validate_precision(precision)
    if value is None:
        return None
    if not math.isfinite(value):
        raise InvalidArgumentError(f"value must be finite, got {value!r}")
    scaled = int(value * 10 ** (precision + 1))
    whole = abs(scaled) // 10
    return -whole if scaled < 0 else whole


# Private Methods ------------------------------------------------------------------------------------------------------

def _delimit(text: str, delimiter: str) -> str:
    """Group the first run of digits in threes from the right."""
    match = _DIGIT_RUN_RE.match(text)
    if match is None:
        return text

    digits = match.group("digits")
    lead = len(digits) % 3 or 3
    groups = [digits[:lead]] + [digits[i:i + 3] for i in range(lead, len(digits), 3)]
    return f"{match.group('head')}{delimiter.join(groups)}{match.group('tail')}"


def _resolve_rule(rule: FixedPointRule | None, overrides: dict) -> FixedPointRule:
    if rule is None:
        rule = DEFAULT_RULE
    elif not isinstance(rule, FixedPointRule):
        raise TypeError(f"rule must be FixedPointRule | None, got {type(rule)}")
    return rule.replace(**overrides) if overrides else rule


# Default Rule ---------------------------------------------------------------------------------------------------------

DEFAULT_RULE = FixedPointRule()
