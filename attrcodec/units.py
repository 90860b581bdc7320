#
# Attrcodec Byte Units Tables
#

# Standard library -----------------------------------------------------------------------------------------------------
from enum import StrEnum, unique
from types import MappingProxyType
from typing import Mapping

# @formatter:off

_PREFIXES = ("K", "M", "G", "T", "P", "E", "Z", "Y")

DECIMAL: Mapping[str, int] = MappingProxyType(
    {"B": 1} | {f"{p}B": 1000 ** (i + 1) for i, p in enumerate(_PREFIXES)}
)
IEC_BINARY: Mapping[str, int] = MappingProxyType(
    {"B": 1} | {f"{p}iB": 1024 ** (i + 1) for i, p in enumerate(_PREFIXES)}
)
JEDEC_BINARY: Mapping[str, int] = MappingProxyType(
    {"B": 1} | {f"{p}B": 1024 ** (i + 1) for i, p in enumerate(_PREFIXES)}
)
# Binary is merged second and wins on key collisions
COMBINED: Mapping[str, int] = MappingProxyType(dict(DECIMAL) | dict(IEC_BINARY))

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class KbSize(StrEnum):
    """
    Policy tokens for the size of a kilobyte.

    Attributes:
        DECIMAL (str) : 1000-based units named KB, MB, ...
        JEDEC (str)   : 1024-based units with legacy names KB, MB, ...
        IEC (str)     : 1024-based units named KiB, MiB, ...
        BOTH (str)    : Decimal KB, MB, ... together with binary KiB, MiB, ...
    """
    DECIMAL = "decimal"
    JEDEC = "jedec"
    IEC = "iec"
    BOTH = "both"


class BytesConf:
    """Module-wide defaults for byte formatting and parsing."""
    policy: KbSize = KbSize.BOTH
    precision: int = 0


bytes_conf = BytesConf()

# @formatter:off
_POLICY_ALIASES = {
    "decimal": KbSize.DECIMAL, "si": KbSize.DECIMAL, "1000": KbSize.DECIMAL, 1000: KbSize.DECIMAL,
    "jedec": KbSize.JEDEC, "old": KbSize.JEDEC, "1024": KbSize.JEDEC, 1024: KbSize.JEDEC,
    "iec": KbSize.IEC, "new": KbSize.IEC,
    "both": KbSize.BOTH, "combined": KbSize.BOTH,
}

_TABLES = {
    KbSize.DECIMAL: DECIMAL,
    KbSize.JEDEC: JEDEC_BINARY,
    KbSize.IEC: IEC_BINARY,
    KbSize.BOTH: COMBINED,
}
# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def resolve_policy(policy: KbSize | str | int | None) -> KbSize:
    """
    Normalize a kb-size policy token to a KbSize member.

    Accepts KbSize members, their aliases ('old', 'new', 'si', 'combined'), case-insensitive
    strings and the integers 1000 and 1024. None and unknown tokens fall back to KbSize.BOTH,
    the table that recognizes every unit spelling.

    Examples:
        >>> resolve_policy("new")
        <KbSize.IEC: 'iec'>
        >>> resolve_policy(1000)
        <KbSize.DECIMAL: 'decimal'>
        >>> resolve_policy(None)
        <KbSize.BOTH: 'both'>
    """
    if isinstance(policy, KbSize):
        return policy
    if isinstance(policy, str):
        policy = policy.strip().lower()
    elif isinstance(policy, bool) or not isinstance(policy, int):
        return KbSize.BOTH
    return _POLICY_ALIASES.get(policy, KbSize.BOTH)


def select_table(policy: KbSize | str | int | None = None) -> Mapping[str, int]:
    """
    Return the read-only unit table for a kb-size policy.

    Examples:
        >>> select_table("decimal")["KB"]
        1000
        >>> select_table("jedec")["KB"]
        1024
        >>> select_table()["KiB"], select_table()["KB"]
        (1024, 1000)
    """
    return _TABLES[resolve_policy(policy)]


def canonical_unit(unit: str) -> str:
    """
    Normalize the casing of a unit spelling to the table key form.

    Examples:
        >>> canonical_unit("kib")
        'KiB'
        >>> canonical_unit("gb")
        'GB'
        >>> canonical_unit("b")
        'B'
    """
    unit = unit.strip()
    if len(unit) == 3 and unit[1] in "iI":
        return f"{unit[0].upper()}i{unit[2].upper()}"
    return unit.upper()


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Every policy must have a table, and every table must know plain bytes.
if set(_TABLES) != set(KbSize) or any(t.get("B") != 1 for t in _TABLES.values()):
    raise AssertionError(
        "Configuration Error: every KbSize policy needs a unit table with B == 1."
    )
