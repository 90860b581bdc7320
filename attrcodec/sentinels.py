"""
Sentinel for distinguishing an omitted argument from an explicit None.

Lookups such as Definition.value_of() accept None as a legitimate default, so
"no default supplied" is signalled with UNSET instead.

Example:
    >>> def lookup(key, default=UNSET):
    ...     if default is UNSET:
    ...         raise KeyError(key)
    ...     return default
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'UnsetType',
    'ifnotunset',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType:
    """
    Singleton type of UNSET.

    Identity-compared, falsy and pickled back to the same instance.
    """
    __slots__ = ()
    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<UNSET>'

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        return (self.__class__, ())


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def ifnotunset(value: Any, *, default: Any = None) -> Any:
    """
    Return value if it's not UNSET, otherwise return default.

    Example:
        >>> ifnotunset(UNSET, default=30)
        30
        >>> ifnotunset(None, default=30) is None
        True
    """
    return default if value is UNSET else value
