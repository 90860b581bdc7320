"""
Exceptions raised by attrcodec.

Lookups and library misuse raise; parsing of user input never does and degrades
to a configured blank value instead.
"""


# Classes --------------------------------------------------------------------------------------------------------------

class AttrCodecError(Exception):
    """Base class for all attrcodec errors."""


class NotFoundError(AttrCodecError, LookupError):
    """
    Raised by strict lookups when no mapping exists and no default was supplied.

    Attributes:
        attribute: Name of the definition (attribute) that was queried, None for registry lookups.
        key: The symbol or value that was not found.
    """

    def __init__(self, attribute, key, kind: str = "symbol") -> None:
        self.attribute = attribute
        self.key = key
        self.kind = kind
        if attribute is None:
            super().__init__(f"{kind} {key!r} not found")
        else:
            super().__init__(f"{kind} {key!r} not found in definition {attribute!r}")


class ValueConflictError(AttrCodecError, ValueError):
    """Raised by strict definitions when a symbol or value would be silently rebound."""


class InvalidArgumentError(AttrCodecError, ValueError):
    """Raised on library misuse: negative precision, unknown operators, unsupported types."""
