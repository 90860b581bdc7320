"""
Definitions: ordered, bidirectional symbol <-> value tables for enumerated attributes.

A Definition maps human readable symbols such as "active" to the stored values of one
attribute (usually integers) and answers lookups, comparisons and range queries against
them. Values may be any ordered type with a successor, strings for alphabetic sequences
being the secondary supported case.

Example:
    >>> status = Definition("status").define_enum(["forsale", "contract", "sold"])
    >>> status.value_of("contract")
    2
    >>> status.value_in_range(2, "forsale", "sold")
    True
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import operator
import re
import threading
from bisect import bisect_left, bisect_right
from typing import Any, Callable, Hashable, Iterable, Iterator, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import SymbolTable
from .errors import InvalidArgumentError, NotFoundError, ValueConflictError
from .sentinels import UNSET, ifnotunset

logger = logging.getLogger(__name__)


class DefinitionsConf:
    """Module-wide defaults for definitions."""
    enum_start: Any = 1


definitions_conf = DefinitionsConf()

# @formatter:off
_COMPARISONS = {
    "gt": operator.gt, "greater_than": operator.gt,
    "ge": operator.ge, "greater_than_or_equal_to": operator.ge,
    "lt": operator.lt, "less_than": operator.lt,
    "le": operator.le, "less_than_or_equal_to": operator.le,
    "eq": operator.eq, "equal_to": operator.eq,
    "ne": operator.ne, "not_equal_to": operator.ne,
}
# @formatter:on

_DISPLAY_KEYS = ("option_name", "title", "name")


# Classes --------------------------------------------------------------------------------------------------------------

class Definition:
    """
    Ordered symbol <-> value table of one attribute.

    Symbols keep their definition order. The reverse table is always the exact inverse of
    the symbol table; when two symbols share a value the later one in definition order owns
    it for symbol_of().

    Mutations are serialized by an instance lock and publish new tables instead of changing
    the ones readers may be iterating, so lookups and iteration need no lock.

    Conflict policy is fixed per definition:
        - strict=False (default): last write wins, every value collision is logged as a warning.
        - strict=True: value collisions, and add_symbol() rebinding a symbol, raise ValueConflictError.

    Args:
        name: Identifying key of the attribute, used in error messages and the registry.
        symbols: Optional initial mapping symbol -> value.
        strict: Conflict policy, see above.
    """

    def __init__(self, name: Hashable, symbols: Mapping | None = None, *, strict: bool = False) -> None:
        self.name = name
        self.strict = strict
        self.metadata: dict[str, dict[str, Any]] = {}
        self._table: SymbolTable = SymbolTable()
        self._lock = threading.RLock()
        if symbols:
            self.define(symbols)

    # ----- Tables -----

    @property
    def symbols(self) -> dict:
        """Copy of the symbol -> value table in definition order."""
        return dict(self._table)

    @property
    def values(self) -> dict:
        """Copy of the value -> symbol table."""
        return self._table.inverse()

    def __contains__(self, symbol) -> bool:
        return symbol in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"Definition({self.name!r}, {dict(self._table)!r})"

    # ----- Mutations -----

    def define(self, pairs: Mapping | Iterable[tuple[str, Any]]) -> 'Definition':
        """
        Merge symbol -> value pairs into the definition.

        Later pairs overwrite earlier values of the same symbol.

        Returns:
            The definition itself, for chaining.
        """
        items = list(pairs.items() if isinstance(pairs, Mapping) else pairs)
        for symbol, _ in items:
            _validate_symbol(symbol)

        with self._lock:
            if self.strict:
                self._check_values(items)
            for displaced, symbol, value in self._table.update(items):
                self._log_collision(displaced, symbol, value)
        return self

    def add_symbol(self, symbol: str, value: Any = None, metadata: Mapping | None = None) -> Any:
        """
        Add one symbol, with optional metadata such as title, description or role.

        If value is omitted it is the successor of the current maximum value, or the enum
        start (definitions_conf.enum_start) for an empty definition.

        Returns:
            The value assigned to symbol.

        Raises:
            ValueConflictError: In strict mode, if symbol is bound to a different value or
                value is owned by another symbol.
        """
        _validate_symbol(symbol)
        with self._lock:
            if value is None:
                value = successor(max(self._table.values())) if self._table else definitions_conf.enum_start

            if self.strict:
                if symbol in self._table and self._table[symbol] != value:
                    raise ValueConflictError(
                        f"symbol {symbol!r} of definition {self.name!r} is already bound to "
                        f"{self._table[symbol]!r}, cannot rebind to {value!r}"
                    )
                self._check_values([(symbol, value)])

            displaced = self._table.set(symbol, value)
            if displaced is not None:
                self._log_collision(displaced, symbol, value)
            if metadata:
                self.metadata = {**self.metadata, symbol: {**self.metadata.get(symbol, {}), **metadata}}
        return value

    def define_enum(self, tokens: Iterable, start: Any = UNSET, step: int = 1) -> 'Definition':
        """
        Define symbols from a sequence of tokens with an auto-incremented counter.

        Tokens are processed in order:
            - a symbol (identifier string) takes the counter, then the counter advances by step
            - None or "" advances the counter without assigning anything
            - any other token (e.g. an int) resets the counter to that literal

        Args:
            tokens: Symbols, skips and literals.
            start: Initial counter, defaults to definitions_conf.enum_start.
            step: Number of successor applications per advance, >= 1.

        Examples:
            >>> Definition("d").define_enum(["a", "b", None, "c", 100, "d"], start=0).symbols
            {'a': 0, 'b': 1, 'c': 3, 'd': 100}
            >>> Definition("d").define_enum(["x", "y"], start="a").symbols
            {'x': 'a', 'y': 'b'}
        """
        if isinstance(step, bool) or not isinstance(step, int) or step < 1:
            raise InvalidArgumentError(f"step must be an int >= 1, got {step!r}")

        tokens = list(tokens)
        if not tokens:
            return self

        counter = ifnotunset(start, default=definitions_conf.enum_start)
        pairs = []
        for token in tokens:
            if token is None or token == "":
                counter = successor(counter, step)
            elif _is_symbolic(token):
                pairs.append((token, counter))
                counter = successor(counter, step)
            else:
                counter = token
        return self.define(pairs)

    def define_allowed(self, values: Iterable[str]) -> 'Definition':
        """
        Define an attribute restricted to a list of strings, each being its own symbol.

        Example:
            >>> Definition("kind").define_allowed(["mammal", "insect"]).value_of("insect")
            'insect'
        """
        return self.define((str(v), v) for v in values)

    def copy(self, name: Hashable | None = None) -> 'Definition':
        """Independent copy of the definition, optionally under a new name."""
        with self._lock:
            clone = Definition(self.name if name is None else name, strict=self.strict)
            clone._table = SymbolTable(self._table.items())
            clone.metadata = {s: dict(m) for s, m in self.metadata.items()}
        return clone

    # ----- Lookups -----

    def value_of(self, symbol: str, default: Any = UNSET, fallback: Callable[[str], Any] | None = None) -> Any:
        """
        Value of symbol.

        Args:
            symbol: Symbol to look up.
            default: Returned when symbol is not defined.
            fallback: Called with symbol when it is not defined; takes precedence over default.

        Raises:
            NotFoundError: If symbol is not defined and neither default nor fallback is given.
        """
        try:
            return self._table[symbol]
        except KeyError:
            pass
        if fallback is not None:
            return fallback(symbol)
        if default is not UNSET:
            return default
        raise NotFoundError(self.name, symbol, kind="symbol")

    def symbol_of(self, value: Any, default: Any = UNSET, fallback: Callable[[Any], Any] | None = None) -> Any:
        """
        Symbol owning value, with the same default and fallback policy as value_of().

        Raises:
            NotFoundError: If value is not defined and neither default nor fallback is given.
        """
        try:
            return self._table.get_key(value)
        except KeyError:
            pass
        if fallback is not None:
            return fallback(value)
        if default is not UNSET:
            return default
        raise NotFoundError(self.name, value, kind="value")

    def display_name(self, symbol: str, name_resolver: Callable[[str], str | None] | None = None) -> str:
        """
        Display name of symbol.

        Metadata option_name, title or name wins, then name_resolver(symbol) when it returns
        a non-empty string, then the capitalized symbol.
        """
        meta = self.metadata.get(symbol, {})
        for key in _DISPLAY_KEYS:
            if meta.get(key):
                return meta[key]
        if name_resolver is not None:
            resolved = name_resolver(symbol)
            if resolved:
                return resolved
        return str(symbol).capitalize()

    def select_pairs(self, name_resolver: Callable[[str], str | None] | None = None) -> list[tuple[str, Any]]:
        """
        (display_name, value) pairs in definition order, e.g. for select inputs.

        Example:
            >>> Definition("s", {"active": 1, "retired": 5}).select_pairs()
            [('Active', 1), ('Retired', 5)]
        """
        return [(self.display_name(s, name_resolver), v) for s, v in self._table.items()]

    def constants(self, prefix: str | None = None) -> dict[str, Any]:
        """
        Constant-style names for every symbol, PREFIX_SYMBOL -> value.

        Example:
            >>> Definition("status", {"forsale": 1}).constants()
            {'STATUS_FORSALE': 1}
        """
        prefix = str(self.name) if prefix is None else prefix
        names = {}
        for symbol, value in self._table.items():
            key = f"{prefix}_{symbol}" if prefix else str(symbol)
            names[re.sub(r"\W+", "_", key).upper()] = value
        return names

    # ----- Queries -----

    def compare(self, value: Any, symbol: str) -> int:
        """
        Compare value with the value of symbol: -1, 0 or 1.

        Raises:
            NotFoundError: If symbol is not defined.
        """
        other = self.value_of(symbol)
        return (value > other) - (value < other)

    def value_in_range(self, value: Any, low_symbol: str, high_symbol: str) -> bool:
        """True if value_of(low_symbol) <= value <= value_of(high_symbol)."""
        return self.value_of(low_symbol) <= value <= self.value_of(high_symbol)

    def matches_any(self, value: Any, *symbols) -> bool:
        """True if the symbol of value is one of symbols; a single list of symbols is accepted too."""
        if len(symbols) == 1 and isinstance(symbols[0], (list, tuple, set, frozenset)):
            symbols = tuple(symbols[0])
        symbol = self.symbol_of(value, default=None)
        return symbol is not None and symbol in symbols

    def value_is(self, value: Any, op: str, *symbols) -> bool:
        """
        Test value against symbols with a named operator.

        Operators:
            between: value_in_range(value, low, high)
            gt, ge, lt, le, eq, ne (and their long names, e.g. greater_than): compare with one symbol
            in / not_in: membership of the symbol of value

        Raises:
            InvalidArgumentError: On unknown operator or wrong number of symbols.
            NotFoundError: If a compared symbol is not defined.

        Example:
            >>> status = Definition("status", {"new": 1, "open": 2, "closed": 3})
            >>> status.value_is(2, "between", "new", "closed"), status.value_is(2, "gt", "open")
            (True, False)
        """
        if op == "between":
            if len(symbols) != 2:
                raise InvalidArgumentError(f"'between' needs 2 symbols, got {len(symbols)}")
            return self.value_in_range(value, *symbols)
        if op == "in":
            return self.matches_any(value, *symbols)
        if op == "not_in":
            return not self.matches_any(value, *symbols)
        if op in _COMPARISONS:
            if len(symbols) != 1:
                raise InvalidArgumentError(f"{op!r} needs 1 symbol, got {len(symbols)}")
            return _COMPARISONS[op](value, self.value_of(symbols[0]))
        raise InvalidArgumentError(f"unknown operator {op!r}")

    def next_value(self, value: Any, default: Any = None) -> Any:
        """Smallest defined value strictly greater than value, or default."""
        keys = sorted(self._table.inverse())
        i = bisect_right(keys, value)
        return keys[i] if i < len(keys) else default

    def previous_value(self, value: Any, default: Any = None) -> Any:
        """Largest defined value strictly less than value, or default."""
        keys = sorted(self._table.inverse())
        i = bisect_left(keys, value)
        return keys[i - 1] if i > 0 else default

    # ----- Private -----

    def _check_values(self, items: list[tuple[str, Any]]) -> None:
        """Raise ValueConflictError if merging items would leave two symbols sharing a value."""
        merged = dict(self._table)
        merged.update(items)
        owners = {}
        for symbol, value in merged.items():
            owner = owners.setdefault(value, symbol)
            if owner != symbol:
                raise ValueConflictError(
                    f"value {value!r} of definition {self.name!r} is already used by {owner!r}, "
                    f"cannot assign it to {symbol!r}"
                )

    def _log_collision(self, displaced: str, symbol: str, value: Any) -> None:
        logger.warning(
            "Definition %r: symbol %r takes value %r already used by %r, reverse lookup resolves to %r",
            self.name, symbol, value, displaced, self._table.owner_of(value),
        )


class DefinitionAccessor:
    """
    Typed accessor pairing a stored value with its Definition.

    Stands in for per-attribute generated methods: read or write the attribute through its
    symbol and test it with the definition's predicates.

    Example:
        >>> status = Definition("status", {"active": 1, "retired": 5})
        >>> acc = DefinitionAccessor(status)
        >>> acc.symbol = "retired"
        >>> acc.value, acc.is_in("active", "retired")
        (5, True)
    """

    def __init__(self, definition: Definition, value: Any = None) -> None:
        if not isinstance(definition, Definition):
            raise TypeError(f"definition must be a Definition, got {type(definition)}")
        self.definition = definition
        self.value = value

    @property
    def symbol(self) -> str | None:
        """Symbol of the current value, None if the value is not defined."""
        if self.value is None:
            return None
        return self.definition.symbol_of(self.value, default=None)

    @symbol.setter
    def symbol(self, symbol: str | None) -> None:
        self.value = None if symbol is None else self.definition.value_of(symbol)

    def is_in(self, *symbols) -> bool:
        return self.definition.matches_any(self.value, *symbols)

    def is_(self, op: str, *symbols) -> bool:
        return self.definition.value_is(self.value, op, *symbols)

    def __repr__(self) -> str:
        return f"DefinitionAccessor({self.definition.name!r}, value={self.value!r}, symbol={self.symbol!r})"


# Methods --------------------------------------------------------------------------------------------------------------

def successor(value: Any, step: int = 1) -> Any:
    """
    Generic successor used to advance enum counters.

    Supports int (value + step), str (alphanumeric increment with carry, like "az" -> "ba"
    or "9" -> "10") and any object with a succ() method, applied step times.

    Raises:
        InvalidArgumentError: If step is negative or value has no successor.

    Examples:
        >>> successor(3, 2)
        5
        >>> successor("az")
        'ba'
        >>> successor("Zz")
        'AAa'
    """
    if isinstance(step, bool) or not isinstance(step, int) or step < 0:
        raise InvalidArgumentError(f"step must be an int >= 0, got {step!r}")

    if isinstance(value, bool):
        raise InvalidArgumentError("bool has no successor")
    if isinstance(value, int):
        return value + step
    if isinstance(value, str):
        for _ in range(step):
            value = _str_successor(value)
        return value
    if callable(getattr(value, "succ", None)):
        for _ in range(step):
            value = value.succ()
        return value
    raise InvalidArgumentError(f"no successor defined for {type(value).__name__} value {value!r}")


def _str_successor(text: str) -> str:
    """Increment the rightmost alphanumeric, carrying into alphanumerics on the left."""
    if not text:
        return text

    chars = list(text)
    alnum = [i for i, ch in enumerate(chars) if ch.isascii() and ch.isalnum()]
    if not alnum:
        chars[-1] = chr(ord(chars[-1]) + 1)
        return "".join(chars)

    for pos in reversed(alnum):
        ch = chars[pos]
        if ch == "9":
            chars[pos], carry = "0", "1"
        elif ch == "z":
            chars[pos], carry = "a", "a"
        elif ch == "Z":
            chars[pos], carry = "A", "A"
        else:
            chars[pos] = chr(ord(ch) + 1)
            return "".join(chars)
    chars.insert(alnum[0], carry)
    return "".join(chars)


def _is_symbolic(token: Any) -> bool:
    return isinstance(token, str) and token.isidentifier()


def _validate_symbol(symbol: Any) -> None:
    if not isinstance(symbol, str) or not symbol:
        raise TypeError(f"symbol must be a non-empty str, got {symbol!r}")
