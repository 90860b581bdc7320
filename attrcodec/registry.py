"""
Named directory of shared Definitions.

Call sites that refer to the same attribute name converge on one shared, mutable
Definition through find_or_create(). A DefinitionRegistry is an explicit context object;
the module-level default_registry and its wrappers serve code that wants a process-wide one.

Definitions can also be bulk-loaded from tab separated records:

    attribute <TAB> value <TAB> role <TAB> symbol <TAB> short_name <TAB> description
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import re
import threading
from typing import Any, Hashable, Iterable, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .definitions import Definition
from .errors import NotFoundError
from .sentinels import UNSET

logger = logging.getLogger(__name__)

_RECORD_FIELDS = ("attribute", "value", "role", "symbol", "short_name", "description")
_INT_RE = re.compile(r"^[-+]?\d+$")


# Classes --------------------------------------------------------------------------------------------------------------

class DefinitionRegistry:
    """
    Registry of Definitions by name.

    Mutations of the registry map are serialized with a lock and replace the map with a
    new dict, so lookups and iteration are lock-free.
    Mutating a shared Definition is serialized by the Definition itself.

    Example:
        >>> registry = DefinitionRegistry()
        >>> registry.find_or_create("role", {"admin": "a", "user": "u"}).value_of("admin")
        'a'
        >>> registry.find_or_create("role") is registry.get("role")
        True
    """

    def __init__(self) -> None:
        self._definitions: dict[Hashable, Definition] = {}
        self._lock = threading.RLock()

    def __contains__(self, name: Hashable) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"DefinitionRegistry({list(self._definitions)!r})"

    def names(self) -> list[Hashable]:
        """Registered names in registration order."""
        return list(self._definitions)

    def get(self, name: Hashable, default: Any = UNSET) -> Definition | Any:
        """
        Definition registered as name.

        Raises:
            NotFoundError: If name is not registered and no default is given.
        """
        definition = self._definitions.get(name)
        if definition is not None:
            return definition
        if default is not UNSET:
            return default
        raise NotFoundError(None, name, kind="definition")

    def find_or_create(
            self,
            name: Hashable,
            initial_pairs: Mapping | None = None,
            *,
            like: Hashable | None = None,
            strict: bool = False,
    ) -> Definition:
        """
        Return the definition registered as name, creating it if needed.

        Args:
            name: Definition name.
            initial_pairs: Symbol -> value pairs merged into the definition, new or existing.
            like: Name of a registered definition to copy from when creating.
            strict: Conflict policy of a newly created definition.

        Raises:
            NotFoundError: If like names an unregistered definition.
        """
        with self._lock:
            definition = self._definitions.get(name)
            if definition is None:
                if like is not None:
                    definition = self.get(like).copy(name)
                else:
                    definition = Definition(name, strict=strict)
                self._definitions = {**self._definitions, name: definition}
                logger.debug("Registered definition %r", name)
            if initial_pairs:
                definition.define(initial_pairs)
        return definition

    def register(self, definition: Definition) -> Definition:
        """Register an existing definition under its name, replacing any previous one."""
        if not isinstance(definition, Definition):
            raise TypeError(f"definition must be a Definition, got {type(definition)}")
        with self._lock:
            self._definitions = {**self._definitions, definition.name: definition}
        return definition

    def remove(self, name: Hashable) -> Definition:
        """
        Unregister and return the definition registered as name.

        Raises:
            NotFoundError: If name is not registered.
        """
        with self._lock:
            definitions = dict(self._definitions)
            try:
                definition = definitions.pop(name)
            except KeyError:
                raise NotFoundError(None, name, kind="definition") from None
            self._definitions = definitions
        return definition

    def clear(self) -> None:
        """Remove all definitions."""
        with self._lock:
            self._definitions = {}

    def load_records(self, lines: Iterable[str]) -> int:
        """
        Fold tab separated definition records into the registry.

        Each record is `attribute, value, role, symbol, short_name, description`. Lines that
        do not start with a word character, have fewer fields, or have an empty symbol,
        short name or description are skipped. Integer-looking values become int, an empty
        value is assigned the next value in sequence.

        Each valid record calls add_symbol() on the named definition with the metadata
        role, short_name, description and title (= short_name).

        Returns:
            Number of records loaded.

        Example:
            >>> registry = DefinitionRegistry()
            >>> registry.load_records(["status\\t1\\t\\tactive\\tActive\\tCurrently active"])
            1
            >>> registry.get("status").value_of("active")
            1
        """
        loaded = 0
        for lineno, line in enumerate(lines, start=1):
            record = _parse_record(line)
            if record is None:
                logger.debug("Skipped definition record at line %d: %r", lineno, line)
                continue

            definition = self.find_or_create(record["attribute"])
            definition.add_symbol(
                record["symbol"],
                record["value"],
                metadata={
                    "role": record["role"],
                    "short_name": record["short_name"],
                    "title": record["short_name"],
                    "description": record["description"],
                },
            )
            loaded += 1
        return loaded


# Methods --------------------------------------------------------------------------------------------------------------

def _parse_record(line: str) -> dict[str, Any] | None:
    """Fields of one record, or None if the record is incomplete."""
    if not line or not re.match(r"\w", line):
        return None

    fields = [f.strip() for f in line.rstrip("\r\n").split("\t")]
    if len(fields) < len(_RECORD_FIELDS):
        return None

    record = dict(zip(_RECORD_FIELDS, fields))
    if not (record["attribute"] and record["symbol"] and record["short_name"] and record["description"]):
        return None
    value = record["value"]
    if not value:
        record["value"] = None
    elif _INT_RE.match(value):
        record["value"] = int(value)
    return record


# Default Registry -----------------------------------------------------------------------------------------------------

default_registry = DefinitionRegistry()


def shared(name: Hashable, initial_pairs: Mapping | None = None) -> Definition:
    """find_or_create() on the default registry."""
    return default_registry.find_or_create(name, initial_pairs)


def reset_default_registry() -> None:
    """Clear the default registry, for test isolation."""
    default_registry.clear()
