"""
Attrcodec Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import Mapping, Iterable, Iterator, KeysView, ValuesView, ItemsView
from typing import Any, Hashable, TypeVar, Generic

# Classes --------------------------------------------------------------------------------------------------------------

K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)


class SymbolTable(Mapping[K, V], Generic[K, V]):
    """
    An ordered symbol -> value map that keeps its exact inverse alongside.

    - Forward direction (symbol -> value) implements the stdlib Mapping protocol and
      preserves insertion order, which is the definition order of the symbols.
    - Reverse direction (value -> symbol) is available via get_key(value) and owner_of(value).
    - The reverse map is always the inverse of the forward map: when two symbols share a
      value, the one later in definition order owns the value in the reverse direction.

    Uniqueness policy is left to the caller; set() reports which symbol previously owned
    the value so callers can log or reject the collision.
    """

    def __init__(self, initial: Mapping[K, V] | Iterable[tuple[K, V]] | None = None) -> None:
        self._forward_map: dict[K, V] = {}
        self._backward_map: dict[V, K] = {}
        if initial:
            self.update(initial)

    # ----- Mapping required methods -----

    def __getitem__(self, key: K) -> V:
        return self._forward_map[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._forward_map)

    def __len__(self) -> int:
        return len(self._forward_map)

    # ----- Mapping helpers (typed views) -----

    def keys(self) -> KeysView[K]:
        return self._forward_map.keys()

    def values(self) -> ValuesView[V]:
        return self._forward_map.values()

    def items(self) -> ItemsView[K, V]:
        return self._forward_map.items()

    def get(self, key: K, default: Any = None) -> V | Any:
        return self._forward_map.get(key, default)

    # ----- Reverse operations -----

    def get_key(self, value: V) -> K:
        """Lookup symbol by value, raises KeyError if the value is not owned by any symbol."""
        return self._backward_map[value]

    def inverse(self) -> dict[V, K]:
        """A copy of the reverse map."""
        return dict(self._backward_map)

    def owner_of(self, value: V) -> K | None:
        """Symbol currently owning value in the reverse map, or None."""
        return self._backward_map.get(value)

    # ----- Mutations (copy-on-write, keep both maps consistent) -----

    def set(self, key: K, value: V) -> K | None:
        """
        Set or replace the mapping for key.

        Returns:
            The other symbol that owned value before this call, or None when the value
            was free or already owned by key.
        """
        collisions = self.update([(key, value)])
        return collisions[0][0] if collisions else None

    def update(self, other: Mapping[K, V] | Iterable[tuple[K, V]]) -> list[tuple[K, K, V]]:
        """
        Bulk add/update with set() semantics per pair.

        Both maps are built as new dicts and swapped in once; a published dict is never
        mutated afterwards.

        Returns:
            List of (displaced_symbol, new_symbol, value) collisions, in the order they happened.
        """
        iterable = other.items() if isinstance(other, Mapping) else other
        forward = dict(self._forward_map)
        backward = dict(self._backward_map)
        collisions = []
        for k, v in iterable:
            if k in forward and forward[k] == v:
                continue
            displaced = backward.get(v)
            if displaced == k:
                displaced = None

            if k in forward:
                # Rebinding keeps the symbol's position; an earlier owner of either value may resurface
                forward[k] = v
                backward = _invert(forward)
            else:
                forward[k] = v
                backward[v] = k

            if displaced is not None:
                collisions.append((displaced, k, v))

        self._backward_map = backward
        self._forward_map = forward
        return collisions

    # ----- Equality and representation -----

    def __repr__(self) -> str:
        return f"SymbolTable({self._forward_map!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Mapping):
            return dict(self._forward_map.items()) == dict(other.items())
        return NotImplemented


# Methods --------------------------------------------------------------------------------------------------------------

def _invert(forward: Mapping) -> dict:
    """Value -> key map where later keys win on shared values."""
    return {v: k for k, v in forward.items()}
