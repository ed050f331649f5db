"""Symbols, scoped symbol hashmaps and symbol tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

_UINT64_MASK = (1 << 64) - 1


class SymbolType(Enum):
    """What kind of definition a symbol stands for."""

    GLOBAL_VAR = 0
    GLOBAL_ARRAY = 1
    FUNCTION = 2
    PARAMETER = 3
    LOCAL_VAR = 4


@dataclass(eq=False)
class Symbol:
    """The definition of a name.

    ``node`` is the syntax tree node that defined the symbol. Functions keep
    their own local table in ``function_symtable``; parameters and local
    variables point to the table they belong to; globals leave it None.
    """

    name: str
    type: SymbolType
    node: Any = None
    sequence_number: int = 0
    function_symtable: Optional[SymbolTable] = field(default=None, repr=False)


class SymbolCollisionError(KeyError):
    """A symbol with the same name already exists in the same scope."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"symbol {self.name!r} is already defined in this scope"


def hash_string(name: str) -> int:
    """Return a simple 64-bit hash of ``name``."""
    value = 31
    for byte in name.encode("utf-8"):
        # Characters are treated as signed bytes.
        signed = byte - 256 if byte >= 128 else byte
        value = (value * 257 + signed) & _UINT64_MASK
    return value


class SymbolHashmap:
    """An open-addressing hashmap from names to symbols.

    Entries cannot be removed. A lookup that misses continues in ``backup``,
    which lets nested scopes chain onto their enclosing scope.
    """

    def __init__(self, backup: Optional[SymbolHashmap] = None) -> None:
        self.buckets: list[Optional[Symbol]] = []
        self.backup = backup
        self._entries = 0

    def __len__(self) -> int:
        return self._entries

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._find_local(name) is not None

    def _resize(self, capacity: int) -> None:
        old = self.buckets
        self.buckets = [None] * capacity
        self._entries = 0
        for symbol in old:
            if symbol is not None:
                self._place(symbol)

    def _place(self, symbol: Symbol) -> None:
        count = len(self.buckets)
        bucket = hash_string(symbol.name) % count
        while (existing := self.buckets[bucket]) is not None:
            if existing.name == symbol.name:
                raise SymbolCollisionError(symbol.name)
            bucket = (bucket + 1) % count
        self.buckets[bucket] = symbol
        self._entries += 1

    def insert(self, symbol: Symbol) -> None:
        """Add ``symbol``; raise SymbolCollisionError if its name is taken here."""
        # Keep the fill ratio at or below one half.
        if (self._entries + 1) * 2 > len(self.buckets):
            self._resize(len(self.buckets) * 2 + 8)
        self._place(symbol)

    def _find_local(self, name: str) -> Optional[Symbol]:
        count = len(self.buckets)
        if count == 0:
            return None
        bucket = hash_string(name) % count
        while (existing := self.buckets[bucket]) is not None:
            if existing.name == name:
                return existing
            bucket = (bucket + 1) % count
        return None

    def lookup(self, name: str) -> Optional[Symbol]:
        """Find ``name`` here or along the backup chain; None if absent."""
        hashmap: Optional[SymbolHashmap] = self
        while hashmap is not None:
            found = hashmap._find_local(name)
            if found is not None:
                return found
            hashmap = hashmap.backup
        return None


class SymbolTable:
    """An ordered list of symbols with a hashmap for lookups by name."""

    def __init__(self) -> None:
        self.symbols: list[Symbol] = []
        self.hashmap = SymbolHashmap()

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols)

    def insert(self, symbol: Symbol) -> Symbol:
        """Add ``symbol`` and give it the next sequence number.

        Raises SymbolCollisionError if the current hashmap already holds the
        name; the symbol is then not added.
        """
        self.hashmap.insert(symbol)
        symbol.sequence_number = len(self.symbols)
        self.symbols.append(symbol)
        return symbol