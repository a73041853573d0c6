"""Syntax-tree node types produced by the reader, plus reader options."""

from dataclasses import dataclass, field
from typing import Any, Iterator, NamedTuple, Optional, Union


class Pos(NamedTuple):
    """1-based line/column of the first character of a token or form."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


# Positions are diagnostics only: two forms read from differently spaced
# sources compare equal.
def _pos() -> Any:
    return field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Symbol:
    """A dotted identifier path, e.g. `foo.bar.baz`."""

    head: str
    tail: tuple[str, ...] = ()
    pos: Optional[Pos] = _pos()

    def __post_init__(self):
        # Accept any iterable of segments but store a tuple.
        if not isinstance(self.tail, tuple):
            object.__setattr__(self, "tail", tuple(self.tail))

    @property
    def segments(self) -> tuple[str, ...]:
        return (self.head,) + self.tail

    def __str__(self) -> str:
        return ".".join(self.segments)


@dataclass(frozen=True)
class Integer:
    value: int
    pos: Optional[Pos] = _pos()


@dataclass(frozen=True)
class Float:
    value: float
    pos: Optional[Pos] = _pos()


@dataclass(frozen=True)
class String:
    value: str
    pos: Optional[Pos] = _pos()


@dataclass(frozen=True)
class Char:
    value: str
    pos: Optional[Pos] = _pos()


@dataclass(frozen=True)
class Keyword:
    name: str
    pos: Optional[Pos] = _pos()


@dataclass(frozen=True)
class Call:
    """Parenthesized application: `(f a b)`."""

    items: tuple["Form", ...] = ()
    pos: Optional[Pos] = _pos()

    def __post_init__(self):
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Form"]:
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]


@dataclass(frozen=True)
class List:
    """Bracketed sequence: `[a b c]`."""

    items: tuple["Form", ...] = ()
    pos: Optional[Pos] = _pos()

    def __post_init__(self):
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Form"]:
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]


@dataclass(frozen=True)
class Map:
    """Braced key/value sequence: `{:a 1 :b 2}`.

    Pairs keep insertion order and keys are not required to be unique;
    `get` resolves duplicates by returning the last matching pair.
    """

    pairs: tuple[tuple["Form", "Form"], ...] = ()
    pos: Optional[Pos] = _pos()

    def __post_init__(self):
        if not isinstance(self.pairs, tuple) or any(not isinstance(p, tuple) for p in self.pairs):
            object.__setattr__(self, "pairs", tuple((k, v) for k, v in self.pairs))

    def __len__(self) -> int:
        return len(self.pairs)

    def keys(self) -> Iterator["Form"]:
        return (k for k, _ in self.pairs)

    def values(self) -> Iterator["Form"]:
        return (v for _, v in self.pairs)

    def get(self, key: "Form", default: Any = None) -> Any:
        for k, v in reversed(self.pairs):
            if k == key:
                return v
        return default


Form = Union[Call, List, Map, Symbol, Integer, Float, String, Char, Keyword]

LEAF_FORMS = (Symbol, Integer, Float, String, Char, Keyword)

DUPLICATE_KEY_POLICIES = ("allow", "warn", "error")


@dataclass
class ReaderOptions:
    allow_empty_call: bool = True
    duplicate_keys: str = "allow"
    max_depth: int = 256

    def __post_init__(self):
        if self.duplicate_keys not in DUPLICATE_KEY_POLICIES:
            raise ValueError(
                f"duplicate_keys must be one of {', '.join(DUPLICATE_KEY_POLICIES)}, "
                f"got {self.duplicate_keys!r}"
            )
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
