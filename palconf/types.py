"""Type descriptors describing the shape of a configuration value.

Descriptors form a closed set of immutable dataclasses. The value parser
dispatches over exactly these classes; host programs compose them to
describe their fields and never subclass them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple, Type, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from palconf.arena import Arena


# =============================================================================
# Scalars
# =============================================================================

@dataclass(frozen=True)
class BoolType:
    pass


@dataclass(frozen=True)
class IntType:
    """Integer with a fixed bit width.

    Attributes:
        bits: Width in bits.
        signed: Whether negative values are allowed.
    """

    bits: int = 64
    signed: bool = True

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def __str__(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.bits}"


@dataclass(frozen=True)
class FloatType:
    pass


@dataclass(frozen=True)
class StringType:
    pass


@dataclass(frozen=True)
class DirType:
    """Directory path that must exist when the value is parsed."""
    pass


# =============================================================================
# Composites
# =============================================================================

@dataclass(frozen=True)
class OptionalType:
    inner: "TypeDescriptor"


@dataclass(frozen=True)
class EnumType:
    """Closed set of names.

    Attributes:
        variants: Accepted names, matched case-sensitively.
        enum_cls: Optional Python ``Enum``; when set, parsing yields its
            members instead of plain names.
    """

    variants: Tuple[str, ...]
    enum_cls: Optional[Type[enum.Enum]] = None

    @classmethod
    def from_enum(cls, enum_cls: Type[enum.Enum]) -> "EnumType":
        """Build a descriptor accepting the member names of ``enum_cls``."""
        return cls(variants=tuple(enum_cls.__members__), enum_cls=enum_cls)


@dataclass(frozen=True)
class UnionType:
    """Tagged union: one named variant, optionally carrying a payload.

    Attributes:
        variants: Ordered mapping of tag to payload descriptor, or None for
            variants without payload.
    """

    variants: Mapping[str, Optional["TypeDescriptor"]] = field(hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variants", MappingProxyType(dict(self.variants)))


@dataclass(frozen=True)
class FixedArrayType:
    """Array with a declared number of items.

    Attributes:
        element: Item descriptor.
        length: Declared item count.
        strict: Reject inputs with a different item count. When False, extra
            items are ignored and missing items stay None.
    """

    element: "TypeDescriptor"
    length: int
    strict: bool = True


@dataclass(frozen=True)
class ArrayType:
    element: "TypeDescriptor"


@dataclass(frozen=True)
class CustomType:
    """Host-defined type parsed by a hook.

    Attributes:
        name: Display name used in diagnostics.
        parse: ``parse(raw, arena) -> value``; raises a ``StructError``
            subclass on failure.
        free: Optional ``free(value, arena)`` run when the owning session is
            released.
    """

    name: str
    parse: Callable[[str, "Arena"], Any] = field(compare=False)
    free: Optional[Callable[[Any, "Arena"], None]] = field(default=None, compare=False)


TypeDescriptor = Union[
    BoolType,
    IntType,
    FloatType,
    StringType,
    DirType,
    OptionalType,
    EnumType,
    UnionType,
    FixedArrayType,
    ArrayType,
    CustomType,
]


@dataclass(frozen=True)
class Tagged:
    """Parsed tagged union value.

    Attributes:
        tag: Variant name.
        value: Payload, None for variants without payload.
    """

    tag: str
    value: Any = None

    def __str__(self) -> str:
        if self.value is None:
            return self.tag
        return f"{self.tag}({self.value})"


BOOL = BoolType()
U8 = IntType(8, signed=False)
U16 = IntType(16, signed=False)
U32 = IntType(32, signed=False)
U64 = IntType(64, signed=False)
I8 = IntType(8)
I16 = IntType(16)
I32 = IntType(32)
I64 = IntType(64)
FLOAT = FloatType()
STRING = StringType()
DIR = DirType()


__all__ = [
    "BoolType",
    "IntType",
    "FloatType",
    "StringType",
    "DirType",
    "OptionalType",
    "EnumType",
    "UnionType",
    "FixedArrayType",
    "ArrayType",
    "CustomType",
    "TypeDescriptor",
    "Tagged",
    "BOOL",
    "U8",
    "U16",
    "U32",
    "U64",
    "I8",
    "I16",
    "I32",
    "I64",
    "FLOAT",
    "STRING",
    "DIR",
]
