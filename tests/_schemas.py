"""Schemas and custom types shared by the palconf tests."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from palconf import (
    STRING,
    U8,
    U16,
    U32,
    U64,
    Arena,
    ArrayType,
    CustomType,
    EnumType,
    Field,
    FixedArrayType,
    MissingRequiredFieldError,
    OptionalType,
    Schema,
    UnexpectedPatternError,
    UnionType,
    WHITESPACES,
    parse,
)


class Switch(enum.Enum):
    off = 0
    on = 1


class Difficulty(enum.Enum):
    easy = 0
    normal = 1
    hard = 2


@dataclass(frozen=True)
class Point:
    x: int
    y: int


def parse_point(raw: str, arena: Arena) -> Point:
    """Parse ``(x, y)``."""
    if not raw:
        raise MissingRequiredFieldError("point needs x and y")
    if len(raw) <= 2 or raw[0] != "(" or raw[-1] != ")":
        raise UnexpectedPatternError(f"expected (x, y), got {raw!r}")
    x, y = parse(FixedArrayType(U8, 2), raw[1:-1].strip(WHITESPACES), arena)
    return Point(x, y)


SWITCH = EnumType.from_enum(Switch)
MODE = UnionType({"time": U64, "score": U32, "zen": None})
POINT = CustomType("Point", parse_point)

GAME_SCHEMA = Schema(
    "Game",
    [
        Field("auto_start", SWITCH),
        Field("auto_exit", OptionalType(SWITCH)),
        Field("difficulty", EnumType.from_enum(Difficulty)),
        Field("description", STRING),
        Field("magic", U32),
        Field("mode", MODE),
        Field("altmode", OptionalType(MODE)),
        Field("range", FixedArrayType(U8, 2)),
        Field("coords", ArrayType(POINT)),
        Field("zig_magic", U16, default=65521),
    ],
)
