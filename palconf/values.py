"""Type-directed parsing of raw values.

``parse`` turns one trimmed raw string into a typed value by walking the
descriptor. Array items are split with the nesting-aware splitter and
unescaped before being parsed against the element descriptor; scalar
strings are never unescaped.
"""

from __future__ import annotations

import errno
import os
import re
from pathlib import Path
from typing import Any, List, Optional, Tuple

from palconf.arena import Arena
from palconf.errors import (
    ArrayLengthError,
    InvalidBaseError,
    InvalidBooleanError,
    InvalidEnumVariantError,
    InvalidNumberError,
    InvalidUnionVariantError,
    UnclosedParenthesisError,
)
from palconf.splitter import WHITESPACES, split_raw_array, unescape
from palconf.types import (
    ArrayType,
    BoolType,
    CustomType,
    DirType,
    EnumType,
    FixedArrayType,
    FloatType,
    IntType,
    OptionalType,
    StringType,
    Tagged,
    TypeDescriptor,
    UnionType,
)

_INT_BASES = {"b": 2, "o": 8, "x": 16}
_INT_DIGITS_RE = re.compile(r"[+-]?[0-9A-Za-z_]+")


def parse(descriptor: TypeDescriptor, raw: str, arena: Optional[Arena] = None) -> Any:
    """Parse ``raw`` into a value shaped by ``descriptor``.

    Args:
        descriptor: Target shape.
        raw: Trimmed raw text.
        arena: Owner of the produced allocations. A private arena is used when
            omitted, which suits one-off parsing outside a session.

    Returns:
        The typed value.

    Raises:
        PalError: Subclass describing the failure.
        OSError: A directory value could not be opened.
    """
    if arena is None:
        arena = Arena()

    if isinstance(descriptor, StringType):
        return arena.dupe(raw)
    if isinstance(descriptor, BoolType):
        return parse_bool(raw)
    if isinstance(descriptor, IntType):
        return parse_int(descriptor, raw)
    if isinstance(descriptor, FloatType):
        return parse_float(raw)
    if isinstance(descriptor, DirType):
        return open_dir(Path.cwd(), raw)
    if isinstance(descriptor, OptionalType):
        if raw == "none":
            return None
        return parse(descriptor.inner, raw, arena)
    if isinstance(descriptor, EnumType):
        return parse_enum(descriptor, raw)
    if isinstance(descriptor, UnionType):
        return parse_union(descriptor, raw, arena)
    if isinstance(descriptor, FixedArrayType):
        return parse_fixed_array(descriptor, raw, arena)
    if isinstance(descriptor, ArrayType):
        return parse_array(descriptor, raw, arena)
    if isinstance(descriptor, CustomType):
        value = descriptor.parse(raw, arena)
        if descriptor.free is not None:
            arena.own(value, descriptor.free)
        return value
    raise TypeError(f"Unsupported type descriptor: {descriptor!r}")


def parse_bool(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise InvalidBooleanError(f"Invalid boolean: {raw!r}")


def parse_int(descriptor: IntType, raw: str) -> int:
    """Parse a decimal or ``0b``/``0o``/``0x`` prefixed integer.

    Any other literal of more than two characters starting with ``0`` is
    rejected with InvalidBaseError, so ``019`` is an error rather than 19.
    """
    base = 10
    digits = raw
    if len(raw) > 2 and raw[0] == "0":
        base = _INT_BASES.get(raw[1].lower(), 0)
        if base == 0:
            raise InvalidBaseError(f"Invalid integer base: {raw!r}")
        digits = raw[2:]
        # int() would accept a second prefix matching the base ("0x0x1")
        if digits.lstrip("+-")[:2].lower() == raw[:2].lower():
            raise InvalidNumberError(f"Invalid {descriptor}: {raw!r}")

    # ASCII digits only, no whitespace anywhere
    if not _INT_DIGITS_RE.fullmatch(digits):
        raise InvalidNumberError(f"Invalid {descriptor}: {raw!r}")

    try:
        value = int(digits, base)
    except ValueError as exc:
        raise InvalidNumberError(f"Invalid {descriptor}: {raw!r}") from exc

    if not descriptor.min_value <= value <= descriptor.max_value:
        raise InvalidNumberError(f"Value out of range for {descriptor}: {raw!r}")
    return value


def parse_float(raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise InvalidNumberError(f"Invalid float: {raw!r}") from exc


def parse_enum(descriptor: EnumType, raw: str) -> Any:
    if raw not in descriptor.variants:
        raise InvalidEnumVariantError(
            f"Invalid variant {raw!r}, expected one of: {', '.join(descriptor.variants)}"
        )
    if descriptor.enum_cls is not None:
        return descriptor.enum_cls[raw]
    return raw


def parse_union(descriptor: UnionType, raw: str, arena: Arena) -> Tagged:
    """Parse ``tag`` or ``tag(payload)``.

    The payload spans from the first ``(`` to the last ``)``, so nested
    parentheses inside the payload need no escaping.
    """
    open_at = raw.find("(")
    if open_at == -1:
        open_at = len(raw)
    tag = raw[:open_at].rstrip(WHITESPACES)

    if tag not in descriptor.variants:
        raise InvalidUnionVariantError(
            f"Invalid variant {tag!r}, expected one of: {', '.join(descriptor.variants)}"
        )

    payload = descriptor.variants[tag]
    if payload is None:
        return Tagged(tag)

    start = open_at + 1
    end = raw.rfind(")")
    if end == -1 or start >= end:
        raise UnclosedParenthesisError(f"Unclosed parenthesis in {raw!r}")
    inner_raw = raw[start:end].strip(WHITESPACES)
    if not inner_raw:
        raise UnclosedParenthesisError(f"Empty payload in {raw!r}")

    return Tagged(tag, parse(payload, inner_raw, arena))


def parse_fixed_array(descriptor: FixedArrayType, raw: str, arena: Arena) -> Tuple[Any, ...]:
    items = split_raw_array(raw)
    n_items = items.count()
    if descriptor.strict and n_items != descriptor.length:
        raise ArrayLengthError(
            f"Expected {descriptor.length} item(s), got {n_items}: {raw!r}"
        )

    container: List[Any] = [None] * descriptor.length
    _parse_items(descriptor.element, items, container, arena)
    return tuple(container)


def parse_array(descriptor: ArrayType, raw: str, arena: Arena) -> List[Any]:
    items = split_raw_array(raw)
    container = arena.alloc_list(items.count())
    _parse_items(descriptor.element, items, container, arena)
    return container


def _parse_items(element: TypeDescriptor, items, container: List[Any], arena: Arena) -> None:
    """Fill ``container`` from raw items, dropping items beyond its length."""
    for i, item in enumerate(items):
        if i >= len(container):
            break
        escaped = unescape(item.strip(WHITESPACES))
        container[i] = parse(element, escaped, arena)


def open_dir(base: Path, raw: str) -> Path:
    """Resolve ``raw`` against ``base`` and make sure it is a directory.

    Raises:
        FileNotFoundError: Nothing exists at the path.
        NotADirectoryError: The path exists but is not a directory.
    """
    path = base / raw
    if not path.exists():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
    if not path.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(path))
    return path.resolve()


__all__ = [
    "parse",
    "parse_bool",
    "parse_int",
    "parse_float",
    "parse_enum",
    "parse_union",
    "parse_fixed_array",
    "parse_array",
    "open_dir",
]
