"""Schema declarations: the ordered fields a configuration file may set.

A schema is built once by the host program and handed to every session::

    SCHEMA = Schema(
        "editor",
        [
            Field("tabstop", U8, default=4),
            Field("theme", OptionalType(STRING)),
        ],
    )
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from palconf.errors import DuplicateFieldError, ReservedFieldNameError
from palconf.types import OptionalType, TypeDescriptor

RESERVED_NAMES = ("include", "config_dir")
IGNORE_MARKER = "_"


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class Field:
    """One named field of a schema.

    Attributes:
        name: Field name as written in configuration files.
        type: Descriptor of the field value.
        default: Initial value, or NO_DEFAULT.
        skip: Exclude the field from assignment (constants, internals).
    """

    name: str
    type: TypeDescriptor
    default: Any = NO_DEFAULT
    skip: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @property
    def assignable(self) -> bool:
        """Whether configuration lines may set this field."""
        return not self.skip and not self.name.startswith(IGNORE_MARKER)

    @property
    def required(self) -> bool:
        return not self.has_default and not isinstance(self.type, OptionalType)


class Schema:
    """Ordered, uniquely named set of fields.

    Raises:
        ReservedFieldNameError: A field is named after a directive.
        DuplicateFieldError: Two fields share a name.
    """

    def __init__(self, name: str, fields: Iterable[Field]) -> None:
        self.name = name
        self.fields: Tuple[Field, ...] = tuple(fields)

        seen: Dict[str, Field] = {}
        for f in self.fields:
            if f.name in RESERVED_NAMES:
                raise ReservedFieldNameError(f"Field name is a keyword: {f.name}")
            if f.name in seen:
                raise DuplicateFieldError(f"Duplicate field in schema {name}: {f.name}")
            seen[f.name] = f

        self._assignable: Tuple[Field, ...] = tuple(f for f in self.fields if f.assignable)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        return f"Schema({self.name!r}, {len(self.fields)} fields)"

    @property
    def assignable_fields(self) -> Tuple[Field, ...]:
        return self._assignable

    def find(self, name: str) -> Optional[Field]:
        """Return the first assignable field called ``name``."""
        for f in self._assignable:
            if f.name == name:
                return f
        return None

    def default_instance(self) -> SimpleNamespace:
        """Build a fresh target instance holding the declared defaults.

        Optional fields without a default start as None. Required fields
        without a default are left unset until a line assigns them.
        """
        instance = SimpleNamespace()
        for f in self.fields:
            if f.has_default:
                setattr(instance, f.name, copy.deepcopy(f.default))
            elif isinstance(f.type, OptionalType):
                setattr(instance, f.name, None)
        return instance

    def missing(self, instance: SimpleNamespace) -> List[str]:
        """Names of required fields that ``instance`` does not hold yet."""
        return [f.name for f in self.fields if f.required and not hasattr(instance, f.name)]


__all__ = ["Field", "Schema", "NO_DEFAULT", "RESERVED_NAMES", "IGNORE_MARKER"]
