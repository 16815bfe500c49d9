"""palconf - schema-guided loader for line-oriented configuration files.

A configuration file is a list of ``name value`` lines::

    # editor.conf
    tabstop      4
    theme        rgb(42, 76, 97)
    include      local.conf

Each value is parsed against the type descriptor of the matching schema
field.
"""

from palconf.api import embed, embed_file, from_file, from_string
from palconf.arena import Arena
from palconf.config import LoaderConfig, load_loader_config
from palconf.errors import (
    ArrayLengthError,
    DuplicateFieldError,
    EmbedError,
    IncludeDepthError,
    InvalidBaseError,
    InvalidBooleanError,
    InvalidEnumVariantError,
    InvalidFieldError,
    InvalidNumberError,
    InvalidUnionVariantError,
    InvalidVariantError,
    LineTooLongError,
    MissingRequiredFieldError,
    PalError,
    ReservedFieldNameError,
    SchemaError,
    SessionReleasedError,
    StructError,
    UnclosedParenthesisError,
    UnexpectedPatternError,
)
from palconf.schema import NO_DEFAULT, Field, Schema
from palconf.session import ParseSession
from palconf.splitter import WHITESPACES, split_raw_array, unescape
from palconf.types import (
    BOOL,
    DIR,
    FLOAT,
    I8,
    I16,
    I32,
    I64,
    STRING,
    U8,
    U16,
    U32,
    U64,
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
    UnionType,
)
from palconf.values import parse

__version__ = "0.1.0"

__all__ = [
    "embed",
    "embed_file",
    "from_file",
    "from_string",
    "parse",
    "split_raw_array",
    "unescape",
    "WHITESPACES",
    "Arena",
    "ParseSession",
    "LoaderConfig",
    "load_loader_config",
    "Field",
    "Schema",
    "NO_DEFAULT",
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
    "PalError",
    "InvalidNumberError",
    "InvalidBaseError",
    "InvalidBooleanError",
    "InvalidVariantError",
    "InvalidEnumVariantError",
    "InvalidUnionVariantError",
    "UnclosedParenthesisError",
    "ArrayLengthError",
    "StructError",
    "UnexpectedPatternError",
    "InvalidFieldError",
    "MissingRequiredFieldError",
    "LineTooLongError",
    "IncludeDepthError",
    "SessionReleasedError",
    "SchemaError",
    "ReservedFieldNameError",
    "DuplicateFieldError",
    "EmbedError",
]
