"""Exception hierarchy for palconf.

Every failure raised while parsing a value or a line derives from
``PalError`` so callers can catch configuration problems in one place.
I/O failures (``OSError`` and friends) are not wrapped: they propagate
exactly as the byte source raised them.
"""

from typing import Optional


class PalError(Exception):
    """Base class for palconf parse failures.

    When the failure happened while feeding a session, the originating line
    is attached for diagnostics.

    Attributes:
        line_number: 1-based number of the failing line, if known.
        line: Raw text of the failing line, if known.
        source: Name of the input (file path or ``<string>``), if known.
    """

    def __init__(self, *args) -> None:
        super().__init__(*args)
        self.line_number: Optional[int] = None
        self.line: Optional[str] = None
        self.source: Optional[str] = None

    def attach_line(self, source: str, line_number: int, line: str) -> None:
        """Record where the error happened unless an inner frame already did.

        Args:
            source: Input name.
            line_number: 1-based line number.
            line: Raw line text.
        """
        if self.line_number is not None:
            return
        self.source = source
        self.line_number = line_number
        self.line = line

    def __str__(self) -> str:
        message = super().__str__()
        if self.line_number is None:
            return message
        return f"{message} ({self.source}:{self.line_number}: {self.line!r})"


# =============================================================================
# Value errors
# =============================================================================

class InvalidNumberError(PalError, ValueError):
    """Malformed integer or float literal, or a value outside the declared width."""
    pass


class InvalidBaseError(InvalidNumberError):
    """Integer starting with ``0`` that is not followed by ``b``, ``o`` or ``x``."""
    pass


class InvalidBooleanError(PalError, ValueError):
    """Boolean other than ``true`` or ``false``."""
    pass


class InvalidVariantError(PalError, ValueError):
    """Name that matches no declared variant."""
    pass


class InvalidEnumVariantError(InvalidVariantError):
    pass


class InvalidUnionVariantError(InvalidVariantError):
    pass


class UnclosedParenthesisError(PalError, ValueError):
    """Tagged union payload with a missing, misplaced or empty ``(...)`` span."""
    pass


class ArrayLengthError(PalError, ValueError):
    """Fixed array whose item count differs from its declared length."""
    pass


# =============================================================================
# Struct errors raised by host parse hooks
# =============================================================================

class StructError(PalError):
    """Base class for failures raised by custom parse hooks."""
    pass


class UnexpectedPatternError(StructError):
    pass


class InvalidFieldError(StructError):
    pass


class MissingRequiredFieldError(StructError):
    pass


# =============================================================================
# Streaming and session errors
# =============================================================================

class LineTooLongError(PalError):
    """A line does not fit into the read buffer."""
    pass


class IncludeDepthError(PalError):
    """``include`` directives nested deeper than the configured limit."""
    pass


class SessionReleasedError(PalError):
    """The session arena was released; its values are no longer valid."""
    pass


class SchemaError(PalError):
    """Invalid schema declaration."""
    pass


class ReservedFieldNameError(SchemaError):
    pass


class DuplicateFieldError(SchemaError):
    pass


class EmbedError(RuntimeError):
    """Ahead-of-time construction failed.

    Deliberately not a ``PalError``: an embedded default that does not parse
    is a programming error, not a recoverable configuration problem.
    """
    pass


__all__ = [
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
