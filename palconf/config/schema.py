"""Loader configuration using Pydantic for validation.

These settings tune how sessions read their input. They are not part of any
parsed schema; a session falls back to ``LoaderConfig()`` when none is given.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator


class LoaderConfig(BaseModel):
    """Settings shared by every session created with this configuration.

    Attributes:
        buffer_size: Capacity of the streaming read buffer in bytes. A line
            must be shorter than this.
        encoding: Text encoding of configuration files.
        max_include_depth: Maximum nesting of ``include`` directives.
        require_all_fields: Fail a finished load when required fields were
            never assigned.
    """

    buffer_size: int = Field(default=4096, ge=64)
    encoding: str = "utf-8"
    max_include_depth: int = Field(default=32, ge=1, le=1024)
    require_all_fields: bool = False

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that the encoding is known and ASCII-compatible.

        Input is cut at ``\\r`` and ``\\n`` bytes before decoding, so those
        must encode as single ASCII bytes.
        """
        try:
            line_breaks = "\r\n".encode(v)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding '{v}'") from exc
        if line_breaks != b"\r\n":
            raise ValueError(f"Encoding '{v}' is not ASCII-compatible")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoaderConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
