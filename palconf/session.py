"""Parse sessions: apply configuration lines to a schema instance.

A session owns the target instance, the arena holding every value parsed
into it, and the directory used to resolve ``include`` and ``config_dir``
paths. Lines are applied strictly in order; a later line for the same field
overwrites the earlier value, which is how included defaults get
overridden::

    include      defaults.conf
    tabstop      8
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace
from typing import List, Optional, Union

from palconf.arena import Arena
from palconf.config import LoaderConfig, load_loader_config
from palconf.config.loader import ConfigSource
from palconf.errors import IncludeDepthError, PalError, SessionReleasedError
from palconf.schema import Schema
from palconf.splitter import WHITESPACES
from palconf.stream import ByteSource, iter_lines, stream_lines
from palconf.values import open_dir, parse

logger = logging.getLogger("palconf.session")

PathLike = Union[str, Path]


class ParseSession:
    """One end-to-end parse of configuration input into a schema instance.

    Not safe to drive from several threads; independent sessions share no
    state.

    Attributes:
        schema: Fields the input may assign.
        config: Loader settings.
        arena: Owner of every value stored in the instance.
        config_dir: Directory against which relative paths are resolved.
    """

    def __init__(
        self,
        schema: Schema,
        config: ConfigSource = None,
        config_dir: Optional[PathLike] = None,
    ) -> None:
        self.schema = schema
        self.config: LoaderConfig = load_loader_config(config)
        self.arena = Arena()
        self.config_dir = Path(config_dir) if config_dir is not None else Path.cwd()
        self._instance = schema.default_instance()
        self._depth = 0

    def __enter__(self) -> "ParseSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.arena.released else "active"
        return f"ParseSession({self.schema.name!r}, {state})"

    @property
    def instance(self) -> SimpleNamespace:
        """The parsed instance; invalid once the session is released."""
        if self.arena.released:
            raise SessionReleasedError(f"Session for {self.schema.name} was released")
        return self._instance

    def missing(self) -> List[str]:
        """Names of required fields that no line has assigned yet."""
        return self.schema.missing(self.instance)

    def release(self) -> None:
        """Release the arena; every value produced by this session becomes invalid."""
        self.arena.release()

    # ------------------------------------------------------------------
    # Line assembly
    # ------------------------------------------------------------------

    def line(self, raw: str) -> None:
        """Apply one configuration line.

        Comments and blank lines are ignored, as are names that match no
        field: configuration files may carry settings for newer versions.

        Args:
            raw: One line of input, without line break.

        Raises:
            PalError: The value does not parse.
            OSError: A directive could not open its path.
        """
        if self.arena.released:
            raise SessionReleasedError(f"Session for {self.schema.name} was released")

        trimmed = raw.strip(WHITESPACES)
        if not trimmed or trimmed[0] == "#":
            return

        i = 0
        while i < len(trimmed) and trimmed[i] not in WHITESPACES:
            i += 1
        field_name = trimmed[:i]
        raw_value = trimmed[i:].strip(WHITESPACES)

        if field_name == "config_dir":
            self.config_dir = open_dir(self.config_dir, raw_value)
            logger.debug("config_dir set to %s", self.config_dir)
            return

        if field_name == "include":
            self.file(raw_value)
            return

        field = self.schema.find(field_name)
        if field is None:
            logger.debug("Ignoring unknown field %r", field_name)
            return

        setattr(self._instance, field.name, parse(field.type, raw_value, self.arena))

    def feed(self, text: str, source: str, line_number: int) -> int:
        """Apply every line of ``text``, attributing failures to their line.

        Args:
            text: One or more lines.
            source: Input name for diagnostics.
            line_number: Number of the first line in ``text``.

        Returns:
            The number of the line following ``text``.
        """
        for raw_line in iter_lines(text):
            try:
                self.line(raw_line)
            except PalError as exc:
                exc.attach_line(source, line_number, raw_line)
                logger.error("Error at %s:%d: %r", source, line_number, raw_line)
                raise
            except OSError:
                logger.error("Error at %s:%d: %r", source, line_number, raw_line)
                raise
            line_number += 1
        return line_number

    def string(self, raw: str, source: str = "<string>") -> None:
        """Apply a complete in-memory configuration text."""
        self.feed(raw, source, 1)

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    def file(self, path: PathLike) -> None:
        """Stream a configuration file, resolved against ``config_dir``.

        Raises:
            IncludeDepthError: Includes nest deeper than the configured limit.
            OSError: The file cannot be opened or read.
        """
        if self._depth >= self.config.max_include_depth:
            raise IncludeDepthError(
                f"Includes nested deeper than {self.config.max_include_depth} at {path}"
            )

        full_path = self.config_dir / path
        logger.debug("Reading %s (depth %d)", full_path, self._depth)
        with open(full_path, "rb") as f:
            self.stream(f, str(full_path))

    def stream(self, source: ByteSource, name: str = "<stream>") -> None:
        """Apply every line read from an open byte source."""
        self._depth += 1
        try:
            stream_lines(
                self,
                source,
                name,
                buffer_size=self.config.buffer_size,
                encoding=self.config.encoding,
            )
        finally:
            self._depth -= 1


__all__ = ["ParseSession"]
