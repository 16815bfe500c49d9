"""Public entry points for loading configuration.

Runtime loading returns a live ``ParseSession`` whose errors are ordinary
exceptions. Ahead-of-time loading (``embed``) is meant for module-level
defaults that ship with the program::

    DEFAULT = embed_file(SCHEMA, Path(__file__).with_name("editor.conf"))

and treats any failure as fatal.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Optional

from palconf.config.loader import ConfigSource
from palconf.errors import EmbedError, MissingRequiredFieldError, PalError
from palconf.schema import Schema
from palconf.session import ParseSession, PathLike

logger = logging.getLogger("palconf.api")


def _check_complete(session: ParseSession) -> None:
    if not session.config.require_all_fields:
        return
    missing = session.missing()
    if missing:
        raise MissingRequiredFieldError(
            f"Missing required field(s) for {session.schema.name}: {', '.join(missing)}"
        )


def from_string(schema: Schema, raw: str, config: ConfigSource = None) -> ParseSession:
    """Parse an in-memory configuration text.

    Args:
        schema: Target schema.
        raw: Configuration text.
        config: Loader configuration source.

    Returns:
        ParseSession holding the instance. The caller releases it.
    """
    session = ParseSession(schema, config=config)
    try:
        session.string(raw)
        _check_complete(session)
    except BaseException:
        session.release()
        raise
    return session


def from_file(
    schema: Schema,
    path: PathLike,
    config: ConfigSource = None,
    config_dir: Optional[PathLike] = None,
) -> ParseSession:
    """Parse a configuration file and everything it includes.

    Args:
        schema: Target schema.
        path: File path, relative to ``config_dir`` when not absolute.
        config: Loader configuration source.
        config_dir: Base directory; the working directory by default.

    Returns:
        ParseSession holding the instance. The caller releases it.
    """
    session = ParseSession(schema, config=config, config_dir=config_dir)
    try:
        session.file(path)
        _check_complete(session)
    except BaseException:
        session.release()
        raise
    return session


def embed(schema: Schema, raw: str) -> SimpleNamespace:
    """Build an instance from text known before the program runs.

    The session is never released: the instance lives as long as the
    program.

    Raises:
        EmbedError: The text does not parse.
    """
    session = ParseSession(schema)
    try:
        session.string(raw, source=f"<embedded {schema.name}>")
    except (PalError, OSError) as exc:
        logger.critical("Embedded %s configuration failed to parse: %s", schema.name, exc)
        raise EmbedError(f"Parse failed for embedded {schema.name}: {exc}") from exc
    return session.instance


def embed_file(schema: Schema, path: PathLike, encoding: str = "utf-8") -> SimpleNamespace:
    """Like ``embed``, reading the text from ``path`` first."""
    try:
        raw = Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        logger.critical("Embedded configuration %s could not be read: %s", path, exc)
        raise EmbedError(f"Cannot read embedded configuration {path}: {exc}") from exc
    return embed(schema, raw)


__all__ = ["from_string", "from_file", "embed", "embed_file"]
