"""Resolve a LoaderConfig from whatever the caller passes.

Sessions, the API helpers and ``palconf check -c`` all accept a config
source. A source is a ready ``LoaderConfig``, a mapping of its fields, a
``.toml``/``.json`` file, or the same text inline::

    palconf check app.settings:SCHEMA app.conf -c 'buffer_size = 8192'

TOML sources may keep the settings under a ``[palconf]`` table so they can
share a file with other tools.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

from palconf.config.schema import LoaderConfig

logger = logging.getLogger("palconf.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], LoaderConfig, None]

_SECTION = "palconf"


def load_loader_config(source: ConfigSource) -> LoaderConfig:
    """Build the LoaderConfig described by ``source``.

    Args:
        source: None for defaults, a LoaderConfig (returned as is), a dict of
            fields, a path to a TOML/JSON file, or inline TOML/JSON text.

    Returns:
        LoaderConfig instance.

    Raises:
        ValidationError: A field value is invalid or the field is unknown.
        ValueError: The text does not hold a table of settings.
        TypeError: ``source`` is of an unsupported type.
    """
    if source is None:
        return LoaderConfig()
    if isinstance(source, LoaderConfig):
        return source
    if isinstance(source, dict):
        return LoaderConfig.from_dict(source)
    if not isinstance(source, (str, Path)):
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    path = Path(source)
    if path.is_file():
        logger.debug("Reading loader settings from %s", path)
        data = _parse(path.read_text(encoding="utf-8"), path.suffix.lower())
    else:
        data = _parse(str(source), "")

    if not isinstance(data, dict):
        raise ValueError("Loader settings must be a table of fields")
    section = data.get(_SECTION)
    if isinstance(section, dict):
        data = section
    return LoaderConfig.from_dict(data)


def _parse(text: str, suffix: str) -> Any:
    if suffix == ".json":
        return json.loads(text)
    if suffix == ".toml":
        return tomllib.loads(text)
    if text.lstrip().startswith("{"):
        return json.loads(text)
    return tomllib.loads(text)


__all__ = ["load_loader_config", "ConfigSource"]
