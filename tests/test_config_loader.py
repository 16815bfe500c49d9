"""Tests for loading LoaderConfig from various sources."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from palconf import LoaderConfig, load_loader_config


def test_none_gives_defaults() -> None:
    config = load_loader_config(None)

    assert config == LoaderConfig()
    assert config.buffer_size == 4096
    assert config.encoding == "utf-8"


def test_dict_source() -> None:
    config = load_loader_config({"buffer_size": 1024, "require_all_fields": True})

    assert config.buffer_size == 1024
    assert config.require_all_fields is True


def test_instance_passes_through() -> None:
    config = LoaderConfig(max_include_depth=4)

    assert load_loader_config(config) is config


def test_toml_file(tmp_path: Path) -> None:
    path = tmp_path / "palconf.toml"
    path.write_text("[palconf]\nbuffer_size = 512\nencoding = \"latin-1\"\n", encoding="utf-8")

    config = load_loader_config(path)

    assert config.buffer_size == 512
    assert config.encoding == "latin-1"


def test_json_file(tmp_path: Path) -> None:
    path = tmp_path / "palconf.json"
    path.write_text('{"max_include_depth": 3}', encoding="utf-8")

    assert load_loader_config(str(path)).max_include_depth == 3


def test_inline_strings() -> None:
    assert load_loader_config('{"buffer_size": 100}').buffer_size == 100
    assert load_loader_config("buffer_size = 200").buffer_size == 200


def test_validation_errors() -> None:
    with pytest.raises(ValidationError):
        load_loader_config({"buffer_size": 8})
    with pytest.raises(ValidationError):
        load_loader_config({"encoding": "no-such-codec"})
    with pytest.raises(ValidationError):
        load_loader_config({"unknown": True})


@pytest.mark.parametrize("encoding", ["utf-16", "utf-16-le", "utf-32", "cp037"])
def test_rejects_encodings_without_ascii_line_breaks(encoding: str) -> None:
    with pytest.raises(ValidationError):
        LoaderConfig(encoding=encoding)


def test_accepts_ascii_compatible_encodings() -> None:
    assert LoaderConfig(encoding="latin-1").encoding == "latin-1"
    assert LoaderConfig(encoding="cp1252").encoding == "cp1252"


def test_non_mapping_rejected(tmp_path: Path) -> None:
    path = tmp_path / "palconf.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_loader_config(path)
    with pytest.raises(ValueError):
        load_loader_config("[1, 2]")


def test_inline_toml_section() -> None:
    config = load_loader_config("[palconf]\nmax_include_depth = 2\n")

    assert config.max_include_depth == 2


def test_unsupported_source_type() -> None:
    with pytest.raises(TypeError):
        load_loader_config(42)  # type: ignore[arg-type]
