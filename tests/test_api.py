"""Tests for the runtime and ahead-of-time entry points."""

from __future__ import annotations

from pathlib import Path

import pytest

from palconf import (
    STRING,
    U8,
    EmbedError,
    Field,
    IncludeDepthError,
    InvalidNumberError,
    LoaderConfig,
    MissingRequiredFieldError,
    PalError,
    ParseSession,
    Schema,
    SessionReleasedError,
    embed,
    embed_file,
    from_file,
    from_string,
)

EDITOR = Schema(
    "Editor",
    [
        Field("tabstop", U8),
        Field("font", STRING, default="mono"),
    ],
)


def test_from_string() -> None:
    session = from_string(EDITOR, "tabstop 8\n")
    try:
        assert session.instance.tabstop == 8
        assert session.instance.font == "mono"
    finally:
        session.release()


def test_from_file_relative_to_config_dir(tmp_path: Path) -> None:
    (tmp_path / "editor.conf").write_text("tabstop 2\nfont serif", encoding="utf-8")

    with from_file(EDITOR, "editor.conf", config_dir=tmp_path) as session:
        assert session.instance.tabstop == 2
        assert session.instance.font == "serif"


def test_require_all_fields() -> None:
    config = LoaderConfig(require_all_fields=True)

    with pytest.raises(MissingRequiredFieldError):
        from_string(EDITOR, "font serif\n", config=config)

    with from_string(EDITOR, "tabstop 4\n", config=config) as session:
        assert session.instance.tabstop == 4


def test_include_cycle_hits_depth_limit(tmp_path: Path) -> None:
    (tmp_path / "a.conf").write_text("include b.conf\n", encoding="utf-8")
    (tmp_path / "b.conf").write_text("include a.conf\n", encoding="utf-8")

    with pytest.raises(IncludeDepthError):
        from_file(EDITOR, "a.conf", config={"max_include_depth": 8}, config_dir=tmp_path)


def test_embed() -> None:
    instance = embed(EDITOR, "tabstop 4\nfont   fira\n")

    assert instance.tabstop == 4
    assert instance.font == "fira"


def test_embed_failure_is_not_a_pal_error() -> None:
    with pytest.raises(EmbedError) as excinfo:
        embed(EDITOR, "tabstop lots\n")

    assert not isinstance(excinfo.value, PalError)
    assert isinstance(excinfo.value.__cause__, InvalidNumberError)


def test_embed_file(tmp_path: Path) -> None:
    path = tmp_path / "editor.conf"
    path.write_text("tabstop 3\n", encoding="utf-8")

    assert embed_file(EDITOR, path).tabstop == 3
    with pytest.raises(EmbedError):
        embed_file(EDITOR, tmp_path / "missing.conf")


def test_embed_file_undecodable(tmp_path: Path) -> None:
    path = tmp_path / "editor.conf"
    path.write_bytes(b"font caf\xe9\n")

    with pytest.raises(EmbedError) as excinfo:
        embed_file(EDITOR, path)

    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_failed_load_releases_session(monkeypatch: pytest.MonkeyPatch) -> None:
    released = []
    original_release = ParseSession.release

    def tracking_release(self) -> None:
        released.append(self)
        original_release(self)

    monkeypatch.setattr(ParseSession, "release", tracking_release)

    with pytest.raises(InvalidNumberError):
        from_string(EDITOR, "tabstop -1\n")

    assert len(released) == 1
    with pytest.raises(SessionReleasedError):
        released[0].instance
