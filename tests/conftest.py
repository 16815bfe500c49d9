"""Fixtures shared by the palconf tests."""

from __future__ import annotations

import pytest

from _schemas import GAME_SCHEMA
from palconf import Schema


@pytest.fixture
def game_schema() -> Schema:
    return GAME_SCHEMA


@pytest.fixture
def game_text() -> str:
    return (
        "# vim: noet:ts=4\n"
        "auto_start   on\n"
        "auto_exit    none\n"
        "\n"
        "# another comment\n"
        "difficulty   hard\n"
        "description  Hello, world!\n"
        "magic        42\n"
        "mode         time(1000)\n"
        "altmode      zen\n"
        "range        69, 96\n"
        "coords       (1, 2), (3, 4)\n"
        "# zig_magic is not in the input\n"
    )
