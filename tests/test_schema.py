"""Tests for schema declaration and default instances."""

from __future__ import annotations

import pytest

from palconf import (
    STRING,
    U8,
    ArrayType,
    DuplicateFieldError,
    Field,
    OptionalType,
    ReservedFieldNameError,
    Schema,
)


@pytest.mark.parametrize("name", ["include", "config_dir"])
def test_reserved_field_names_rejected(name: str) -> None:
    with pytest.raises(ReservedFieldNameError):
        Schema("Bad", [Field(name, STRING)])


def test_duplicate_field_names_rejected() -> None:
    with pytest.raises(DuplicateFieldError):
        Schema("Bad", [Field("a", U8), Field("a", STRING)])


def test_default_instance() -> None:
    schema = Schema(
        "Defaults",
        [
            Field("required", U8),
            Field("maybe", OptionalType(U8)),
            Field("maybe_set", OptionalType(U8), default=3),
            Field("tabstop", U8, default=4),
        ],
    )
    instance = schema.default_instance()

    assert not hasattr(instance, "required")
    assert instance.maybe is None
    assert instance.maybe_set == 3
    assert instance.tabstop == 4
    assert schema.missing(instance) == ["required"]


def test_default_instances_do_not_share_mutable_defaults() -> None:
    schema = Schema("Lists", [Field("items", ArrayType(U8), default=[1, 2])])
    first = schema.default_instance()
    first.items.append(3)

    assert schema.default_instance().items == [1, 2]


def test_skipped_fields_are_not_assignable() -> None:
    schema = Schema(
        "Skips",
        [
            Field("visible", U8),
            Field("_internal", U8, default=1),
            Field("constant", U8, default=2, skip=True),
        ],
    )

    assert [f.name for f in schema.assignable_fields] == ["visible"]
    assert schema.find("visible") is not None
    assert schema.find("_internal") is None
    assert schema.find("constant") is None
    assert len(schema) == 3
