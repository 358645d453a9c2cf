"""Tests for the host type registry and argument casting."""

import uuid

import pytest

from docmeta.errors import CastError, DefinitionError
from docmeta.params import parse_params
from docmeta.types import TypeRegistry, cast, sql_registry


class TestRegistry:
    def test_resolve_known(self, registry):
        info = registry.resolve("int")
        assert info.name == "int"
        assert info.describe() == "int"

    def test_resolve_unknown(self, registry):
        with pytest.raises(DefinitionError, match="unknown parameter type 'Length'"):
            registry.resolve("Length")

    def test_aliases_share_cast_info(self, registry):
        assert registry.resolve("Content") is registry.resolve("content")
        assert registry.resolve("Value") is registry.resolve("any")

    def test_contains_and_names(self, registry):
        assert "str" in registry
        assert "Widget" not in registry
        assert "bool" in registry.names()

    def test_register(self):
        registry = TypeRegistry()
        registry.register("color", str)
        assert registry.resolve("color").accepts("red")
        assert not registry.resolve("color").accepts(1)

    def test_sql_registry(self):
        registry = sql_registry()
        assert registry.resolve("integer") is registry.resolve("bigint")
        assert registry.resolve("uuid").accepts(uuid.uuid4())


class TestCast:
    def test_accepts_matching_value(self, registry):
        assert cast(3, registry.resolve("int")) == 3

    def test_bool_is_not_int(self, registry):
        with pytest.raises(CastError) as exc_info:
            cast(True, registry.resolve("int"))
        assert exc_info.value.expected == "int"
        assert exc_info.value.found == "bool"

    def test_float_coerces_int(self, registry):
        value = cast(2, registry.resolve("float"))
        assert value == 2.0
        assert isinstance(value, float)

    def test_any_accepts_everything(self, registry):
        info = registry.resolve("any")
        for value in (None, 1, "x", [1], {"a": 1}):
            assert cast(value, info) == value

    def test_none(self, registry):
        assert cast(None, registry.resolve("none")) is None
        with pytest.raises(CastError, match="expected none, found int"):
            cast(0, registry.resolve("none"))

    def test_param_check_names_parameter(self, registry):
        [param] = parse_params("- size: int (named)", registry)
        with pytest.raises(CastError, match="size: expected int, found str"):
            param.check("12")
