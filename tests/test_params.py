"""Tests for the parameter section parser."""

import itertools

import pytest

from docmeta.errors import DefinitionError
from docmeta.models import ParamKind
from docmeta.params import parse_params

BODY = """- body: content (positional, required)
  The content to show.

- width: int (named, settable)
  The width of the box.

  Measured in points.

  # Example
  ```
  #box(width: 5)
  ```

- children: content (positional, variadic)
  Further content."""


class TestParseParams:
    def test_params_in_source_order(self, registry):
        params = parse_params(BODY, registry)
        assert [p.name for p in params] == ["body", "width", "children"]

    def test_flags(self, registry):
        body, width, children = parse_params(BODY, registry)

        assert body.kind is ParamKind.REQUIRED_POSITIONAL
        assert body.positional and body.required
        assert not body.named and not body.variadic and not body.settable

        assert width.kind is ParamKind.OPTIONAL_NAMED
        assert width.named and width.settable
        assert not width.positional and not width.required

        assert children.kind is ParamKind.VARIADIC
        assert children.variadic and children.positional

    def test_type_resolution(self, registry):
        body, width, _ = parse_params(BODY, registry)
        assert body.type_name == "content"
        assert width.cast is registry.resolve("int")

    def test_docs_are_dedented(self, registry):
        _, width, children = parse_params(BODY, registry)
        assert width.docs == "The width of the box.\n\nMeasured in points."
        assert children.docs == "Further content."

    def test_nested_example(self, registry):
        body, width, _ = parse_params(BODY, registry)
        assert width.example == "#box(width: 5)"
        assert body.example is None

    def test_empty_section(self, registry):
        assert parse_params("", registry) == []
        assert parse_params(None, registry) == []

    def test_positional_and_named(self, registry):
        [p] = parse_params("- x: int (positional, named, required)", registry)
        assert p.kind is ParamKind.REQUIRED_POSITIONAL_OR_NAMED
        assert p.flags() == ["named", "positional", "required"]
        assert p.docs == ""


class TestParamErrors:
    def test_neither_named_nor_positional(self, registry):
        with pytest.raises(DefinitionError, match="named, positional, or both"):
            parse_params("- x: int (required)", registry)

    def test_variadic_requires_positional(self, registry):
        with pytest.raises(DefinitionError, match="must be positional"):
            parse_params("- x: int (named, variadic)", registry)

    def test_variadic_and_named(self, registry):
        with pytest.raises(DefinitionError, match="cannot be named"):
            parse_params("- x: int (positional, named, variadic)", registry)

    def test_required_and_variadic(self, registry):
        with pytest.raises(DefinitionError, match="cannot be required"):
            parse_params("- x: int (positional, required, variadic)", registry)

    def test_unknown_flag(self, registry):
        with pytest.raises(DefinitionError, match="unknown parameter flag 'optional'"):
            parse_params("- x: int (positional, optional)", registry)

    def test_unknown_type(self, registry):
        with pytest.raises(DefinitionError, match="unknown parameter type 'Widget'"):
            parse_params("- x: Widget (positional)", registry)

    def test_missing_flag_list(self, registry):
        with pytest.raises(DefinitionError, match="expected '\\('"):
            parse_params("- x: int\n  No flags.", registry)

    def test_missing_colon(self, registry):
        with pytest.raises(DefinitionError, match="expected ': '"):
            parse_params("- x int (positional)", registry)

    def test_prose_before_first_bullet(self, registry):
        with pytest.raises(DefinitionError, match="expected parameter bullet"):
            parse_params("Some text.\n- x: int (positional)", registry)

    def test_error_names_definition(self, registry):
        with pytest.raises(DefinitionError) as exc_info:
            parse_params("- x: int ()", registry, definition="rect")
        assert exc_info.value.definition == "rect"
        assert str(exc_info.value).startswith("rect: ")


class TestParamKind:
    def test_valid_flag_table(self):
        valid = [
            flags
            for flags in itertools.product([False, True], repeat=4)
            if ParamKind.from_flags(
                named=flags[0], positional=flags[1], required=flags[2], variadic=flags[3]
            )
            is not None
        ]
        assert len(valid) == len(ParamKind)

    def test_invalid_combinations(self):
        for named, positional, required, variadic in itertools.product(
            [False, True], repeat=4
        ):
            invalid = (
                (not named and not positional)
                or (variadic and not positional)
                or (variadic and named)
                or (required and variadic)
            )
            kind = ParamKind.from_flags(
                named=named, positional=positional, required=required, variadic=variadic
            )
            assert (kind is None) == invalid

    def test_properties_round_trip(self):
        for kind in ParamKind:
            assert (
                ParamKind.from_flags(
                    named=kind.named,
                    positional=kind.positional,
                    required=kind.required,
                    variadic=kind.variadic,
                )
                is kind
            )
