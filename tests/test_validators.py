"""Tests for documentation validation, coverage and Markdown output."""

from docmeta.builder import build_descriptor
from docmeta.generators import generate_index, generate_markdown
from docmeta.models import DocumentedFunction, ExtractionResult
from docmeta.validators import compute_coverage, validate_docs

DOCS = """Draw a line.

# Tags
- shapes

# Parameters
- start: array (positional, required)
  Start point.
- end: array (positional, required)
  End point.

  # Example
  ```
  #line((0, 0), (1, 1))
  ```

# Syntax
Also `#line`."""


def _documented(name="line", docs=DOCS, declared=("start", "end"), language="python"):
    return DocumentedFunction(
        descriptor=build_descriptor(name, docs),
        language=language,
        signature=f"{name}({', '.join(declared)})",
        source_file="shapes.py",
        line_number=3,
        declared_params=list(declared),
    )


class TestValidateDocs:
    def test_clean(self):
        result = ExtractionResult(functions=[_documented()], all_public_functions=["line"])
        validation = validate_docs([result])
        assert validation.errors == []
        assert validation.warnings == []

    def test_undeclared_parameter_is_error(self):
        result = ExtractionResult(
            functions=[_documented(declared=("start",))], all_public_functions=["line"]
        )
        validation = validate_docs([result])
        assert validation.errors == ["line: documented parameter 'end' is not declared"]

    def test_undocumented_parameter_is_warning(self):
        result = ExtractionResult(
            functions=[_documented(declared=("start", "end", "stroke"))],
            all_public_functions=["line"],
        )
        validation = validate_docs([result])
        assert validation.errors == []
        assert validation.warnings == ["line: parameter 'stroke' is undocumented"]

    def test_missing_description(self):
        result = ExtractionResult(
            functions=[_documented(name="f", docs="# Tags\n- x", declared=())],
            all_public_functions=["f"],
        )
        assert validate_docs([result]).warnings == ["f: missing description"]
        assert validate_docs([result], strict=True).errors == ["f: missing description"]

    def test_extraction_issues_become_warnings(self):
        result = ExtractionResult(functions=[], all_public_functions=[], issues=["x.sql: oops"])
        assert validate_docs([result]).warnings == ["x.sql: oops"]


class TestCoverage:
    def test_by_language(self):
        results = [
            ExtractionResult(functions=[_documented()], all_public_functions=["line", "circle"]),
            ExtractionResult(functions=[], all_public_functions=["a.b"], language="sql"),
        ]
        assert compute_coverage(results) == {"python": 0.5, "sql": 0.0}

    def test_empty_is_full(self):
        result = ExtractionResult(functions=[], all_public_functions=[])
        assert compute_coverage([result]) == {"python": 1.0}


class TestGenerators:
    def test_reference(self):
        result = ExtractionResult(functions=[_documented()], all_public_functions=["line"])
        md = generate_markdown("Shapes", [result])

        assert "# Shapes" in md
        assert "## shapes" in md
        assert "### line" in md
        assert "line(start, end)" in md
        assert "| `start` | `array` | positional, required | Start point. |" in md
        assert "#line((0, 0), (1, 1))" in md
        assert "**Syntax:** Also `#line`." in md
        assert "*Source: shapes.py:3*" in md

    def test_empty_reference(self):
        md = generate_markdown("Shapes", [ExtractionResult([], [])])
        assert "No documented functions yet" in md

    def test_index_links(self):
        result = ExtractionResult(
            functions=[_documented(name="draw.line")], all_public_functions=["draw.line"]
        )
        index = generate_index("Shapes", [result])
        assert "| [`draw.line`](reference.md#drawline) | Draw a line. |" in index
