"""Tests for the docmeta command line."""

import json

from docmeta.cli import main

MODULE = '''
from docmeta import func


@func
def rect(width, height):
    """A rectangle.

    # Parameters
    - width: float (named)
      Width.
    - height: float (named)
      Height.
    """
'''


class TestDocsCommand:
    def test_generates_reference(self, write_module, tmp_path, capsys):
        path = write_module("shapes.py", MODULE)
        out = tmp_path / "out"

        assert main(["docs", str(path), "--out", str(out), "--title", "Shapes"]) == 0

        reference = (out / "reference.md").read_text()
        assert "### rect" in reference
        assert "# Shapes" in (out / "README.md").read_text()
        assert "Coverage: python 100%" in capsys.readouterr().out

    def test_definition_error_exits_nonzero(self, write_module, capsys):
        path = write_module("bad.py", MODULE.replace("(named)", "(settable)", 1))
        assert main(["docs", str(path)]) == 1
        assert "invalid combination" in capsys.readouterr().err

    def test_validation_error_exits_nonzero(self, write_module, capsys):
        path = write_module("shapes.py", MODULE.replace("def rect(width, height)", "def rect(width)"))
        assert main(["docs", str(path)]) == 1
        assert "documented parameter 'height' is not declared" in capsys.readouterr().out

    def test_rejects_other_files(self, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("x")
        assert main(["docs", str(path)]) == 1


class TestAnnotationsCommand:
    def test_json(self, tmp_path, capsys):
        path = tmp_path / "test.typ"
        path.write_text("// Ref: false\n// Error: 1:1-1:4 unknown variable\nfoo\n// Hint: oops\n")

        assert main(["annotations", str(path), "--json"]) == 0

        output = json.loads(capsys.readouterr().out)
        data = output[str(path)]
        assert data["compare_ref"] is False
        assert data["validate_hints"] is None
        assert data["annotations"] == [
            {"kind": "Hint", "range": None, "message": "oops"},
            {"kind": "Error", "range": [49, 52], "message": "unknown variable"},
        ]

    def test_text(self, tmp_path, capsys):
        path = tmp_path / "test.typ"
        path.write_text("// Error: 2-4 unknown variable\n#foo\n")

        assert main(["annotations", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Error: 2:2-2:4 unknown variable" in out
