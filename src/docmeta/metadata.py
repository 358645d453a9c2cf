"""Test metadata parsing.

Test sources carry their expectations in comment directives of the form
`// Key: value`:

    // Ref: false
    // Error: 1:2-1:5 expected expression
    #let x = (1 +)

`Ref` and `Hints` configure the harness; `Error`, `Warning` and `Hint`
describe diagnostics the compiler must report. Positions are relative to the
first code line after the comment block, see `docmeta.positions`.
"""

from __future__ import annotations

import logging
import re

from .models import Annotation, AnnotationKind, TestConfiguration, TestPartMetadata
from .positions import resolve_range, starts_with_position
from .source import Source
from .version import compiler_version

log = logging.getLogger(__name__)

_FLAG_VALUES = {"true": True, "false": False}
_KEYS = frozenset({"Ref", "Hints"} | {kind.value for kind in AnnotationKind})
_DIRECTIVE_RE = re.compile(r"^// (\w+): ")


def get_metadata(line: str, key: str) -> str | None:
    """Value of a `// {key}: value` directive, or None if the line isn't one."""
    prefix = f"// {key}: "
    if line.startswith(prefix):
        return line[len(prefix) :]
    return None


def get_flag_metadata(line: str, key: str) -> bool | None:
    """Boolean value of a flag directive; only `true` and `false` parse."""
    value = get_metadata(line, key)
    if value is None:
        return None
    flag = _FLAG_VALUES.get(value.strip())
    if flag is None:
        log.debug("Ignoring unparseable %s flag %r", key, value)
    return flag


def parse_part_metadata(
    source: Source | str, version: str | None = None
) -> TestPartMetadata:
    """Parse the configuration and expected diagnostics of a test part.

    Never fails on content: directives that cannot be parsed are skipped and
    unresolvable positions make the whole value the message.

    Args:
        source: The test source.
        version: Replacement for `VERSION` in messages. Defaults to the
            active tool version.
    """
    if isinstance(source, str):
        source = Source(source)

    compare_ref = None
    validate_hints = None
    annotations: set[Annotation] = set()

    lines = [line.strip() for line in source.lines()]
    for i, line in enumerate(lines):
        ref = get_flag_metadata(line, "Ref")
        if ref is not None:
            compare_ref = ref
        hints = get_flag_metadata(line, "Hints")
        if hints is not None:
            validate_hints = hints

        for kind in AnnotationKind:
            expectation = get_metadata(line, kind.value)
            if expectation is None:
                continue

            comments_until_code = 0
            for following in lines[i:]:
                if not following.startswith("//"):
                    break
                comments_until_code += 1

            span, rest = resolve_range(expectation, source, i + comments_until_code)
            if span is None and starts_with_position(expectation):
                log.debug(
                    "Line %d: could not resolve position in %r, using it as message",
                    i + 1,
                    expectation,
                )

            if version is None:
                version = compiler_version()
            message = rest.strip().replace("VERSION", version)
            annotations.add(Annotation(kind=kind, range=span, message=message))

        match = _DIRECTIVE_RE.match(line)
        if match and match.group(1) not in _KEYS:
            log.debug("Line %d: ignoring unknown directive %r", i + 1, match.group(1))

    return TestPartMetadata(
        part_configuration=TestConfiguration(
            compare_ref=compare_ref, validate_hints=validate_hints
        ),
        annotations=frozenset(annotations),
    )
