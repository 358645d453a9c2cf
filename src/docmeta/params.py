"""Parser for the `# Parameters` section of a doc comment.

Each parameter is a bullet followed by an indented description:

    - body: Content (positional, required)
      The content to show.

      # Example
      ```
      #box[Hello]
      ```

The description runs until the next line starting with `-`.
"""

from __future__ import annotations

import logging

from .errors import DefinitionError
from .models import ParamKind, ParamSpec
from .scanner import Scanner
from .sections import DocText, dedent, example
from .types import TypeRegistry

log = logging.getLogger(__name__)

FLAGS = ("named", "positional", "required", "variadic", "settable")


def parse_params(
    body: str | None, registry: TypeRegistry, definition: str | None = None
) -> list[ParamSpec]:
    """Parse a parameter section body into specs, in source order.

    Raises:
        DefinitionError: On a malformed bullet, an unknown type or flag, or
            an invalid flag combination.
    """
    if not body:
        return []

    s = Scanner(body)
    params: list[ParamSpec] = []

    while not s.done():
        if not s.eat_if("-"):
            line = s.after().splitlines()[0]
            raise DefinitionError(f"expected parameter bullet, found {line!r}", definition)

        s.eat_whitespace()
        name = s.eat_until(":")
        if not s.eat_if(": "):
            raise DefinitionError(f"expected ': ' after parameter name {name!r}", definition)

        type_name = s.eat_until(str.isspace)
        try:
            cast = registry.resolve(type_name)
        except DefinitionError as e:
            raise DefinitionError(f"parameter {name!r}: {e}", definition) from None

        s.eat_whitespace()
        if not s.eat_if("("):
            raise DefinitionError(f"expected '(' with flags for parameter {name!r}", definition)
        flags = _parse_flags(s.eat_until(")"), name, definition)
        if not s.eat_if(")"):
            raise DefinitionError(f"unclosed flag list for parameter {name!r}", definition)

        kind = ParamKind.from_flags(
            named="named" in flags,
            positional="positional" in flags,
            required="required" in flags,
            variadic="variadic" in flags,
        )
        if kind is None:
            raise DefinitionError(
                f"invalid combination of parameter flags for {name!r}: "
                f"{_invalid_reason(flags)}",
                definition,
            )

        docs = DocText(_param_docs(s.eat_until("\n-")))
        param_example = example(docs)

        params.append(
            ParamSpec(
                name=name,
                type_name=type_name,
                cast=cast,
                kind=kind,
                settable="settable" in flags,
                docs=docs.text.strip(),
                example=param_example,
            )
        )
        log.debug("Parsed parameter %s: %s (%s)", name, type_name, kind.value)
        s.eat_whitespace()

    return params


def _parse_flags(text: str, name: str, definition: str | None) -> set[str]:
    flags = set()
    for part in (p.strip() for p in text.split(",")):
        if not part:
            continue
        if part not in FLAGS:
            raise DefinitionError(f"unknown parameter flag {part!r} on {name!r}", definition)
        flags.add(part)
    return flags


def _invalid_reason(flags: set[str]) -> str:
    if "named" not in flags and "positional" not in flags:
        return "must be named, positional, or both"
    if "variadic" in flags and "positional" not in flags:
        return "variadic parameters must be positional"
    if "variadic" in flags and "named" in flags:
        return "variadic parameters cannot be named"
    return "variadic parameters cannot be required"


def _param_docs(text: str) -> str:
    # The first line is whatever follows the flag list on the bullet line
    first, _, rest = text.partition("\n")
    return f"{first.strip()}\n{dedent(rest)}".strip()
