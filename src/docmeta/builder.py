"""Build function descriptors from doc comments.

Example:
    @func
    def repr_(value):
        '''The string representation of a value.

        # Parameters
        - value: any (positional, required)
          The value whose string representation to produce.

        # Tags
        - foundations
        '''
        return repr(value)

    repr_.func_info.name     # "repr"
    repr_.func_info.tags     # ("foundations",)
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, TypeVar

from .errors import DefinitionError
from .models import FuncDescriptor
from .params import parse_params
from .sections import DocText, example, tags
from .types import TypeRegistry, default_registry

log = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_REGISTRY = default_registry()


def build_descriptor(
    name: str, docs: str, registry: TypeRegistry | None = None
) -> FuncDescriptor:
    """Build the descriptor for one documented definition.

    Sections are extracted in a fixed order (Tags, Parameters, Example,
    Syntax); whatever remains is the prose description.

    Raises:
        DefinitionError: If a section is malformed or the prose still holds
            an unrecognized `# ` heading.
    """
    registry = registry or _DEFAULT_REGISTRY
    text = DocText(docs)

    func_tags = tags(text)
    params = parse_params(text.section("Parameters"), registry, definition=name)
    func_example = example(text)
    syntax = text.section("Syntax")

    prose = text.text.strip()
    if "# " in prose:
        raise DefinitionError("documentation heading not recognized", name)

    log.debug("Built descriptor for %s with %d parameters", name, len(params))
    return FuncDescriptor(
        name=name,
        tags=tuple(func_tags),
        docs=prose,
        example=func_example,
        syntax=syntax,
        params=tuple(params),
    )


def definition_name(obj: Any) -> str:
    """Public name of a definition: its Python name without trailing `_`."""
    return obj.__name__.rstrip("_") or obj.__name__


def func(
    obj: T | None = None, *, name: str | None = None, registry: TypeRegistry | None = None
) -> T | Callable[[T], T]:
    """Attach a `FuncDescriptor` built from the docstring as `obj.func_info`.

    Usable bare (`@func`) or with options (`@func(name="type")`). The
    descriptor is built at decoration time, so documentation errors surface
    when the defining module is imported.
    """

    def decorate(target: T) -> T:
        docs = inspect.cleandoc(target.__doc__ or "")
        target.func_info = build_descriptor(
            name or definition_name(target), docs, registry
        )
        return target

    if obj is None:
        return decorate
    return decorate(obj)
