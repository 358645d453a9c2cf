"""Data models for documentation descriptors and test annotations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .types import CastInfo, cast as cast_value


@dataclass(frozen=True)
class Section:
    """A header-delimited block of a doc comment."""

    title: str
    body: str


class ParamKind(Enum):
    """How a parameter may be passed.

    Each member is one of the flag combinations the parameter grammar admits,
    so an invalid combination has no representation.
    """

    REQUIRED_POSITIONAL = "required positional"
    OPTIONAL_POSITIONAL = "optional positional"
    REQUIRED_NAMED = "required named"
    OPTIONAL_NAMED = "optional named"
    REQUIRED_POSITIONAL_OR_NAMED = "required positional or named"
    OPTIONAL_POSITIONAL_OR_NAMED = "optional positional or named"
    VARIADIC = "variadic"

    @classmethod
    def from_flags(
        cls, *, named: bool, positional: bool, required: bool, variadic: bool
    ) -> ParamKind | None:
        """Map a flag set to its kind, or None if the combination is invalid."""
        return _KINDS_BY_FLAGS.get((named, positional, required, variadic))

    @property
    def named(self) -> bool:
        return self in (
            ParamKind.REQUIRED_NAMED,
            ParamKind.OPTIONAL_NAMED,
            ParamKind.REQUIRED_POSITIONAL_OR_NAMED,
            ParamKind.OPTIONAL_POSITIONAL_OR_NAMED,
        )

    @property
    def positional(self) -> bool:
        return self in (
            ParamKind.REQUIRED_POSITIONAL,
            ParamKind.OPTIONAL_POSITIONAL,
            ParamKind.REQUIRED_POSITIONAL_OR_NAMED,
            ParamKind.OPTIONAL_POSITIONAL_OR_NAMED,
            ParamKind.VARIADIC,
        )

    @property
    def required(self) -> bool:
        return self in (
            ParamKind.REQUIRED_POSITIONAL,
            ParamKind.REQUIRED_NAMED,
            ParamKind.REQUIRED_POSITIONAL_OR_NAMED,
        )

    @property
    def variadic(self) -> bool:
        return self is ParamKind.VARIADIC


# (named, positional, required, variadic) -> kind
_KINDS_BY_FLAGS: dict[tuple[bool, bool, bool, bool], ParamKind] = {
    (False, True, True, False): ParamKind.REQUIRED_POSITIONAL,
    (False, True, False, False): ParamKind.OPTIONAL_POSITIONAL,
    (True, False, True, False): ParamKind.REQUIRED_NAMED,
    (True, False, False, False): ParamKind.OPTIONAL_NAMED,
    (True, True, True, False): ParamKind.REQUIRED_POSITIONAL_OR_NAMED,
    (True, True, False, False): ParamKind.OPTIONAL_POSITIONAL_OR_NAMED,
    (False, True, False, True): ParamKind.VARIADIC,
}


@dataclass(frozen=True)
class ParamSpec:
    """One documented parameter of a function."""

    name: str
    type_name: str  # Type token as written, e.g. "Content"
    cast: CastInfo
    kind: ParamKind
    settable: bool = False
    docs: str = ""
    example: str | None = None

    @property
    def named(self) -> bool:
        return self.kind.named

    @property
    def positional(self) -> bool:
        return self.kind.positional

    @property
    def required(self) -> bool:
        return self.kind.required

    @property
    def variadic(self) -> bool:
        return self.kind.variadic

    def flags(self) -> list[str]:
        """Flag tokens in the order the parameter grammar lists them."""
        flags = []
        if self.named:
            flags.append("named")
        if self.positional:
            flags.append("positional")
        if self.required:
            flags.append("required")
        if self.variadic:
            flags.append("variadic")
        if self.settable:
            flags.append("settable")
        return flags

    def check(self, value: Any) -> Any:
        """Cast an argument against this parameter's declared type."""
        return cast_value(value, self.cast, param=self.name)


@dataclass(frozen=True)
class FuncDescriptor:
    """Structured documentation of one callable or type definition."""

    name: str
    tags: tuple[str, ...] = ()
    docs: str = ""
    example: str | None = None
    syntax: str | None = None
    params: tuple[ParamSpec, ...] = ()

    def param(self, name: str) -> ParamSpec | None:
        """Look up a parameter by name."""
        for p in self.params:
            if p.name == name:
                return p
        return None

    @property
    def brief(self) -> str:
        """First paragraph of the prose."""
        return self.docs.split("\n\n", 1)[0].replace("\n", " ").strip()


class AnnotationKind(Enum):
    """Severity of an expected diagnostic."""

    ERROR = "Error"
    WARNING = "Warning"
    HINT = "Hint"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class Span:
    """Byte-offset range into a source text; start <= end."""

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span {self.start}..{self.end}")

    @property
    def is_point(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class Annotation:
    """An expected diagnostic; identity is (kind, range, message)."""

    kind: AnnotationKind
    range: Span | None
    message: str

    def sort_key(self) -> tuple:
        start = self.range.start if self.range else -1
        end = self.range.end if self.range else -1
        return (start, end, self.kind.value, self.message)

    def __str__(self) -> str:
        if self.range is None:
            return f"{self.kind}: {self.message}"
        return f"{self.kind}: {self.range.start}-{self.range.end}: {self.message}"


@dataclass
class TestConfiguration:
    """Per-part switches for the test harness."""

    __test__ = False  # Not a pytest test class

    compare_ref: bool | None = None
    validate_hints: bool | None = None
    validate_autocomplete: bool | None = None


@dataclass
class TestPartMetadata:
    """Everything parsed from one test part's comment directives."""

    __test__ = False

    part_configuration: TestConfiguration = field(default_factory=TestConfiguration)
    annotations: frozenset[Annotation] = frozenset()


@dataclass
class DocumentedFunction:
    """A descriptor together with where it was harvested from."""

    descriptor: FuncDescriptor
    language: str  # "python" | "sql"
    signature: str  # Declared signature (auto-extracted)
    source_file: str
    line_number: int
    declared_params: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def group(self) -> str | None:
        """First tag, used to group reference output."""
        return self.descriptor.tags[0] if self.descriptor.tags else None


@dataclass
class ValidationResult:
    """Results from documentation validation."""

    errors: list[str] = field(default_factory=list)  # Build fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Printed but allowed


@dataclass
class ExtractionResult:
    """Results from harvesting documentation out of source files."""

    functions: list[DocumentedFunction]
    all_public_functions: list[str]
    language: str = "python"
    issues: list[str] = field(default_factory=list)
