"""docmeta - structured doc comments and test annotations.

This package provides:
- build_descriptor / func: FuncDescriptor from `# Tags`, `# Parameters`,
  `# Example` and `# Syntax` doc comment sections
- parse_part_metadata: configuration and expected diagnostics from
  `// Key: value` comments in test sources
- Exception classes: DocmetaError, DefinitionError, CastError, ExtractionError
"""

__version__ = "0.1.0"

from docmeta.builder import build_descriptor, func
from docmeta.errors import CastError, DefinitionError, DocmetaError, ExtractionError
from docmeta.metadata import get_flag_metadata, get_metadata, parse_part_metadata
from docmeta.models import (
    Annotation,
    AnnotationKind,
    FuncDescriptor,
    ParamKind,
    ParamSpec,
    Span,
    TestConfiguration,
    TestPartMetadata,
)
from docmeta.sections import DocText
from docmeta.source import Source
from docmeta.types import CastInfo, TypeRegistry, default_registry, sql_registry

__all__ = [
    "Annotation",
    "AnnotationKind",
    "CastError",
    "CastInfo",
    "DefinitionError",
    "DocText",
    "DocmetaError",
    "ExtractionError",
    "FuncDescriptor",
    "ParamKind",
    "ParamSpec",
    "Source",
    "Span",
    "TestConfiguration",
    "TestPartMetadata",
    "TypeRegistry",
    "build_descriptor",
    "default_registry",
    "func",
    "get_flag_metadata",
    "get_metadata",
    "parse_part_metadata",
    "sql_registry",
]
