"""Exception hierarchy for docmeta."""

from __future__ import annotations


class DocmetaError(Exception):
    """Base exception for docmeta operations."""


class DefinitionError(DocmetaError):
    """Raised when a documentation comment cannot be turned into a descriptor.

    These are authoring bugs in the comment itself (unknown section heading,
    unknown type, bad parameter flags) and abort building that definition.
    """

    def __init__(self, message: str, definition: str | None = None):
        if definition:
            message = f"{definition}: {message}"
        super().__init__(message)
        self.definition = definition


class CastError(DocmetaError):
    """Raised when an argument does not match a parameter's declared type."""

    def __init__(self, message: str, expected: str, found: str):
        super().__init__(message)
        self.expected = expected
        self.found = found


class ExtractionError(DocmetaError):
    """Raised when a source file cannot be loaded for harvesting."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
