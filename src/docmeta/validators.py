"""Documentation validation and quality checks."""

from __future__ import annotations

from .models import ExtractionResult, ValidationResult


def validate_docs(
    results: list[ExtractionResult],
    strict: bool = False,
) -> ValidationResult:
    """Validate harvested documentation against the declared signatures.

    Checks:
    1. Descriptors should have prose (warning in normal mode, error in strict)
    2. Documented parameters must be declared by the definition (error)
    3. Declared parameters should be documented (warning)

    Args:
        results: Extraction results to check
        strict: If True, missing docs are errors instead of warnings

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    for r in results:
        result.warnings.extend(r.issues)

        for doc in r.functions:
            descriptor = doc.descriptor
            if not descriptor.docs:
                msg = f"{doc.name}: missing description"
                if strict:
                    result.errors.append(msg)
                else:
                    result.warnings.append(msg)

            documented = [p.name for p in descriptor.params]
            for name in documented:
                if name not in doc.declared_params:
                    result.errors.append(
                        f"{doc.name}: documented parameter {name!r} is not declared"
                    )
            for name in doc.declared_params:
                if name not in documented:
                    result.warnings.append(f"{doc.name}: parameter {name!r} is undocumented")

    return result


def compute_coverage(results: list[ExtractionResult]) -> dict[str, float]:
    """Compute documentation coverage by language.

    Returns:
        Dict mapping each language seen to coverage (0.0 - 1.0)
    """
    totals: dict[str, int] = {}
    documented: dict[str, int] = {}

    for r in results:
        totals[r.language] = totals.get(r.language, 0) + len(r.all_public_functions)
        documented[r.language] = documented.get(r.language, 0) + len(r.functions)

    return {
        language: documented[language] / total if total > 0 else 1.0
        for language, total in totals.items()
    }
