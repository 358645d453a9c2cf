"""Command line interface.

    docmeta docs PATH... [--out DIR] [--strict]
        Harvest descriptors from Python modules and directories of SQL
        files, validate them and write a Markdown reference.

    docmeta annotations FILE... [--json]
        Show the configuration and expected diagnostics of test files.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import Config
from .errors import DocmetaError
from .extractors import extract_python_docs, extract_sql_docs
from .generators import generate_index, generate_markdown
from .metadata import parse_part_metadata
from .models import Annotation, ExtractionResult
from .source import Source
from .validators import compute_coverage, validate_docs

log = logging.getLogger(__name__)


def _docs(args: argparse.Namespace) -> int:
    root = Path.cwd()
    results: list[ExtractionResult] = []

    print("Extracting docs...")
    for path in args.paths:
        if path.is_dir():
            result = extract_sql_docs(path, root)
        elif path.suffix == ".py":
            result = extract_python_docs(path, root)
        else:
            print(f"  ✗ {path}: expected a .py file or a directory of .sql files")
            return 1
        results.append(result)
        print(
            f"  ✓ {path}: {len(result.functions)}/{len(result.all_public_functions)} "
            f"{result.language} definitions"
        )

    validation = validate_docs(results, strict=args.strict)
    for warning in validation.warnings:
        print(f"  ⚠ {warning}")
    if validation.errors:
        print("\nValidation errors:")
        for err in validation.errors:
            print(f"  ✗ {err}")
        return 1

    coverage = compute_coverage(results)
    summary = ", ".join(f"{lang} {ratio:.0%}" for lang, ratio in sorted(coverage.items()))
    print(f"\nCoverage: {summary}")

    if args.out:
        args.out.mkdir(parents=True, exist_ok=True)
        (args.out / "README.md").write_text(generate_index(args.title, results))
        (args.out / "reference.md").write_text(generate_markdown(args.title, results))
        print(f"\nGenerated:\n  {args.out / 'README.md'}\n  {args.out / 'reference.md'}")

    return 0


def _render_annotation(source: Source, annotation: Annotation) -> str:
    if annotation.range is None:
        return f"{annotation.kind}: {annotation.message}"
    start = source.byte_to_line_column(annotation.range.start)
    end = source.byte_to_line_column(annotation.range.end)
    where = f"{start[0] + 1}:{start[1] + 1}"
    if end != start:
        where += f"-{end[0] + 1}:{end[1] + 1}"
    return f"{annotation.kind}: {where} {annotation.message}"


def _annotations(args: argparse.Namespace) -> int:
    output = {}
    for path in args.files:
        source = Source.from_path(path)
        metadata = parse_part_metadata(source)
        annotations = sorted(metadata.annotations, key=Annotation.sort_key)
        config = metadata.part_configuration

        if args.json:
            output[str(path)] = {
                "compare_ref": config.compare_ref,
                "validate_hints": config.validate_hints,
                "validate_autocomplete": config.validate_autocomplete,
                "annotations": [
                    {
                        "kind": str(a.kind),
                        "range": [a.range.start, a.range.end] if a.range else None,
                        "message": a.message,
                    }
                    for a in annotations
                ],
            }
            continue

        print(f"{path}:")
        print(f"  Ref: {config.compare_ref}  Hints: {config.validate_hints}")
        for a in annotations:
            print(f"  {_render_annotation(source, a)}")

    if args.json:
        print(json.dumps(output, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docmeta",
        description="Structured doc comment and test annotation tooling.",
    )
    parser.add_argument(
        "--log-level", default=Config.LOG_LEVEL,
        help="Logging level (default: %(default)s)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    docs = sub.add_parser("docs", help="Harvest, validate and render documentation")
    docs.add_argument("paths", nargs="+", type=Path)
    docs.add_argument("--out", type=Path, help="Directory for Markdown output")
    docs.add_argument("--title", default="API Reference")
    docs.add_argument(
        "--strict", action="store_true",
        help="Treat missing descriptions as errors",
    )
    docs.set_defaults(handler=_docs)

    annotations = sub.add_parser("annotations", help="Show test file annotations")
    annotations.add_argument("files", nargs="+", type=Path)
    annotations.add_argument("--json", action="store_true", help="Emit JSON")
    annotations.set_defaults(handler=_annotations)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.handler(args)
    except DocmetaError as e:
        log.error("%s", e)
        print(f"  ✗ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
