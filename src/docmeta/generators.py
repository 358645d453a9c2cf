"""Markdown reference output for harvested descriptors."""

from __future__ import annotations

from collections import defaultdict

from .models import DocumentedFunction, ExtractionResult, ParamSpec


def _slugify(name: str) -> str:
    """Convert function name to markdown anchor slug."""
    # GitHub-style: lowercase, replace dots/spaces with hyphens
    return name.lower().replace(".", "").replace(" ", "-")


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def _param_rows(params: tuple[ParamSpec, ...]) -> list[str]:
    lines = [
        "| Parameter | Type | Flags | Description |",
        "|-----------|------|-------|-------------|",
    ]
    for p in params:
        flags = ", ".join(p.flags())
        lines.append(
            f"| `{p.name}` | `{p.cast.describe()}` | {flags} | {_escape_cell(p.docs)} |"
        )
    return lines


def _function_section(f: DocumentedFunction) -> list[str]:
    d = f.descriptor
    fence = "sql" if f.language == "sql" else "python"
    lines = [
        f"### {f.name}",
        "",
        f"```{fence}",
        f.signature,
        "```",
        "",
    ]

    if d.docs:
        lines.append(d.docs)
        lines.append("")

    if d.params:
        lines.append("**Parameters:**")
        lines.append("")
        lines.extend(_param_rows(d.params))
        lines.append("")
        for p in d.params:
            if p.example:
                lines.extend([f"Example for `{p.name}`:", "```", p.example, "```", ""])

    if d.syntax:
        lines.append(f"**Syntax:** {d.syntax}")
        lines.append("")

    if d.example:
        lines.extend(["**Example:**", "```", d.example, "```", ""])

    lines.append(f"*Source: {f.source_file}:{f.line_number}*")
    lines.append("")
    lines.append("---")
    lines.append("")
    return lines


def generate_index(title: str, results: list[ExtractionResult]) -> str:
    """Generate an index table with deep links into the reference."""
    lines = [
        f"# {title}",
        "",
        "| Function | Description |",
        "|----------|-------------|",
    ]
    functions = sorted((f for r in results for f in r.functions), key=lambda x: x.name)
    for f in functions:
        lines.append(
            f"| [`{f.name}`](reference.md#{_slugify(f.name)}) | {_escape_cell(f.descriptor.brief)} |"
        )
    lines.append("")
    return "\n".join(lines)


def generate_markdown(title: str, results: list[ExtractionResult]) -> str:
    """Generate reference markdown, grouped by each definition's first tag."""
    lines = [
        "<!-- AUTO-GENERATED. DO NOT EDIT. Run `docmeta docs` to regenerate. -->",
        "",
        f"# {title}",
        "",
    ]

    grouped: dict[str | None, list[DocumentedFunction]] = defaultdict(list)
    for r in results:
        for f in r.functions:
            grouped[f.group].append(f)

    if not grouped:
        lines.append("*No documented functions yet.*")
        lines.append("")
        return "\n".join(lines)

    for group in sorted(grouped.keys(), key=lambda x: (x is None, x or "")):
        if group:
            lines.append(f"## {group}")
            lines.append("")
        for f in sorted(grouped[group], key=lambda x: x.name):
            lines.extend(_function_section(f))

    return "\n".join(lines)
