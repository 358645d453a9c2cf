"""Section extraction from doc comments.

A doc comment is free prose with optional sections, each introduced by a
line that is exactly `# <Title>` and running until the next line starting
with `# ` or the end of the text.
"""

from __future__ import annotations

from .models import Section

FENCE = "```"


class DocText:
    """Mutable doc comment buffer consumed by successive extractions."""

    def __init__(self, text: str):
        self.text = text

    def section(self, title: str) -> str | None:
        """Remove the `# title` section and return its trimmed body.

        Returns None and leaves the buffer untouched if there is no such
        section.
        """
        header = f"# {title}"
        lines = self.text.split("\n")
        try:
            start = lines.index(header)
        except ValueError:
            return None

        end = start + 1
        while end < len(lines) and not lines[end].startswith("# "):
            end += 1

        body = "\n".join(lines[start + 1 : end]).strip()
        self.text = "\n".join(lines[:start] + lines[end:])
        return body

    def take(self, title: str) -> Section | None:
        body = self.section(title)
        if body is None:
            return None
        return Section(title=title, body=body)

    def __str__(self) -> str:
        return self.text


def section(docs: DocText, title: str) -> str | None:
    """Extract a section."""
    return docs.section(title)


def tags(docs: DocText) -> list[str]:
    """Parse the tag section."""
    body = docs.section("Tags") or ""
    return [line[1:].strip() for line in body.splitlines() if line.startswith("-")]


def example(docs: DocText) -> str | None:
    """Parse the example section: the inside of its first fenced block."""
    body = docs.section("Example")
    if body is None:
        return None

    lines = iter(body.splitlines())
    for line in lines:
        if FENCE in line:
            break
    inner = []
    for line in lines:
        if FENCE in line:
            break
        inner.append(line)
    return "\n".join(inner)


def dedent(text: str) -> str:
    """Dedent a block of text, preserving relative indentation."""
    lines = text.split("\n")
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    min_indent = min(indents, default=0)
    return "\n".join(line[min_indent:] for line in lines)
