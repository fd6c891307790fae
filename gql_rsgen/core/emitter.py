"""Assembly of rendered fragments into one Rust module."""

import re
from dataclasses import dataclass, field

Import = tuple[str, str]


@dataclass
class Fragment:
    """One self-contained unit of generated source plus the imports it needs."""
    type_name: str
    source: str
    imports: set[Import] = field(default_factory=set)


def render_imports(imports: set[Import]) -> list[str]:
    """Render ``(path, name)`` pairs as sorted, deduplicated ``use`` lines."""
    return [f"use {path}::{name};" for path, name in sorted(set(imports))]


_BLANK_RUN = re.compile(r"\n{3,}")


def normalize_blank_lines(text: str) -> str:
    """Strip trailing whitespace and collapse blank-line runs to a single blank line."""
    lines = [line.rstrip() for line in text.splitlines()]
    text = "\n".join(lines).strip("\n")
    return _BLANK_RUN.sub("\n\n", text) + "\n"


def assemble(fragments: list[Fragment]) -> str:
    """Concatenate fragments in order under a single import block."""
    imports: set[Import] = set()
    for fragment in fragments:
        imports.update(fragment.imports)

    sections = []
    use_lines = render_imports(imports)
    if use_lines:
        sections.append("\n".join(use_lines))
    sections.extend(f.source for f in fragments if f.source.strip())
    return normalize_blank_lines("\n\n".join(sections))
