"""Identifier casing and doc-comment rendering for generated Rust code."""

import re

from .errors import NamingCollisionError, SchemaShapeError

# Strict and reserved Rust keywords that can be escaped as raw identifiers
RUST_KEYWORDS = {
    "abstract", "as", "async", "await", "become", "box", "break", "const",
    "continue", "do", "dyn", "else", "enum", "extern", "false", "final", "fn",
    "for", "gen", "if", "impl", "in", "let", "loop", "macro", "match", "mod",
    "move", "mut", "override", "priv", "pub", "ref", "return", "static",
    "struct", "trait", "true", "try", "type", "typeof", "unsafe", "unsized",
    "use", "virtual", "where", "while", "yield",
}

# Keywords that are not allowed as raw identifiers
RUST_NON_RAW_KEYWORDS = {"crate", "self", "super", "Self"}

# Type names the generated module imports or relies on from the prelude
RESERVED_TYPE_NAMES = (
    "Arc",
    "Child",
    "ConnectParams",
    "Deserialize",
    "FromSelection",
    "Option",
    "Selection",
    "Self",
    "Serialize",
    "String",
    "Vec",
)

_SEPARATORS = re.compile(r"[_\-\s]+")


def to_type_identifier(name: str) -> str:
    """Convert a schema name to a PascalCase Rust type identifier.

    Inner capitals are kept (``CacheID`` stays ``CacheID``); all-caps
    words are treated as words (``CACHE_VOLUME`` becomes ``CacheVolume``).
    """
    words = [w for w in _SEPARATORS.split(name) if w]
    identifier = "".join(_capitalize(w) for w in words)
    if not identifier[:1].isalpha():
        raise SchemaShapeError(f"Name {name!r} does not form a Rust type identifier")
    return identifier


def to_variant_identifier(name: str) -> str:
    """Convert an enum value to a PascalCase variant identifier.

    ``SELF`` would render as the keyword ``Self``, so it becomes ``Self_``.
    """
    variant = to_type_identifier(name)
    if variant in RUST_NON_RAW_KEYWORDS:
        return f"{variant}_"
    return variant


def _capitalize(word: str) -> str:
    if len(word) > 1 and word.isupper():
        word = word.lower()
    return word[0].upper() + word[1:]


def snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def to_member_identifier(name: str) -> str:
    """Convert a schema field or argument name to a snake_case Rust identifier."""
    if name.startswith("r#"):
        return name
    member = snake_case(name)
    if member in RUST_KEYWORDS:
        return f"r#{member}"
    if member in RUST_NON_RAW_KEYWORDS:
        return f"{member}_"
    return member


def render_doc(description: str | None) -> list[str]:
    """Render a possibly multi-line description as ``///`` doc-comment lines."""
    if not description or not description.strip():
        return []
    lines = []
    for line in description.splitlines():
        line = line.rstrip()
        lines.append(f"/// {line}" if line else "///")
    return lines


def deprecation_doc(reason: str | None) -> list[str]:
    """Doc lines marking a deprecated member. Purely informational."""
    text = " ".join(reason.split()) if reason else "No longer supported."
    return ["///", f"/// Deprecated: {text}"]


class NameRegistry:
    """Tracks which schema name owns each identifier in one target namespace."""

    def __init__(self, scope: str, reserved: tuple[str, ...] = ()):
        self.scope = scope
        self._owners: dict[str, str] = {}
        self._reserved = set(reserved)

    def claim(self, identifier: str, source_name: str) -> str:
        """Record that ``source_name`` renders as ``identifier``.

        Raises NamingCollisionError if another name already renders the
        same, SchemaShapeError if the very same name is claimed twice.
        """
        if identifier in self._reserved:
            raise NamingCollisionError(identifier, f"<reserved in {self.scope}>", source_name)
        owner = self._owners.get(identifier)
        if owner is None:
            self._owners[identifier] = source_name
            return identifier
        if owner == source_name:
            raise SchemaShapeError(f"Duplicate name {source_name!r} in {self.scope}")
        raise NamingCollisionError(identifier, owner, source_name)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._owners or identifier in self._reserved
