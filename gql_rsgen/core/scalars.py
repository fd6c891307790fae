"""Scalar mappings for GraphQL code generation.

Maps GraphQL scalar names to Rust types. The five GraphQL built-ins are
always mapped; any other scalar becomes a generated newtype wrapping a
``String`` unless a mapping is registered for it.

Example usage:
    from gql_rsgen.core.scalars import ScalarMapping, ScalarRegistry

    registry = ScalarRegistry()
    registry.register("DateTime", ScalarMapping(
        "NaiveDateTime", imports=(("chrono", "NaiveDateTime"),)
    ))

    # Or from a command-line style spec
    registry.register(*parse_mapping("DateTime=chrono::NaiveDateTime"))
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScalarMapping:
    """How one GraphQL scalar is spelled in Rust.

    Attributes:
        rust_type: The Rust type expression (e.g. "i32", "NaiveDateTime")
        imports: ``(path, name)`` pairs the type needs, rendered as ``use path::name;``
    """
    rust_type: str
    imports: tuple[tuple[str, str], ...] = ()


BUILTIN_SCALARS = {
    "String": ScalarMapping("String"),
    "Int": ScalarMapping("i32"),
    "Float": ScalarMapping("f64"),
    "Boolean": ScalarMapping("bool"),
    "ID": ScalarMapping("String"),
}


def parse_mapping(spec: str) -> tuple[str, ScalarMapping]:
    """Parse ``Name=path::Type`` (or ``Name=u64``) into a registry entry."""
    scalar_name, sep, target = spec.partition("=")
    scalar_name, target = scalar_name.strip(), target.strip()
    if not sep or not scalar_name or not target:
        raise ValueError(f"Invalid scalar mapping {spec!r}, expected NAME=RUST_TYPE")
    path, _, type_name = target.rpartition("::")
    if path:
        return scalar_name, ScalarMapping(type_name, imports=((path, type_name),))
    return scalar_name, ScalarMapping(type_name)


class ScalarRegistry:
    """Registry of scalar mappings.

    Example:
        registry = ScalarRegistry()
        registry.get("Int").rust_type  # "i32"
        registry.has("CacheID")        # False, rendered as a newtype
    """

    def __init__(self):
        self._mappings: dict[str, ScalarMapping] = {}
        self._register_defaults()

    def _register_defaults(self):
        """Register the GraphQL built-in scalars."""
        for name, mapping in BUILTIN_SCALARS.items():
            self.register(name, mapping)

    def register(self, scalar_name: str, mapping: ScalarMapping):
        """Register (or override) the mapping for a scalar type."""
        self._mappings[scalar_name] = mapping

    def get(self, scalar_name: str) -> ScalarMapping | None:
        """Get the mapping for a scalar type, or None if it is a custom scalar."""
        return self._mappings.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        """Check if a scalar is mapped (and therefore not rendered as a newtype)."""
        return scalar_name in self._mappings

    def get_all_imports(self) -> set[tuple[str, str]]:
        """Get all imports needed by registered mappings."""
        return {imp for m in self._mappings.values() for imp in m.imports}
