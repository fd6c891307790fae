"""Resolution of GraphQL type references to Rust type expressions.

GraphQL is nullable by default: every level of a reference is optional
unless wrapped in NON_NULL. Named types are resolved by name only, never
by looking up their definition, so cyclic object graphs need no special
handling here.
"""

from dataclasses import dataclass, field, replace

from .errors import UnsupportedKindError
from .ir import IRTypeRef, TypeKind
from .naming import to_type_identifier
from .scalars import ScalarRegistry


@dataclass(frozen=True)
class TypeExpr:
    """A resolved Rust type with its nullability kept explicit."""
    base: str  # the required form, e.g. "Vec<String>"
    nullable: bool
    named: str  # innermost schema type name
    named_kind: TypeKind
    is_list: bool = False
    imports: frozenset[tuple[str, str]] = field(default_factory=frozenset)

    def render(self) -> str:
        if self.nullable:
            return f"Option<{self.base}>"
        return self.base

    @property
    def is_object(self) -> bool:
        """True for a (possibly nullable) single object, not a list of them."""
        return self.named_kind == TypeKind.OBJECT and not self.is_list


class TypeResolver:
    """Resolves type references against a scalar registry."""

    def __init__(self, scalars: ScalarRegistry | None = None):
        self.scalars = scalars or ScalarRegistry()

    def resolve(self, type_ref: IRTypeRef) -> TypeExpr:
        if type_ref.kind == TypeKind.NON_NULL:
            return replace(self.resolve(type_ref.of_type), nullable=False)

        if type_ref.kind == TypeKind.LIST:
            inner = self.resolve(type_ref.of_type)
            return replace(inner, base=f"Vec<{inner.render()}>", nullable=True, is_list=True)

        if type_ref.kind == TypeKind.SCALAR:
            mapping = self.scalars.get(type_ref.name)
            if mapping is not None:
                return TypeExpr(
                    base=mapping.rust_type,
                    nullable=True,
                    named=type_ref.name,
                    named_kind=type_ref.kind,
                    imports=frozenset(mapping.imports),
                )

        elif type_ref.kind not in (TypeKind.OBJECT, TypeKind.ENUM, TypeKind.INPUT_OBJECT):
            raise UnsupportedKindError(type_ref.kind.value, type_ref.name)

        return TypeExpr(
            base=to_type_identifier(type_ref.name),
            nullable=True,
            named=type_ref.name,
            named_kind=type_ref.kind,
        )


def resolve(type_ref: IRTypeRef, scalars: ScalarRegistry | None = None) -> TypeExpr:
    """Resolve a type reference to a Rust type expression."""
    return TypeResolver(scalars).resolve(type_ref)
