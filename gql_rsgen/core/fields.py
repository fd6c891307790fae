"""Rendering of object fields into accessor methods and argument holders.

Every field of an object type becomes one accessor. A field that takes
arguments also gets one holder struct carrying all of them, in declared
order: required arguments as bare types, optional ones as ``Option<T>``.
"""

import logging
from dataclasses import dataclass, field

from .emitter import Import
from .ir import IRField, IRFullType, IRInputValue
from .naming import (
    NameRegistry,
    deprecation_doc,
    render_doc,
    to_member_identifier,
    to_type_identifier,
)
from .type_ref import TypeResolver

logger = logging.getLogger(__name__)

SERIALIZE = ("serde", "Serialize")


@dataclass
class StructMember:
    """A ``pub name: Type`` line of a generated struct."""
    name: str
    type: str
    optional: bool
    doc: list[str] = field(default_factory=list)
    rename: str | None = None  # wire name, when it differs from the member name


@dataclass
class ArgsHolder:
    """The struct passed by reference to an accessor that takes arguments."""
    name: str
    members: list[StructMember]
    doc: list[str] = field(default_factory=list)
    imports: set[Import] = field(default_factory=set)

    @property
    def required(self) -> list[StructMember]:
        return [m for m in self.members if not m.optional]

    @property
    def optional(self) -> list[StructMember]:
        return [m for m in self.members if m.optional]


@dataclass
class Accessor:
    """One generated ``pub fn`` on an object type."""
    name: str
    field_name: str
    output: str
    args_type: str | None = None
    # Struct-literal delimiters for object outputs; None means FromSelection
    constructor_open: str | None = None
    constructor_close: str | None = None
    doc: list[str] = field(default_factory=list)
    imports: set[Import] = field(default_factory=set)


@dataclass
class RenderedField:
    accessor: Accessor
    holder: ArgsHolder | None = None


class FieldRenderer:
    """Renders fields and input values of one generation run.

    Args:
        resolver: Type reference resolver for the run
        type_names: Registry of the module's type namespace; argument holders claim names in it
        runtime_module: Rust path providing ``Selection`` and ``FromSelection``
        args_naming: ``"field"`` names holders ``<Field>Args``,
                     ``"type_field"`` names them ``<Type><Field>Args``
    """

    def __init__(
        self,
        resolver: TypeResolver,
        type_names: NameRegistry,
        runtime_module: str = "crate::querybuilder",
        args_naming: str = "field",
    ):
        if args_naming not in ("field", "type_field"):
            raise ValueError(f"Unknown args naming {args_naming!r}")
        self.resolver = resolver
        self.type_names = type_names
        self.runtime_module = runtime_module
        self.args_naming = args_naming

    def render_fields(self, owner: IRFullType) -> list[RenderedField]:
        methods = NameRegistry(f"methods of {owner.name}")
        rendered = []
        for gql_field in owner.fields or []:
            methods.claim(to_member_identifier(gql_field.name), gql_field.name)
            rendered.append(self.render_field(owner, gql_field))
        return rendered

    def render_field(self, owner: IRFullType, gql_field: IRField) -> RenderedField:
        holder = None
        if gql_field.args:
            holder = self.render_args(owner, gql_field)

        output = self.resolver.resolve(gql_field.type_ref)
        doc = render_doc(gql_field.description)
        if gql_field.is_deprecated:
            doc += deprecation_doc(gql_field.deprecation_reason)

        accessor = Accessor(
            name=to_member_identifier(gql_field.name),
            field_name=gql_field.name,
            output=output.render(),
            args_type=holder.name if holder else None,
            doc=doc,
            imports=set(output.imports),
        )
        if output.is_object:
            if output.nullable:
                accessor.constructor_open = f"Some({output.base} {{"
                accessor.constructor_close = "})"
            else:
                accessor.constructor_open = f"{output.base} {{"
                accessor.constructor_close = "}"
        else:
            accessor.imports.add((self.runtime_module, "FromSelection"))
        return RenderedField(accessor=accessor, holder=holder)

    def holder_name(self, owner: IRFullType, gql_field: IRField) -> str:
        name = to_type_identifier(gql_field.name) + "Args"
        if self.args_naming == "type_field":
            name = to_type_identifier(owner.name) + name
        return name

    def render_args(self, owner: IRFullType, gql_field: IRField) -> ArgsHolder:
        name = self.type_names.claim(
            self.holder_name(owner, gql_field), f"{owner.name}.{gql_field.name}"
        )
        members, imports = self.render_members(gql_field.args, f"arguments of {owner.name}.{gql_field.name}")
        logger.debug(
            "%s.%s: %d required, %d optional args",
            owner.name, gql_field.name,
            len(gql_field.required_args), len(gql_field.optional_args),
        )
        return ArgsHolder(
            name=name,
            members=members,
            doc=render_doc(gql_field.description),
            imports=imports | {SERIALIZE},
        )

    def render_members(
        self, values: list[IRInputValue], scope: str
    ) -> tuple[list[StructMember], set[Import]]:
        """Render input values as struct members, preserving their order."""
        names = NameRegistry(scope)
        members = []
        imports: set[Import] = set()
        for value in values:
            member_name = names.claim(to_member_identifier(value.name), value.name)
            expr = self.resolver.resolve(value.type_ref)
            imports |= expr.imports
            doc = render_doc(value.description)
            if value.default_value is not None:
                default = " ".join(value.default_value.split())
                doc += (["///"] if doc else []) + [f"/// Default: `{default}`"]
            members.append(
                StructMember(
                    name=member_name,
                    type=expr.render(),
                    optional=expr.nullable,
                    doc=doc,
                    rename=value.name if _unraw(member_name) != value.name else None,
                )
            )
        return members, imports


def _unraw(identifier: str) -> str:
    return identifier[2:] if identifier.startswith("r#") else identifier
