"""Per-kind rendering handlers and the visitor that dispatches to them.

Each handler exposes ``predicate`` and ``render``. The visitor walks the
schema in declaration order and hands every type to the first handler
whose predicate matches. Handlers only ever refer to other types by name,
so the order types appear in never matters.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from jinja2 import Environment

from .emitter import Fragment
from .errors import SchemaShapeError, UnsupportedKindError
from .fields import SERIALIZE, FieldRenderer
from .ir import IRFullType, IRSchema, TypeKind
from .naming import (
    NameRegistry,
    deprecation_doc,
    render_doc,
    to_type_identifier,
    to_variant_identifier,
)
from .type_ref import TypeResolver

logger = logging.getLogger(__name__)

DESERIALIZE = ("serde", "Deserialize")

VALUE_DERIVES = ["Serialize", "Deserialize", "Debug", "Clone", "PartialEq"]
PAYLOAD_DERIVES = ["Serialize", "Debug", "Clone"]


@dataclass
class RenderContext:
    """Everything a handler needs for one generation run."""
    env: Environment
    resolver: TypeResolver
    type_names: NameRegistry
    fields: FieldRenderer
    runtime_module: str = "crate::querybuilder"
    connect_params_module: str = "dagger_core::connect_params"

    def render(self, template_name: str, **context) -> str:
        return self.env.get_template(template_name).render(**context)


@runtime_checkable
class Handler(Protocol):
    """Protocol for per-kind renderers."""

    def predicate(self, full_type: IRFullType) -> bool:
        """True if this handler renders the given type."""
        ...

    def render(self, full_type: IRFullType) -> Fragment | None:
        """Render the type, or return None if it needs no declaration."""
        ...


class BaseHandler:
    kind: TypeKind

    def __init__(self, context: RenderContext):
        self.context = context

    def predicate(self, full_type: IRFullType) -> bool:
        return full_type.kind == self.kind

    def claim(self, full_type: IRFullType) -> str:
        """Reserve the type identifier for this type in the module namespace."""
        return self.context.type_names.claim(to_type_identifier(full_type.name), full_type.name)


class ObjectHandler(BaseHandler):
    """Renders an object type as a struct holding the query state, plus accessors."""
    kind = TypeKind.OBJECT

    def render(self, full_type: IRFullType) -> Fragment:
        name = self.claim(full_type)
        ctx = self.context
        imports = {
            (ctx.runtime_module, "Selection"),
            (ctx.connect_params_module, "ConnectParams"),
            ("std::process", "Child"),
            ("std::sync", "Arc"),
        }
        sources = []
        methods = []
        for rendered in ctx.fields.render_fields(full_type):
            if rendered.holder is not None:
                holder = rendered.holder
                sources.append(ctx.render(
                    "struct.rs.j2",
                    name=holder.name,
                    doc=holder.doc,
                    derives=PAYLOAD_DERIVES,
                    members=holder.members,
                ))
                imports |= holder.imports
            methods.append(rendered.accessor)
            imports |= rendered.accessor.imports

        sources.append(ctx.render(
            "object.rs.j2",
            name=name,
            doc=render_doc(full_type.description),
            methods=methods,
        ))
        return Fragment(full_type.name, "\n\n".join(sources), imports)


class InputObjectHandler(BaseHandler):
    """Renders an input object as a plain serializable data struct."""
    kind = TypeKind.INPUT_OBJECT

    def render(self, full_type: IRFullType) -> Fragment:
        name = self.claim(full_type)
        members, imports = self.context.fields.render_members(
            full_type.input_fields or [], f"fields of {full_type.name}"
        )
        source = self.context.render(
            "struct.rs.j2",
            name=name,
            doc=render_doc(full_type.description),
            derives=PAYLOAD_DERIVES,
            members=members,
        )
        return Fragment(full_type.name, source, imports | {SERIALIZE})


@dataclass
class EnumVariant:
    name: str
    rename: str | None = None
    doc: list[str] = field(default_factory=list)


class EnumHandler(BaseHandler):
    """Renders an enum with one variant per value, in declaration order."""
    kind = TypeKind.ENUM

    def render(self, full_type: IRFullType) -> Fragment:
        name = self.claim(full_type)
        names = NameRegistry(f"variants of {full_type.name}")
        variants = []
        for value in full_type.enum_values or []:
            variant = names.claim(to_variant_identifier(value.name), value.name)
            doc = render_doc(value.description)
            if value.is_deprecated:
                doc += deprecation_doc(value.deprecation_reason)
            variants.append(EnumVariant(
                name=variant,
                rename=value.name if variant != value.name else None,
                doc=doc,
            ))
        source = self.context.render(
            "enum.rs.j2",
            name=name,
            doc=render_doc(full_type.description),
            derives=VALUE_DERIVES,
            variants=variants,
        )
        return Fragment(full_type.name, source, {SERIALIZE, DESERIALIZE})


class ScalarHandler(BaseHandler):
    """Renders custom scalars as newtypes over String; mapped scalars render nothing."""
    kind = TypeKind.SCALAR

    def render(self, full_type: IRFullType) -> Fragment | None:
        if self.context.resolver.scalars.has(full_type.name):
            return None
        name = self.claim(full_type)
        source = self.context.render(
            "scalar.rs.j2",
            name=name,
            doc=render_doc(full_type.description),
            derives=VALUE_DERIVES,
        )
        return Fragment(full_type.name, source, {SERIALIZE, DESERIALIZE})


UNSUPPORTED_KINDS = (TypeKind.INTERFACE, TypeKind.UNION)


def default_handlers(context: RenderContext) -> list[Handler]:
    return [
        ObjectHandler(context),
        InputObjectHandler(context),
        EnumHandler(context),
        ScalarHandler(context),
    ]


class Visitor:
    """Dispatches every schema type to the first matching handler."""

    def __init__(self, handlers: list[Handler]):
        self.handlers = handlers

    def select(self, full_type: IRFullType) -> Handler:
        if full_type.kind in UNSUPPORTED_KINDS:
            raise UnsupportedKindError(full_type.kind.value, full_type.name)
        for handler in self.handlers:
            if handler.predicate(full_type):
                return handler
        raise SchemaShapeError(
            f"No handler for type {full_type.name!r} of kind {full_type.kind.value}"
        )

    def visit(self, schema: IRSchema) -> list[Fragment]:
        fragments = []
        for full_type in schema.types:
            if full_type.is_introspection_type:
                continue
            handler = self.select(full_type)
            logger.debug("Rendering %s with %s", full_type.name, type(handler).__name__)
            fragment = handler.render(full_type)
            if fragment is not None:
                fragments.append(fragment)
        return fragments
