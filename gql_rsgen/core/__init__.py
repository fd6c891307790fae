"""Core modules for GraphQL code generation."""

from .emitter import Fragment, assemble
from .errors import (
    GenerationError,
    NamingCollisionError,
    SchemaLoadError,
    SchemaShapeError,
    UnsupportedKindError,
)
from .generator import CodeGenerator, GeneratedModule, GeneratorConfig, generate
from .handlers import (
    EnumHandler,
    Handler,
    InputObjectHandler,
    ObjectHandler,
    ScalarHandler,
    Visitor,
)
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .ir import (
    IREnumValue,
    IRField,
    IRFullType,
    IRInputValue,
    IRSchema,
    IRTypeRef,
    TypeKind,
)
from .naming import render_doc, to_member_identifier, to_type_identifier, to_variant_identifier
from .parser import SchemaParser
from .scalars import ScalarMapping, ScalarRegistry, parse_mapping
from .type_ref import TypeExpr, TypeResolver, resolve

__all__ = [
    # Errors
    "GenerationError",
    "NamingCollisionError",
    "SchemaLoadError",
    "SchemaShapeError",
    "UnsupportedKindError",
    # IR types
    "IREnumValue",
    "IRField",
    "IRFullType",
    "IRInputValue",
    "IRSchema",
    "IRTypeRef",
    "TypeKind",
    # Parser
    "SchemaParser",
    # Naming
    "render_doc",
    "to_member_identifier",
    "to_type_identifier",
    "to_variant_identifier",
    # Scalars
    "ScalarMapping",
    "ScalarRegistry",
    "parse_mapping",
    # Type references
    "TypeExpr",
    "TypeResolver",
    "resolve",
    # Handlers
    "Handler",
    "ObjectHandler",
    "InputObjectHandler",
    "EnumHandler",
    "ScalarHandler",
    "Visitor",
    # Emitter
    "Fragment",
    "assemble",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
    # Generator
    "CodeGenerator",
    "GeneratedModule",
    "GeneratorConfig",
    "generate",
]
