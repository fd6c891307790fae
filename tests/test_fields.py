"""Tests for field accessor and argument holder rendering."""

import pytest

from gql_rsgen.core.errors import NamingCollisionError
from gql_rsgen.core.fields import FieldRenderer
from gql_rsgen.core.ir import IRField, IRFullType, IRInputValue, IRTypeRef, TypeKind
from gql_rsgen.core.naming import NameRegistry
from gql_rsgen.core.type_ref import TypeResolver


def named(kind: TypeKind, name: str) -> IRTypeRef:
    return IRTypeRef(kind=kind, name=name)


def non_null(inner: IRTypeRef) -> IRTypeRef:
    return IRTypeRef(kind=TypeKind.NON_NULL, of_type=inner)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def renderer():
    return FieldRenderer(TypeResolver(), NameRegistry("module types"))


@pytest.fixture
def container_field():
    """Query.container(id: ContainerID!, platform: Platform): Container!"""
    return IRField(
        name="container",
        description="Loads a container from ID.",
        args=[
            IRInputValue(name="id", type_ref=non_null(named(TypeKind.SCALAR, "ContainerID"))),
            IRInputValue(name="platform", type_ref=named(TypeKind.SCALAR, "Platform")),
        ],
        type_ref=non_null(named(TypeKind.OBJECT, "Container")),
    )


@pytest.fixture
def query_type(container_field):
    return IRFullType(kind=TypeKind.OBJECT, name="Query", fields=[container_field])


# =============================================================================
# Tests: Argument holders
# =============================================================================


class TestArgumentHolder:
    """Tests for render_args."""

    def test_required_and_optional_partition(self, renderer, query_type, container_field):
        holder = renderer.render_args(query_type, container_field)

        assert holder.name == "ContainerArgs"
        assert [m.name for m in holder.members] == ["id", "platform"]
        assert [m.name for m in holder.required] == ["id"]
        assert [m.name for m in holder.optional] == ["platform"]
        assert holder.members[0].type == "ContainerID"
        assert holder.members[1].type == "Option<Platform>"

    def test_holder_carries_field_description(self, renderer, query_type, container_field):
        holder = renderer.render_args(query_type, container_field)
        assert holder.doc == ["/// Loads a container from ID."]

    def test_holder_needs_serialize(self, renderer, query_type, container_field):
        holder = renderer.render_args(query_type, container_field)
        assert ("serde", "Serialize") in holder.imports

    def test_type_field_naming(self, query_type, container_field):
        renderer = FieldRenderer(TypeResolver(), NameRegistry("module types"), args_naming="type_field")
        assert renderer.render_args(query_type, container_field).name == "QueryContainerArgs"

    def test_unknown_naming_rejected(self):
        with pytest.raises(ValueError):
            FieldRenderer(TypeResolver(), NameRegistry("module types"), args_naming="camel")

    def test_same_holder_name_on_two_types_collides(self, renderer, query_type, container_field):
        other = IRFullType(kind=TypeKind.OBJECT, name="Host", fields=[container_field])
        renderer.render_args(query_type, container_field)
        with pytest.raises(NamingCollisionError) as exc_info:
            renderer.render_args(other, container_field)
        assert exc_info.value.first == "Query.container"
        assert exc_info.value.second == "Host.container"

    def test_wire_name_rename(self, renderer):
        gql_field = IRField(
            name="withExec",
            args=[
                IRInputValue(name="skipEntrypoint", type_ref=named(TypeKind.SCALAR, "Boolean")),
                IRInputValue(name="type", type_ref=named(TypeKind.SCALAR, "String")),
                IRInputValue(name="args", type_ref=named(TypeKind.SCALAR, "String")),
            ],
            type_ref=non_null(named(TypeKind.OBJECT, "Container")),
        )
        owner = IRFullType(kind=TypeKind.OBJECT, name="Container", fields=[gql_field])
        members = renderer.render_args(owner, gql_field).members

        assert [(m.name, m.rename) for m in members] == [
            ("skip_entrypoint", "skipEntrypoint"),
            ("r#type", None),
            ("args", None),
        ]

    def test_default_value_documented(self, renderer):
        values = [
            IRInputValue(
                name="sharing",
                description="Sharing mode.",
                type_ref=named(TypeKind.ENUM, "CacheSharingMode"),
                default_value="SHARED",
            )
        ]
        members, _ = renderer.render_members(values, "test")
        assert members[0].doc == ["/// Sharing mode.", "///", "/// Default: `SHARED`"]

    def test_member_collision(self, renderer):
        values = [
            IRInputValue(name="exitCode", type_ref=named(TypeKind.SCALAR, "Int")),
            IRInputValue(name="exit_code", type_ref=named(TypeKind.SCALAR, "Int")),
        ]
        with pytest.raises(NamingCollisionError):
            renderer.render_members(values, "test")


# =============================================================================
# Tests: Accessors
# =============================================================================


class TestAccessor:
    """Tests for render_field."""

    def test_object_output_builds_new_instance(self, renderer, query_type, container_field):
        accessor = renderer.render_field(query_type, container_field).accessor

        assert accessor.name == "container"
        assert accessor.field_name == "container"
        assert accessor.args_type == "ContainerArgs"
        assert accessor.output == "Container"
        assert accessor.constructor_open == "Container {"
        assert accessor.constructor_close == "}"

    def test_nullable_object_wrapped_in_some(self, renderer, query_type):
        gql_field = IRField(name="parent", type_ref=named(TypeKind.OBJECT, "Directory"))
        accessor = renderer.render_field(query_type, gql_field).accessor

        assert accessor.output == "Option<Directory>"
        assert accessor.constructor_open == "Some(Directory {"
        assert accessor.constructor_close == "})"

    def test_leaf_output_uses_from_selection(self, renderer, query_type):
        gql_field = IRField(name="id", type_ref=non_null(named(TypeKind.SCALAR, "CacheID")))
        rendered = renderer.render_field(query_type, gql_field)

        assert rendered.holder is None
        assert rendered.accessor.args_type is None
        assert rendered.accessor.output == "CacheID"
        assert rendered.accessor.constructor_open is None
        assert ("crate::querybuilder", "FromSelection") in rendered.accessor.imports

    def test_deprecated_field_documented(self, renderer, query_type):
        gql_field = IRField(
            name="exitCode",
            type_ref=named(TypeKind.SCALAR, "Int"),
            is_deprecated=True,
            deprecation_reason="Use `sync` instead.",
        )
        accessor = renderer.render_field(query_type, gql_field).accessor
        assert accessor.name == "exit_code"
        assert accessor.doc[-1] == "/// Deprecated: Use `sync` instead."

    def test_method_collision(self, renderer):
        owner = IRFullType(
            kind=TypeKind.OBJECT,
            name="Container",
            fields=[
                IRField(name="exitCode", type_ref=named(TypeKind.SCALAR, "Int")),
                IRField(name="exit_code", type_ref=named(TypeKind.SCALAR, "Int")),
            ],
        )
        with pytest.raises(NamingCollisionError):
            renderer.render_fields(owner)
