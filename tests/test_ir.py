"""Tests for the schema model and introspection loading."""

import pytest
from pydantic import ValidationError

from gql_rsgen.core.errors import SchemaShapeError
from gql_rsgen.core.ir import IRSchema, IRTypeRef, TypeKind


@pytest.fixture
def introspection():
    """A trimmed introspection result in wire format."""
    return {
        "__schema": {
            "queryType": {"name": "Query"},
            "mutationType": None,
            "subscriptionType": None,
            "types": [
                {
                    "kind": "OBJECT",
                    "name": "Query",
                    "description": None,
                    "fields": [
                        {
                            "name": "cacheVolume",
                            "description": "Constructs a cache volume for a given cache key.",
                            "args": [
                                {
                                    "name": "key",
                                    "description": None,
                                    "type": {
                                        "kind": "NON_NULL",
                                        "name": None,
                                        "ofType": {"kind": "SCALAR", "name": "String", "ofType": None},
                                    },
                                    "defaultValue": None,
                                }
                            ],
                            "type": {
                                "kind": "NON_NULL",
                                "name": None,
                                "ofType": {"kind": "OBJECT", "name": "CacheVolume", "ofType": None},
                            },
                            "isDeprecated": False,
                            "deprecationReason": None,
                        }
                    ],
                    "inputFields": None,
                    "interfaces": [],
                    "enumValues": None,
                    "possibleTypes": None,
                },
                {
                    "kind": "ENUM",
                    "name": "CacheSharingMode",
                    "description": None,
                    "fields": None,
                    "inputFields": None,
                    "interfaces": None,
                    "enumValues": [
                        {"name": "SHARED", "description": None, "isDeprecated": False, "deprecationReason": None},
                    ],
                    "possibleTypes": None,
                },
            ],
            "directives": [],
        }
    }


class TestTypeRef:
    """Tests for IRTypeRef shape validation."""

    def test_named_requires_name(self):
        with pytest.raises(ValidationError):
            IRTypeRef(kind=TypeKind.SCALAR)

    def test_wrapper_requires_of_type(self):
        with pytest.raises(ValidationError):
            IRTypeRef(kind=TypeKind.NON_NULL)

    def test_named_cannot_wrap(self):
        with pytest.raises(ValidationError):
            IRTypeRef(kind=TypeKind.OBJECT, name="A", of_type=IRTypeRef(kind=TypeKind.OBJECT, name="B"))

    def test_named_type_and_required(self):
        ref = IRTypeRef.model_validate(
            {"kind": "NON_NULL", "ofType": {"kind": "LIST", "ofType": {"kind": "SCALAR", "name": "String"}}}
        )
        assert ref.is_required
        assert not ref.of_type.is_required
        assert ref.named_type().name == "String"


class TestFromIntrospection:
    """Tests for IRSchema.from_introspection."""

    def test_parses_wire_format(self, introspection):
        schema = IRSchema.from_introspection(introspection)

        assert schema.query_type == "Query"
        assert schema.entry_point == "Query"
        assert schema.mutation_type is None
        assert [t.name for t in schema.types] == ["Query", "CacheSharingMode"]

        field = schema.get_type("Query").fields[0]
        assert field.name == "cacheVolume"
        assert field.args[0].type_ref.is_required
        assert field.type_ref.named_type().name == "CacheVolume"
        assert schema.get_type("CacheSharingMode").enum_values[0].name == "SHARED"

    def test_accepts_response_envelope(self, introspection):
        schema = IRSchema.from_introspection({"data": introspection})
        assert schema.get_type("Query") is not None

    def test_missing_schema_key(self):
        with pytest.raises(SchemaShapeError):
            IRSchema.from_introspection({"types": []})

    def test_unknown_kind_is_fatal(self, introspection):
        introspection["__schema"]["types"][0]["kind"] = "DIRECTIVE"
        with pytest.raises(SchemaShapeError):
            IRSchema.from_introspection(introspection)

    def test_missing_type_name_is_fatal(self, introspection):
        del introspection["__schema"]["types"][1]["name"]
        with pytest.raises(SchemaShapeError):
            IRSchema.from_introspection(introspection)

    def test_empty_type_name_is_fatal(self, introspection):
        introspection["__schema"]["types"][1]["name"] = ""
        with pytest.raises(SchemaShapeError):
            IRSchema.from_introspection(introspection)

    def test_models_are_immutable(self, introspection):
        schema = IRSchema.from_introspection(introspection)
        with pytest.raises(ValidationError):
            schema.query_type = "Mutation"
