"""Intermediate Representation (IR) for GraphQL introspection schemas.

This module defines immutable pydantic models that mirror the shape of a
GraphQL introspection result. Models accept both the Python field names
and the camelCase keys used on the wire (``ofType``, ``inputFields``...),
so an introspection document can be validated straight into an IRSchema.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import SchemaShapeError

INTROSPECTION_PREFIX = "__"


class TypeKind(str, Enum):
    """The closed set of type kinds an introspection result may contain."""
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"

    @property
    def is_wrapper(self) -> bool:
        return self in (TypeKind.LIST, TypeKind.NON_NULL)


class _IRModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class IRTypeRef(_IRModel):
    """A possibly-wrapped reference to a named type, e.g. ``[String!]!``."""
    kind: TypeKind
    name: str | None = None
    of_type: "IRTypeRef | None" = Field(default=None, alias="ofType")

    @model_validator(mode="after")
    def _check_shape(self) -> "IRTypeRef":
        if self.kind.is_wrapper:
            if self.of_type is None:
                raise ValueError(f"{self.kind.value} type reference needs an ofType")
            if self.name is not None:
                raise ValueError(f"{self.kind.value} type reference cannot be named")
        else:
            if not self.name:
                raise ValueError(f"{self.kind.value} type reference needs a name")
            if self.of_type is not None:
                raise ValueError(f"{self.kind.value} type reference cannot wrap a type")
        return self

    @property
    def is_required(self) -> bool:
        """True if the outermost wrapper is NON_NULL."""
        return self.kind == TypeKind.NON_NULL

    def named_type(self) -> "IRTypeRef":
        """Return the innermost named reference."""
        ref = self
        while ref.of_type is not None:
            ref = ref.of_type
        return ref


class IRInputValue(_IRModel):
    """Represents an argument of a field or a field of an input object."""
    name: str
    description: str | None = None
    type_ref: IRTypeRef = Field(alias="type")
    # Literal as printed by the schema source; only presence matters here
    default_value: str | None = Field(default=None, alias="defaultValue")


class IRField(_IRModel):
    """Represents a field of an object type."""
    name: str
    description: str | None = None
    args: list[IRInputValue] = Field(default_factory=list)
    type_ref: IRTypeRef = Field(alias="type")
    is_deprecated: bool = Field(default=False, alias="isDeprecated")
    deprecation_reason: str | None = Field(default=None, alias="deprecationReason")

    @property
    def required_args(self) -> list[IRInputValue]:
        return [a for a in self.args if a.type_ref.is_required]

    @property
    def optional_args(self) -> list[IRInputValue]:
        return [a for a in self.args if not a.type_ref.is_required]


class IREnumValue(_IRModel):
    """Represents a single value in a GraphQL enum."""
    name: str
    description: str | None = None
    is_deprecated: bool = Field(default=False, alias="isDeprecated")
    deprecation_reason: str | None = Field(default=None, alias="deprecationReason")


class IRFullType(_IRModel):
    """A top-level type declaration. Which member list is meaningful depends on kind."""
    kind: TypeKind
    name: str = Field(min_length=1)
    description: str | None = None
    fields: list[IRField] | None = None
    input_fields: list[IRInputValue] | None = Field(default=None, alias="inputFields")
    enum_values: list[IREnumValue] | None = Field(default=None, alias="enumValues")

    @property
    def is_introspection_type(self) -> bool:
        """Check if this is one of the schema's own ``__``-prefixed types."""
        return self.name.startswith(INTROSPECTION_PREFIX)


def _root_name(value: Any) -> Any:
    # Introspection encodes roots as {"name": "Query"}
    if isinstance(value, dict):
        return value.get("name")
    return value


class IRSchema(_IRModel):
    """Complete intermediate representation of an introspection schema."""
    types: list[IRFullType] = Field(default_factory=list)
    query_type: str | None = Field(default=None, alias="queryType")
    mutation_type: str | None = Field(default=None, alias="mutationType")
    subscription_type: str | None = Field(default=None, alias="subscriptionType")

    @model_validator(mode="before")
    @classmethod
    def _flatten_roots(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for key in ("queryType", "mutationType", "subscriptionType"):
                if key in data:
                    data[key] = _root_name(data[key])
        return data

    @classmethod
    def from_introspection(cls, data: dict[str, Any]) -> "IRSchema":
        """Build a schema from an introspection result.

        Accepts the bare ``{"__schema": ...}`` document as well as a full
        GraphQL response wrapping it in ``{"data": ...}``.
        """
        if "data" in data and isinstance(data["data"], dict):
            data = data["data"]
        if "__schema" not in data:
            raise SchemaShapeError("Introspection result has no __schema key")
        try:
            return cls.model_validate(data["__schema"])
        except ValidationError as e:
            raise SchemaShapeError(f"Invalid introspection schema: {e}") from e

    def get_type(self, name: str) -> IRFullType | None:
        """Look up a type by name."""
        for full_type in self.types:
            if full_type.name == name:
                return full_type
        return None

    @property
    def entry_point(self) -> str | None:
        """Name of the root type callers start building queries from."""
        return self.query_type
