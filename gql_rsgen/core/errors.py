"""Errors raised while loading a schema or generating code from it.

Generation is all-or-nothing: any of these aborts the run before a
single line of output is produced.
"""


class GenerationError(Exception):
    """Base class for every error raised by gql-rsgen."""


class SchemaLoadError(GenerationError):
    """Raised when a schema file cannot be read or parsed."""


class SchemaShapeError(GenerationError):
    """Raised when the schema does not have the shape the generator expects."""


class UnsupportedKindError(SchemaShapeError):
    """Raised for type kinds the generator deliberately does not handle."""

    def __init__(self, kind: str, type_name: str | None = None):
        self.kind = kind
        self.type_name = type_name
        where = f" (type {type_name!r})" if type_name else ""
        super().__init__(f"Unsupported type kind {kind}{where}")


class NamingCollisionError(GenerationError):
    """Raised when two schema names normalize to the same target identifier."""

    def __init__(self, identifier: str, first: str, second: str):
        self.identifier = identifier
        self.first = first
        self.second = second
        super().__init__(
            f"Names {first!r} and {second!r} both normalize to {identifier!r}"
        )
