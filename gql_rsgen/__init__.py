"""gql-rsgen: generate Rust query-builder bindings from GraphQL schemas."""

__version__ = "0.1.0"
