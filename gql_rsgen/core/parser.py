"""Schema loading using graphql-core.

Reads an introspection result (.json) directly, or GraphQL SDL
(.graphql / .graphqls files, or a directory of them) which graphql-core
builds into a schema and introspects. Both produce an IRSchema.
"""

import json
import logging
import os

from graphql import GraphQLError, build_schema, introspection_from_schema

from .errors import SchemaLoadError
from .ir import IRSchema

logger = logging.getLogger(__name__)

SDL_EXTENSIONS = (".graphql", ".graphqls")


class SchemaParser:
    """Loads a schema file or directory into IR."""

    def __init__(self, schema_path: str):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = str(schema_path)

    def parse(self) -> IRSchema:
        """Load the schema and return the complete IR."""
        if os.path.isfile(self.schema_path) and self.schema_path.endswith(".json"):
            return self.parse_introspection(self._read(self.schema_path))
        return self.parse_sdl(self._collect_sdl())

    @staticmethod
    def _read(file_path: str) -> str:
        try:
            with open(file_path) as f:
                return f.read()
        except OSError as e:
            raise SchemaLoadError(f"Cannot read {file_path}: {e}") from e

    def _collect_schema_files(self) -> list[str]:
        """Collect all SDL files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SDL_EXTENSIONS):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SDL_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def _collect_sdl(self) -> str:
        files = self._collect_schema_files()
        if not files:
            raise SchemaLoadError(f"No schema files found at {self.schema_path}")
        logger.debug("Reading %d SDL file(s) from %s", len(files), self.schema_path)
        return "\n".join(self._read(f) for f in files)

    @staticmethod
    def parse_introspection(content: str) -> IRSchema:
        """Build IR from the text of an introspection result."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("Invalid introspection JSON: %s", e)
            raise SchemaLoadError(f"Invalid introspection JSON: {e}") from e
        if not isinstance(data, dict):
            raise SchemaLoadError("Introspection result must be a JSON object")
        return IRSchema.from_introspection(data)

    @staticmethod
    def parse_sdl(sdl: str) -> IRSchema:
        """Build IR from GraphQL SDL."""
        try:
            schema = build_schema(sdl)
        except (GraphQLError, TypeError) as e:
            logger.error("Error parsing SDL: %s", e)
            raise SchemaLoadError(f"Invalid GraphQL SDL: {e}") from e
        return IRSchema.from_introspection(introspection_from_schema(schema))
