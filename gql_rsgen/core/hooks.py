"""Generation hooks for customizing code generation.

Provides protocols for pre- and post-generation hooks that can replace
the IR before generation or transform the generated code after.

The IR is immutable, so pre-generation hooks return a new schema
(``model_copy(update=...)``) instead of editing the one they receive.

Example usage:
    from gql_rsgen.core.hooks import PreGenerateHook, PostGenerateHook

    # Pre-generation hook to drop internal types
    class FilterInternalTypes(PreGenerateHook):
        def pre_generate(self, ir):
            types = [t for t in ir.types if not t.name.startswith("_")]
            return ir.model_copy(update={"types": types})

    # Post-generation hook to add headers
    class AddLicenseHeader(PostGenerateHook):
        def post_generate(self, filename, content):
            return "// Copyright 2024 My Company\\n\\n" + content
"""

import logging
from typing import Iterable, Protocol, runtime_checkable

from .errors import GenerationError
from .ir import IRFullType, IRSchema, TypeKind

logger = logging.getLogger(__name__)


@runtime_checkable
class PreGenerateHook(Protocol):
    """Protocol for pre-generation hooks.

    Pre-generation hooks receive the IR schema before code generation
    and return the schema to generate from.
    """

    def pre_generate(self, ir: IRSchema) -> IRSchema:
        """Called before code generation.

        Args:
            ir: The intermediate representation of the schema

        Returns:
            The IR to use for generation
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    Post-generation hooks receive the generated module and can
    transform it before it's written out.

    Example:
        class Rustfmt(PostGenerateHook):
            def post_generate(self, filename: str, content: str) -> str:
                return subprocess.run(
                    ["rustfmt", "--emit", "stdout"], input=content,
                    capture_output=True, text=True, check=True,
                ).stdout
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Called after code generation.

        Args:
            filename: The name of the generated file (e.g., "gen.rs")
            content: The generated code content

        Returns:
            The (possibly transformed) code
        """
        ...


class AddHeaderHook:
    """Built-in hook to add a comment header to the generated module.

    Lines not already starting with ``//`` are turned into line comments.

    Example:
        hook = AddHeaderHook("Code generated by gql-rsgen. DO NOT EDIT.")
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        """Add a header to the beginning of the file."""
        lines = [
            line if line.startswith("//") else f"// {line}".rstrip()
            for line in self.header.rstrip("\n").splitlines()
        ]
        return "\n".join(lines) + "\n\n" + content


class FilterTypesHook:
    """Built-in hook to drop types by name prefix/suffix or by kind.

    The schema's root operation types are always kept, so the generated
    module keeps its entry point.

    Example:
        # Remove all types starting with underscore, and every input object
        hook = FilterTypesHook(exclude_prefix="_", exclude_kinds=[TypeKind.INPUT_OBJECT])
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
        exclude_kinds: Iterable[TypeKind] = (),
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix
        self.exclude_kinds = frozenset(exclude_kinds)

    def _keeps(self, full_type: IRFullType, roots: set[str]) -> bool:
        name = full_type.name
        if name in roots:
            return True
        if full_type.kind in self.exclude_kinds:
            return False
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        return (
            (not self.include_prefix or name.startswith(self.include_prefix))
            and (not self.include_suffix or name.endswith(self.include_suffix))
        )

    def pre_generate(self, ir: IRSchema) -> IRSchema:
        """Return a copy of the IR without the filtered-out types."""
        roots = {r for r in (ir.query_type, ir.mutation_type, ir.subscription_type) if r}
        types = [t for t in ir.types if self._keeps(t, roots)]
        return ir.model_copy(update={"types": types})


class HookRunner:
    """Runs pre- and post-generation hooks in registration order."""

    def __init__(
        self,
        pre_hooks: Iterable[PreGenerateHook] = (),
        post_hooks: Iterable[PostGenerateHook] = (),
    ):
        self.pre_hooks: list[PreGenerateHook] = list(pre_hooks)
        self.post_hooks: list[PostGenerateHook] = list(post_hooks)

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, ir: IRSchema) -> IRSchema:
        """Thread the schema through every pre-generation hook.

        Raises GenerationError if a hook returns something other than a schema.
        """
        for hook in self.pre_hooks:
            count = len(ir.types)
            ir = hook.pre_generate(ir)
            if not isinstance(ir, IRSchema):
                raise GenerationError(
                    f"Pre-generation hook {type(hook).__name__} returned "
                    f"{type(ir).__name__}, expected IRSchema"
                )
            logger.debug("%s: %d -> %d types", type(hook).__name__, count, len(ir.types))
        return ir

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
            logger.debug("%s rewrote %s", type(hook).__name__, filename)
        return content
