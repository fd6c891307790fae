"""Code generator for GraphQL introspection schemas.

Renders Jinja2 templates to produce one Rust query-builder module from IR.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator(schema, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, StrictUndefined

from .emitter import assemble
from .fields import FieldRenderer
from .handlers import RenderContext, Visitor, default_handlers
from .hooks import HookRunner
from .ir import IRSchema
from .naming import RESERVED_TYPE_NAMES, NameRegistry, to_type_identifier
from .scalars import ScalarRegistry
from .type_ref import TypeResolver

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "gen.rs"


@dataclass
class GeneratorConfig:
    """Options for a generation run.

    Attributes:
        scalars: Scalar mappings; unmapped scalars become String newtypes
        args_naming: "field" for <Field>Args holders, "type_field" for <Type><Field>Args
        runtime_module: Rust path providing Selection and FromSelection
        connect_params_module: Rust path providing ConnectParams
    """
    scalars: ScalarRegistry = field(default_factory=ScalarRegistry)
    args_naming: str = "field"
    runtime_module: str = "crate::querybuilder"
    connect_params_module: str = "dagger_core::connect_params"


@dataclass
class GeneratedModule:
    """Result of a generation run."""
    source: str
    entry_point: str | None
    type_count: int


class CodeGenerator:
    """Generates a Rust module from GraphQL IR.

    Supports custom templates via the template_dir parameter.
    Templates in template_dir take precedence over built-in templates.

    Available templates to override:
        - object.rs.j2: object struct and its accessor impl
        - struct.rs.j2: argument holders and input objects
        - enum.rs.j2: enums
        - scalar.rs.j2: custom scalar newtypes

    Example:
        generator = CodeGenerator(schema, template_dir="./my_templates")
        module = generator.generate()
        print(module.source)
    """

    def __init__(
        self,
        schema: IRSchema,
        config: GeneratorConfig | None = None,
        template_dir: str | None = None,
        hooks: HookRunner | None = None,
    ):
        self.schema = schema
        self.config = config or GeneratorConfig()
        self.template_dir = template_dir
        self.hooks = hooks or HookRunner()

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
            else:
                logger.warning("Template directory %s does not exist, using defaults", template_dir)
        loaders.append(PackageLoader("gql_rsgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def _new_context(self) -> RenderContext:
        """Fresh per-run state, so runs never share registries."""
        scalars = self.config.scalars
        reserved = RESERVED_TYPE_NAMES + tuple(
            sorted(name for _, name in scalars.get_all_imports())
        )
        type_names = NameRegistry("module types", reserved=reserved)
        resolver = TypeResolver(scalars)
        return RenderContext(
            env=self.env,
            resolver=resolver,
            type_names=type_names,
            fields=FieldRenderer(
                resolver,
                type_names,
                runtime_module=self.config.runtime_module,
                args_naming=self.config.args_naming,
            ),
            runtime_module=self.config.runtime_module,
            connect_params_module=self.config.connect_params_module,
        )

    def generate(self, filename: str = DEFAULT_FILENAME) -> GeneratedModule:
        """Generate the module. Raises GenerationError without producing output on failure."""
        schema = self.hooks.run_pre_hooks(self.schema)
        context = self._new_context()
        fragments = Visitor(default_handlers(context)).visit(schema)
        source = self.hooks.run_post_hooks(filename, assemble(fragments))

        entry_point = schema.entry_point
        logger.info(
            "Generated %d declarations from %d schema types",
            len(fragments), len(schema.types),
        )
        return GeneratedModule(
            source=source,
            entry_point=to_type_identifier(entry_point) if entry_point else None,
            type_count=len(fragments),
        )

    def write(self, output_path: str | Path) -> GeneratedModule:
        """Generate and write the module to ``output_path``."""
        output_path = Path(output_path)
        module = self.generate(output_path.name)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(module.source)
        return module


def generate(schema: IRSchema, config: GeneratorConfig | None = None) -> str:
    """Generate Rust source for a schema with default templates."""
    return CodeGenerator(schema, config).generate().source
