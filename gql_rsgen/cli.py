"""Command-line interface for gql-rsgen."""

import logging
from pathlib import Path

import click

from .core.errors import GenerationError
from .core.generator import CodeGenerator, GeneratorConfig
from .core.hooks import AddHeaderHook, HookRunner
from .core.parser import SchemaParser
from .core.scalars import ScalarRegistry, parse_mapping


def build_config(scalars: tuple[str, ...], args_naming: str) -> GeneratorConfig:
    """Build a generator config from command-line options."""
    registry = ScalarRegistry()
    for spec in scalars:
        try:
            registry.register(*parse_mapping(spec))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--scalar")
    return GeneratorConfig(scalars=registry, args_naming=args_naming)


@click.group()
@click.version_option(package_name="gql-rsgen")
def main():
    """GraphQL to Rust query-builder generator.

    Generate typed Rust bindings from GraphQL schemas.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to an introspection result (.json), a .graphql/.graphqls file, or a directory of them.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file for the generated module (default: stdout).",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--scalar",
    "scalars",
    multiple=True,
    metavar="NAME=RUST_TYPE",
    help="Map a custom scalar to a Rust type instead of a newtype (repeatable).",
)
@click.option(
    "--args-naming",
    type=click.Choice(["field", "type_field"]),
    default="field",
    show_default=True,
    help="Name argument holders <Field>Args or <Type><Field>Args.",
)
@click.option(
    "--header",
    help="Comment header to prepend to the generated module.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    output: str | None,
    template_dir: str | None,
    scalars: tuple[str, ...],
    args_naming: str,
    header: str | None,
    verbose: bool,
):
    """Generate a Rust module from a GraphQL schema.

    Examples:

        gql-rsgen generate --schema ./introspection.json --output ./src/gen.rs

        gql-rsgen generate -s ./schema.graphqls --scalar DateTime=chrono::NaiveDateTime

        gql-rsgen generate -s ./schema -o gen.rs --header "Code generated by gql-rsgen. DO NOT EDIT."
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = build_config(scalars, args_naming)
    hooks = HookRunner()
    if header:
        hooks.add_post_hook(AddHeaderHook(header))

    schema_path = Path(schema).resolve()
    if verbose:
        click.echo(f"Schema: {schema_path}", err=True)

    try:
        ir = SchemaParser(str(schema_path)).parse()
        if verbose:
            click.echo(f"  Types: {len(ir.types)}", err=True)
            click.echo(f"  Entry point: {ir.entry_point}", err=True)

        generator = CodeGenerator(ir, config, template_dir=template_dir, hooks=hooks)
        if output:
            module = generator.write(output)
        else:
            module = generator.generate()
    except GenerationError as e:
        raise click.ClickException(str(e))

    if output:
        click.echo(f"Done! Generated {module.type_count} declarations in {Path(output).resolve()}", err=True)
    else:
        click.echo(module.source, nl=False)


if __name__ == "__main__":
    main()
