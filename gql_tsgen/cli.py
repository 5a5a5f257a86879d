"""Command-line interface for gql-tsgen."""

import json
import logging
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

import click
from graphql import GraphQLError, build_client_schema, print_schema

from .config import CodegenConfig
from .core.auth import BearerAuth, CombinedAuth, HeaderAuth
from .core.declarations import DeclarationBuilder
from .core.emitter import TypeScriptEmitter
from .core.errors import CodegenError
from .core.introspection import fetch_introspection
from .core.loader import DocumentCompiler, load_documents, load_schema

ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    name = archive_path.name.lower()
    if not name.endswith(ARCHIVE_SUFFIXES):
        raise ValueError(f"Unsupported archive format: {archive_path.name}")

    temp_dir = tempfile.mkdtemp()
    try:
        if name.endswith(".zip"):
            with zipfile.ZipFile(archive_path, "r") as zip_ref:
                zip_ref.extractall(temp_dir)
        else:
            with tarfile.open(archive_path, "r:gz") as tar_ref:
                tar_ref.extractall(temp_dir, filter="data")
    except (zipfile.BadZipFile, tarfile.TarError) as e:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Cannot extract archive {archive_path.name}: {e}") from e
    return temp_dir


@click.group()
@click.version_option(package_name="gql-tsgen")
def main():
    """GraphQL to TypeScript declaration generator.

    Generate typed result and variables interfaces for GraphQL operations.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Schema SDL file or directory, introspection .json, or archive (.zip, .tar.gz, .tgz).",
)
@click.option(
    "--queries",
    "-q",
    required=True,
    multiple=True,
    type=click.Path(exists=True),
    help="Query document file or directory (.graphql, .gql). Repeatable.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output TypeScript file.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON configuration file.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in module.ts.j2.",
)
@click.option(
    "--passthrough-custom-scalars",
    is_flag=True,
    help="Use custom scalar names as TypeScript types instead of 'any'.",
)
@click.option(
    "--register-module",
    help="Module to import registerQuery/registerMutation from.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    queries: tuple[str, ...],
    output: str,
    config_path: str | None,
    template_dir: str | None,
    passthrough_custom_scalars: bool,
    register_module: str | None,
    verbose: bool,
):
    """Generate TypeScript declarations for GraphQL operations.

    Examples:

        gql-tsgen generate -s ./schema.graphql -q ./queries -o ./src/generated/api.ts

        gql-tsgen generate -s ./schema.json -q a.graphql -q b.graphql -o api.ts -c gql-tsgen.json
    """
    configure_logging(verbose)
    schema_path = Path(schema).resolve()
    output_path = Path(output).resolve()
    temp_dir = None

    try:
        config = CodegenConfig.from_file(config_path) if config_path else CodegenConfig()
        overrides = {}
        if passthrough_custom_scalars:
            overrides["passthrough_custom_scalars"] = True
        if register_module:
            overrides["register_module"] = register_module
        if overrides:
            config = config.model_copy(update=overrides)

        actual_schema_path = schema_path
        if schema_path.is_file() and schema_path.name.lower().endswith(ARCHIVE_SUFFIXES):
            click.echo(f"Extracting archive {schema_path.name}...")
            temp_dir = extract_archive(schema_path)
            actual_schema_path = Path(temp_dir)

        click.echo("Loading schema...")
        gql_schema = load_schema(str(actual_schema_path))

        click.echo("Compiling documents...")
        document = load_documents(queries)
        model = DocumentCompiler(gql_schema).compile(document)

        hooks = config.hook_runner()
        model = hooks.run_pre_hooks(model)

        if verbose:
            click.echo(f"  Types used: {len(model.types_used)}")
            click.echo(f"  Operations: {len(model.operations)}")
            click.echo(f"  Fragments: {len(model.fragments)}")

        click.echo("Building declarations...")
        result = DeclarationBuilder(config.generation_context()).build(model)
        for failure in result.failures:
            click.echo(f"  Skipped {failure.unit}: {failure.error}", err=True)

        emitter = TypeScriptEmitter(
            register_module=config.register_module,
            template_dir=template_dir,
            hooks=hooks,
        )
        emitter.emit_to_file(result, model, str(output_path))
        click.echo(f"Done! Generated {len(result.declarations)} declarations in {output_path}")
    except CodegenError as e:
        raise click.ClickException(e.message) from e
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    finally:
        if temp_dir:
            shutil.rmtree(temp_dir)

    if result.failures:
        raise SystemExit(1)


@main.command()
@click.option("--url", "-u", required=True, help="GraphQL endpoint URL.")
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output file: SDL, or introspection JSON when it ends in .json.",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Extra request header as 'Name: value'. Repeatable.",
)
@click.option("--bearer", help="Bearer token for the Authorization header.")
@click.option("--timeout", default=30.0, show_default=True, help="Request timeout in seconds.")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def introspect(
    url: str,
    output: str,
    headers: tuple[str, ...],
    bearer: str | None,
    timeout: float,
    verbose: bool,
):
    """Download a schema from a GraphQL endpoint.

    Examples:

        gql-tsgen introspect -u https://api.example.com/graphql -o schema.graphql

        gql-tsgen introspect -u https://api.example.com/graphql -o schema.json --bearer $TOKEN
    """
    configure_logging(verbose)
    output_path = Path(output).resolve()

    try:
        handlers = [HeaderAuth.from_pairs(list(headers))]
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--header") from e
    if bearer:
        handlers.append(BearerAuth(bearer))

    click.echo(f"Introspecting {url}...")
    try:
        data = fetch_introspection(url, auth=CombinedAuth(*handlers), timeout=timeout)
        if output_path.suffix == ".json":
            content = json.dumps({"data": data}, indent=2) + "\n"
        else:
            content = print_schema(build_client_schema(data)) + "\n"
    except CodegenError as e:
        raise click.ClickException(e.message) from e
    except (GraphQLError, TypeError) as e:
        raise click.ClickException(f"Invalid introspection result: {e}") from e

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    click.echo(f"Done! Schema written to {output_path}")


if __name__ == "__main__":
    main()
