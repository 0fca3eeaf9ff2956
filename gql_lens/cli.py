"""Command-line interface for gql-lens."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import click
import httpx

from .core.auth import HeaderAuth
from .core.compressor import CompressionOptions, SchemaCompressor
from .core.context import render_context
from .core.errors import GqlLensError
from .core.executor import GraphQLExecutor
from .core.hooks import AttachPatternsHook, FilterTypesHook, HookRunner
from .core.index import build_index
from .core.loader import find_latest_schema, load_schema, save_snapshot
from .core.lookup import lookup_batch
from .core.requests import LOOKUP_KINDS
from .core.validator import QueryValidator

DEFAULT_OUTPUT_DIR = "./introspection"


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def read_text_argument(value: str) -> str:
    """Return the contents of the file named by value, or value itself."""
    try:
        is_file = Path(value).is_file()
    except OSError:
        # Inline text too long to be a file name
        is_file = False
    return Path(value).read_text(encoding="utf-8") if is_file else value


def read_json_argument(value: str) -> Any:
    """Parse a JSON option given inline or as a path to a file."""
    text = read_text_argument(value)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON ({e})") from e


def resolve_schema(schema: str | None, schema_dir: str, verbose: bool) -> dict[str, Any]:
    """Load an explicit schema file, or the newest snapshot in schema_dir."""
    path = Path(schema) if schema else find_latest_schema(schema_dir)
    if verbose:
        click.echo(f"Schema: {path}")
    return load_schema(path)


def schema_options(func):
    func = click.option(
        "--schema-dir",
        "-d",
        envvar="INTROSPECTION_OUTPUT_DIR",
        default=DEFAULT_OUTPUT_DIR,
        show_default=True,
        type=click.Path(file_okay=False),
        help="Directory holding schema-*.json snapshots (used when --schema is omitted).",
    )(func)
    func = click.option(
        "--schema",
        "-s",
        type=click.Path(exists=True, dir_okay=False),
        help="Path to a schema JSON file. Defaults to the newest snapshot.",
    )(func)
    return func


verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)


@click.group()
@click.version_option(package_name="gql-lens")
def main():
    """Compact GraphQL schema context for LLM query generation.

    Fetch, compress and query GraphQL schemas so only the relevant parts end
    up in a prompt.
    """
    pass


@main.command()
@click.option(
    "--url",
    "-u",
    envvar="GRAPHQL_API_URL",
    required=True,
    help="GraphQL endpoint URL.",
)
@click.option(
    "--headers",
    "-H",
    envvar="GRAPHQL_API_HEADERS",
    default=None,
    help='Extra request headers as a JSON object, e.g. \'{"Authorization": "Bearer ..."}\'.',
)
@click.option(
    "--output-dir",
    "-o",
    envvar="INTROSPECTION_OUTPUT_DIR",
    default=DEFAULT_OUTPUT_DIR,
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory to write the schema snapshot to.",
)
@click.option("--timeout", default=30.0, show_default=True, help="Request timeout in seconds.")
@verbose_option
def introspect(url: str, headers: str | None, output_dir: str, timeout: float, verbose: bool):
    """Fetch a schema by introspection and save it as a snapshot.

    Examples:

        gql-lens introspect --url https://rickandmortyapi.com/graphql

        GRAPHQL_API_URL=https://api.example.com/graphql gql-lens introspect -o ./schemas
    """
    configure_logging(verbose)
    try:
        auth = HeaderAuth.from_json(headers)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--headers") from e

    async def fetch() -> dict[str, Any]:
        async with GraphQLExecutor(url, auth=auth, timeout=timeout) as executor:
            return await executor.introspect()

    click.echo(f"Introspecting {url}...")
    try:
        document = asyncio.run(fetch())
    except (GqlLensError, httpx.HTTPError) as e:
        raise click.ClickException(f"Introspection failed: {e}") from e

    path = save_snapshot(document, output_dir)
    click.echo(f"Done! {len(document['__schema'].get('types') or [])} types saved to {path}")


@main.command()
@schema_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file. Defaults to a compressed-*.json snapshot next to the schema snapshots.",
)
@click.option(
    "--remove-descriptions/--keep-descriptions",
    default=False,
    help="Strip descriptions from types, fields and arguments.",
)
@click.option(
    "--preserve-essential-descriptions/--no-essential-descriptions",
    default=True,
    help="With --remove-descriptions, still keep OBJECT type descriptions.",
)
@click.option(
    "--remove-deprecated/--keep-deprecated",
    default=True,
    help="Drop deprecated types, fields and enum values.",
)
@click.option(
    "--strip-introspection-types",
    is_flag=True,
    help="Drop introspection meta-types (__Schema, __Type, ...).",
)
@click.option(
    "--patterns",
    "patterns_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file of reusable field patterns to attach under _patterns.",
)
@verbose_option
def compress(
    schema: str | None,
    schema_dir: str,
    output: str | None,
    remove_descriptions: bool,
    preserve_essential_descriptions: bool,
    remove_deprecated: bool,
    strip_introspection_types: bool,
    patterns_file: str | None,
    verbose: bool,
):
    """Compress an introspection schema for prompt use.

    Examples:

        gql-lens compress --schema ./schema.json --output ./compressed.json

        gql-lens compress --remove-descriptions --strip-introspection-types
    """
    configure_logging(verbose)
    options = CompressionOptions(
        remove_descriptions=remove_descriptions,
        preserve_essential_descriptions=preserve_essential_descriptions,
        remove_deprecated=remove_deprecated,
    )

    hooks = HookRunner()
    if strip_introspection_types:
        hooks.add_pre_hook(FilterTypesHook(exclude_prefix="__"))
    if patterns_file:
        hooks.add_post_hook(AttachPatternsHook(read_json_argument(patterns_file)))

    try:
        document = resolve_schema(schema, schema_dir, verbose)
        click.echo("Compressing schema...")
        compressed = SchemaCompressor(options, hooks).compress(document)
    except GqlLensError as e:
        raise click.ClickException(str(e)) from e

    original_size = len(json.dumps(document))
    compressed_size = len(json.dumps(compressed))
    if verbose:
        click.echo(f"  Types: {len(compressed['types'])}")
        click.echo(f"  Patterns: {len(compressed.get('_patterns', {}))}")

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(compressed, indent=2), encoding="utf-8")
    else:
        output_path = save_snapshot(compressed, schema_dir, prefix="compressed")

    reduction = 100 * (1 - compressed_size / original_size) if original_size else 0.0
    click.echo(f"Done! {original_size} -> {compressed_size} characters ({reduction:.1f}% smaller)")
    click.echo(f"Output: {output_path}")


@main.command()
@schema_options
@click.option(
    "--requests",
    "-r",
    "requests_arg",
    required=True,
    help=(
        "Lookup requests as JSON (inline or a file path): a list, or "
        f'{{"requests": [...]}}. Kinds: {", ".join(LOOKUP_KINDS)}.'
    ),
)
@click.option(
    "--context",
    "as_context",
    is_flag=True,
    help="Render the results as prompt context instead of JSON.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with a custom context.md.j2 template.",
)
@verbose_option
def lookup(
    schema: str | None,
    schema_dir: str,
    requests_arg: str,
    as_context: bool,
    template_dir: str | None,
    verbose: bool,
):
    """Run a batch of lookups against a full or compressed schema.

    Examples:

        gql-lens lookup -s compressed.json -r '[{"lookup": "type", "id": "Character"}]'

        gql-lens lookup -r requests.json --context
    """
    configure_logging(verbose)
    requests = read_json_argument(requests_arg)
    if isinstance(requests, dict) and "requests" in requests:
        requests = requests["requests"]
    if not isinstance(requests, list):
        raise click.BadParameter("expected a JSON list of lookup requests", param_hint="--requests")

    try:
        index = build_index(resolve_schema(schema, schema_dir, verbose))
    except GqlLensError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"Indexed {len(index)} types ({index.form.value} schema)")

    merged = lookup_batch(index, requests)
    if as_context:
        click.echo(render_context(merged, template_dir), nl=False)
    else:
        click.echo(merged.to_json(indent=2))

    summary = merged.metadata.summary
    if verbose or summary.failed:
        click.echo(f"{summary.successful}/{summary.total} lookups succeeded", err=True)


@main.command()
@schema_options
@click.option(
    "--query",
    "-q",
    required=True,
    help="GraphQL query text, or a path to a .graphql file.",
)
@verbose_option
@click.pass_context
def validate(ctx: click.Context, schema: str | None, schema_dir: str, query: str, verbose: bool):
    """Validate a query against a full introspection schema.

    Exits with status 1 when the query is invalid.

    Examples:

        gql-lens validate -s schema.json -q '{ characters { results { name } } }'
    """
    configure_logging(verbose)
    query_text = read_text_argument(query)

    try:
        validator = QueryValidator(resolve_schema(schema, schema_dir, verbose))
    except GqlLensError as e:
        raise click.ClickException(str(e)) from e

    report = validator.validate(query_text)
    if report.is_valid:
        click.echo("Query is valid.")
        return

    click.echo("Query is invalid:")
    for error in report.errors:
        click.echo(f"  - {error}")
    if report.field_suggestions:
        click.echo(f"Did you mean: {', '.join(report.field_suggestions)}")
    ctx.exit(1)


if __name__ == "__main__":
    main()
