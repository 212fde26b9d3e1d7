"""CLI for formlink."""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import jsonschema
import typer
from rich.console import Console

from formlink import __version__
from formlink.config import DEFAULT_FORM_DATA_KEY, FORM_DATA_KEY_ENV
from formlink.errors import FormDataSerializationError
from formlink.errortree import merge_error_dicts
from formlink.payload import create_form_data, encode_form_data
from formlink.resolvers import JsonSchemaResolver, ResolverOptions
from formlink.validation import validate_form_data

app = typer.Typer(
    name="formlink",
    help="Validate form records and merge field error trees.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"formlink version {__version__}")
        raise typer.Exit()


def _load_json(path: Path) -> Any:
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)

    with open(path) as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            console.print(f"[red]Error:[/red] Invalid JSON in {path}: {e}")
            raise typer.Exit(1)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """formlink: bridge form submissions to schema validation."""
    pass


@app.command()
def validate(
    data_path: Annotated[
        Path,
        typer.Argument(help="Path to the JSON record to validate"),
    ],
    schema_path: Annotated[
        Path,
        typer.Option("--schema", "-s", help="Path to the JSON Schema file"),
    ],
    all_errors: Annotated[
        bool,
        typer.Option("--all", help="Collect every error per field, not just the first"),
    ] = False,
) -> None:
    """Validate a JSON record against a JSON Schema and print its error tree."""
    data = _load_json(data_path)
    schema = _load_json(schema_path)

    try:
        resolver = JsonSchemaResolver(schema)
    except jsonschema.SchemaError as e:
        console.print(f"[red]Error:[/red] Invalid schema {schema_path}: {e.message}")
        raise typer.Exit(1)

    options = ResolverOptions(criteria_mode="all" if all_errors else "firstError")
    result = asyncio.run(validate_form_data(data, resolver, options=options))

    if result.success:
        console.print(f"[green]Valid:[/green] {data_path}")
        return

    console.print(f"[red]Invalid:[/red] {data_path}")
    console.print_json(data=result.errors.to_dict())
    raise typer.Exit(1)


@app.command()
def merge(
    frontend_path: Annotated[
        Path,
        typer.Argument(help="Path to the frontend (client-side) error tree JSON"),
    ],
    backend_path: Annotated[
        Path,
        typer.Argument(help="Path to the backend (server-side) error tree JSON"),
    ],
    output_path: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Write the merged tree here instead of stdout"),
    ] = None,
) -> None:
    """Merge two error trees, backend messages taking precedence."""
    frontend = _load_json(frontend_path)
    backend = _load_json(backend_path)

    try:
        merged = merge_error_dicts(frontend, backend)
    except (TypeError, ValueError) as e:
        console.print(f"[red]Error:[/red] Cannot merge error trees: {e}")
        raise typer.Exit(1)

    if output_path is None:
        console.print_json(data=merged)
        return

    with open(output_path, "w") as f:
        json.dump(merged, f, indent=2)
    console.print(f"[green]Merged errors written to[/green] {output_path}")


@app.command()
def encode(
    data_path: Annotated[
        Path,
        typer.Argument(help="Path to the JSON record to encode"),
    ],
    key: Annotated[
        str,
        typer.Option(
            "--key",
            "-k",
            envvar=FORM_DATA_KEY_ENV,
            help="Form field to store the record under",
        ),
    ] = DEFAULT_FORM_DATA_KEY,
) -> None:
    """Print the url-encoded form body carrying a JSON record."""
    data = _load_json(data_path)

    try:
        form = create_form_data(data, key)
    except FormDataSerializationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    typer.echo(encode_form_data(form).decode("utf-8"))


if __name__ == "__main__":
    app()
