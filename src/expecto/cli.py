from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="expecto", help="Fluent assertion report tooling")
schema_app = typer.Typer(name="schema", help="Generate config schema tooling")
config_app = typer.Typer(name="config", help="Inspect report configuration")
app.add_typer(schema_app, name="schema")
app.add_typer(config_app, name="config")

EXAMPLE_CONFIG = """\
# Report settings for expecto. Select this file with:
#   export EXPECTO_CONFIG=expecto.yaml
indent: 2
markers:
  subject: "▼"
  passed: "✓"
  failed: "✗"
# Truncate long subject values in headers
# max_value_length: 80
"""


@app.command()
def init(
    dir: str = typer.Option(
        ".", "--dir", help="Directory to write expecto.yaml into"
    ),
):
    """Write an example report config."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "expecto.yaml"
    if example.exists():
        typer.echo(f"expecto.yaml already exists in {dir}, skipping.")
        return

    example.write_text(EXAMPLE_CONFIG, encoding="utf-8")
    typer.echo(f"Initialized report config in {dir}:")
    typer.echo("  expecto.yaml     - example report config")
    typer.echo("Set EXPECTO_CONFIG to its path to use it.")


@schema_app.command("generate")
def schema_generate(
    dir: str = typer.Option(
        ".", "--dir", help="Project directory for default schema/doc outputs"
    ),
    out: str | None = typer.Option(
        None,
        help="Output path for JSON Schema (defaults to <dir>/schemas/expecto.schema.json)",
    ),
    doc: str | None = typer.Option(
        None, help="Output path for schema docs (defaults to <dir>/docs/config.md)"
    ),
):
    """Generate JSON Schema and docs for the report config format."""
    from expecto.schema import write_json_schema, write_schema_doc

    project_dir = Path(dir)
    out_path = (
        Path(out)
        if out is not None
        else project_dir / "schemas" / "expecto.schema.json"
    )
    doc_path = Path(doc) if doc is not None else project_dir / "docs" / "config.md"
    write_json_schema(out_path)
    write_schema_doc(doc_path)
    typer.echo(f"Wrote schema: {out_path}")
    typer.echo(f"Wrote docs: {doc_path}")


@config_app.command("show")
def config_show(
    path: str | None = typer.Argument(
        None, help="Config file to load (defaults to $EXPECTO_CONFIG or built-ins)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
):
    """Print the effective report config as YAML."""
    import yaml
    from pydantic import ValidationError

    from expecto.config import ReportConfig, default_config, load_config
    from expecto.verbose import setup_logger

    if verbose:
        setup_logger(verbose=True, logger_name="expecto")

    try:
        if path is not None:
            config_path = Path(path)
            if not config_path.exists():
                typer.echo(f"Error: config file not found: {path}", err=True)
                raise typer.Exit(1)
            config = load_config(config_path)
        else:
            default_config.cache_clear()
            config = default_config()
    except (ValidationError, ValueError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        yaml.safe_dump(
            config.model_dump(), sort_keys=False, allow_unicode=True
        ).rstrip()
    )
    if config == ReportConfig():
        typer.echo("# (built-in defaults)")
