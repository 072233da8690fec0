"""
CLI commands for the route/island manifest.

Thin wrappers over ``lemonade_dev.core.services.discovery`` and the
manifest module generator.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

_DIR_ARG = click.argument(
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    required=False,
)


def _load_config(directory: Path):
    from lemonade_dev.core.config.loader import ConfigError, load_config

    try:
        return load_config(directory)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@click.group("manifest")
def manifest() -> None:
    """Manifest — discover routes and islands, generate lemonade.gen.ts."""


@manifest.command("show")
@_DIR_ARG
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def show(directory: Path, as_json: bool) -> None:
    """List the routes and islands found in DIRECTORY."""
    from lemonade_dev.core.services.discovery import collect
    from lemonade_dev.core.services.generators.manifest_module import island_key, route_key

    config = _load_config(directory)
    result = collect(directory, config)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(f"🧭 Routes ({len(result.routes)}):", fg="cyan", bold=True)
    for file in result.routes:
        click.echo(f"   {route_key(file)}  → {config.routes_dir}{file}")
    if not result.routes:
        click.echo("   (none)")

    click.echo()
    click.secho(f"🏝️  Islands ({len(result.islands)}):", fg="cyan", bold=True)
    for file in result.islands:
        click.echo(f"   {island_key(file)}")
    if not result.islands:
        click.echo("   (none)")


@manifest.command("generate")
@_DIR_ARG
@click.option("--no-format", is_flag=True, help="Write the manifest without running the formatter.")
def generate_cmd(directory: Path, no_format: bool) -> None:
    """Regenerate the manifest module, whether or not anything changed."""
    from lemonade_dev.adapters.formatter import FormatterError, identity_formatter
    from lemonade_dev.core.services.discovery import collect
    from lemonade_dev.core.services.generators.manifest_module import generate

    config = _load_config(directory)
    result = collect(directory, config)

    try:
        generated = generate(
            directory,
            result,
            formatter=identity_formatter if no_format else None,
            config=config,
        )
    except FormatterError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.echo(f"   📄 {generated.path}")


@manifest.command("check")
@_DIR_ARG
def check(directory: Path) -> None:
    """Exit non-zero if the manifest module is missing or out of date."""
    from lemonade_dev.core.services.discovery import collect
    from lemonade_dev.core.services.generators.manifest_module import find_stale_imports

    config = _load_config(directory)
    result = collect(directory, config)

    try:
        missing, extra = find_stale_imports(directory, result, config)
    except FileNotFoundError:
        click.secho(f"❌ {config.output_file} not found — run 'lemonade manifest generate'", fg="red")
        sys.exit(1)

    if not missing and not extra:
        click.secho(f"✓ {config.output_file} is up to date", fg="green")
        return

    click.secho(f"❌ {config.output_file} is out of date", fg="red")
    for spec in missing:
        click.echo(f"   + {spec}")
    for spec in extra:
        click.echo(f"   - {spec}")
    sys.exit(1)
