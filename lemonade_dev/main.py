"""
lemonade-dev — CLI entrypoint.

Usage:
    lemonade --help
    lemonade dev dev.py main.py
    lemonade manifest show --json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from lemonade_dev.core.observability.logging_config import level_from_flags, setup_logging

from lemonade_dev import __version__


@click.group()
@click.version_option(version=__version__, prog_name="lemonade")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """lemonade — route and island manifest generator."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    setup_logging(level_from_flags(debug=debug, verbose=verbose, quiet=quiet))


@cli.command()
@click.argument("base", type=click.Path(exists=True, path_type=Path))
@click.argument("entrypoint", required=False)
@click.option("--no-format", is_flag=True, help="Write the manifest without running the formatter.")
@click.option("--skip-version-check", is_flag=True, help="Don't check the installed Deno version.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def dev(
    ctx: click.Context,
    base: Path,
    entrypoint: str | None,
    no_format: bool,
    skip_version_check: bool,
    as_json: bool,
) -> None:
    """Refresh the manifest if needed, then load ENTRYPOINT.

    BASE is the dev script or the project directory; ENTRYPOINT is
    resolved relative to it.

    Examples:

        lemonade dev dev.py main.py

        lemonade dev . --no-format
    """
    from lemonade_dev.adapters.formatter import FormatterError, identity_formatter
    from lemonade_dev.core.config.loader import ConfigError
    from lemonade_dev.core.use_cases.dev import dev as run_dev

    try:
        result = run_dev(
            base,
            entrypoint,
            formatter=identity_formatter if no_format else None,
            check_version=not skip_version_check,
            report=not (as_json or ctx.obj.get("quiet")),
        )
    except (ConfigError, FormatterError) as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.regenerated and ctx.obj.get("verbose"):
        click.echo("Manifest unchanged.")


@cli.command("version-check")
@click.option("--minimum", default=None, help="Minimum Deno version (default: from lemonade.yml).")
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    help="Project directory.",
)
def version_check(minimum: str | None, directory: Path) -> None:
    """Check that the installed Deno is recent enough."""
    from lemonade_dev.core.config.loader import ConfigError, load_config
    from lemonade_dev.core.services.version_check import detect_deno_version, ensure_minimum_version

    if minimum is None:
        try:
            minimum = load_config(directory).min_deno_version
        except ConfigError as e:
            click.secho(f"❌ {e}", fg="red")
            sys.exit(1)

    detected = detect_deno_version()
    if detected is None:
        click.secho("❌ Deno not found on PATH", fg="red")
        sys.exit(1)

    version, exec_path = detected
    ensure_minimum_version(version, minimum, exec_path)
    click.secho(f"✓ Deno {version} (>= {minimum})", fg="green")


# ── Sub-command groups ──────────────────────────────────────────

from lemonade_dev.ui.cli.manifest import manifest

cli.add_command(manifest)


if __name__ == "__main__":
    cli()
