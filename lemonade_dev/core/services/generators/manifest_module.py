"""
Manifest module generator — render lemonade.gen.ts from a Manifest.

The generated module imports every route and island as a namespace and
exports one object mapping their keys to those namespaces:

    routes:  "/blog/+page"                    → $1
    islands: "./components/Counter.island.tsx" → $$0

Import order and binding names follow manifest order, so a given
manifest always renders to the same text.  The text is then passed
through the formatter and written over the previous output file.
"""

from __future__ import annotations

import errno
import json
import logging
import os
import posixpath
import re
import stat
from pathlib import Path

import click

from lemonade_dev.adapters.formatter import Formatter, FormatterAdapter
from lemonade_dev.core.config.loader import DevConfig
from lemonade_dev.core.models.manifest import Manifest
from lemonade_dev.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)

HEADER = """\
// DO NOT EDIT. This file is generated by lemonade.
// This file SHOULD be checked into source version control.
// This file is automatically updated during development when running `dev.ts`.
"""

# Binding prefixes per category; islands use a prefix routes can never produce
_BINDING_PREFIXES = {
    "routes": "$",
    "islands": "$$",
}


def binding_name(category: str, index: int) -> str:
    """Identifier the generated module binds entry ``index`` of ``category`` to.

    ``("routes", 3)`` → ``$3``, ``("islands", 0)`` → ``$$0``.
    """
    try:
        prefix = _BINDING_PREFIXES[category]
    except KeyError:
        raise ValueError(
            f"Unknown manifest category '{category}'. "
            f"Valid: {', '.join(sorted(_BINDING_PREFIXES))}"
        ) from None
    if index < 0:
        raise ValueError(f"Binding index must be non-negative, got {index}")
    return f"{prefix}{index}"


def route_key(identifier: str) -> str:
    """Routes table key: the identifier without its file extension."""
    ext = posixpath.splitext(identifier)[1]
    return identifier[: len(identifier) - len(ext)]


def island_key(identifier: str) -> str:
    """Islands table key: the identifier as a relative import specifier."""
    return f".{identifier}"


def _js_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def render_manifest_module(manifest: Manifest, config: DevConfig | None = None) -> str:
    """Render the unformatted source of the generated module."""
    config = config or DevConfig()
    routes_dir = config.routes_dir.strip("/")

    route_imports = "\n".join(
        f'import * as {binding_name("routes", i)} from "./{routes_dir}{file}";'
        for i, file in enumerate(manifest.routes)
    )
    island_imports = "\n".join(
        f'import * as {binding_name("islands", i)} from ".{file}";'
        for i, file in enumerate(manifest.islands)
    )
    route_entries = "\n    ".join(
        f"{_js_string(route_key(file))}: {binding_name('routes', i)},"
        for i, file in enumerate(manifest.routes)
    )
    island_entries = "\n    ".join(
        f"{_js_string(island_key(file))}: {binding_name('islands', i)},"
        for i, file in enumerate(manifest.islands)
    )

    return (
        f"{HEADER}\n"
        f'import config from "./{config.config_file}" assert {{ type: "json" }};\n'
        f"{route_imports}\n"
        f"{island_imports}\n"
        "\n"
        "const manifest = {\n"
        "  routes: {\n"
        f"    {route_entries}\n"
        "  },\n"
        "  islands: {\n"
        f"    {island_entries}\n"
        "  },\n"
        "  baseUrl: import.meta.url,\n"
        "  config,\n"
        "};\n"
        "\n"
        "export default manifest;\n"
    )


def _write_output(path: Path, content: str) -> None:
    """Replace the contents of ``path``, or leave it untouched on failure.

    An existing output is written through: a symlink is followed to its
    target, the file mode is kept, and a file the process may not write
    to is a ``PermissionError`` even when its directory is writable.
    """
    path = Path(os.path.realpath(path))
    mode = None
    if path.exists():
        if not os.access(path, os.W_OK):
            raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), str(path))
        mode = stat.S_IMODE(path.stat().st_mode)

    tmp = path.with_name(f".{path.name}.tmp")
    try:
        with open(tmp, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        if mode is not None:
            os.chmod(tmp, mode)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def generate(
    directory: Path,
    manifest: Manifest,
    formatter: Formatter | None = None,
    config: DevConfig | None = None,
    report: bool = True,
) -> GeneratedFile:
    """Render, format and write the manifest module for a project.

    Args:
        directory: Project directory; the output file is written inside it.
        manifest: The discovered manifest.
        formatter: ``text -> text`` callable. Defaults to the configured
            external formatter command.
        config: Dev settings (output file name, formatter command, ...).
        report: Print the "manifest has been generated" line to stdout.

    Returns:
        The GeneratedFile that was written.

    Raises:
        FormatterError: If the formatter cannot run or fails.
        OSError: If the output file cannot be written.
    """
    config = config or DevConfig()
    directory = Path(directory)
    if formatter is None:
        formatter = FormatterAdapter(config.formatter, cwd=str(directory))

    source = render_manifest_module(manifest, config)
    formatted = formatter(source)

    _write_output(directory / config.output_file, formatted)
    logger.debug("Wrote %s", directory / config.output_file)

    if report:
        click.secho(
            f"The manifest has been generated for {len(manifest.routes)} routes "
            f"and {len(manifest.islands)} islands.",
            fg="blue",
            bold=True,
        )
    return GeneratedFile(path=config.output_file, content=formatted)


# ── Staleness check ─────────────────────────────────────────────

_IMPORT_RE = re.compile(r'^import \* as \$\$?\d+ from "([^"]+)";?\s*$', re.MULTILINE)


def expected_imports(manifest: Manifest, config: DevConfig | None = None) -> list[str]:
    """Import specifiers the generated module should contain, in order."""
    config = config or DevConfig()
    routes_dir = config.routes_dir.strip("/")
    return [f"./{routes_dir}{file}" for file in manifest.routes] + [
        f".{file}" for file in manifest.islands
    ]


def find_stale_imports(
    directory: Path,
    manifest: Manifest,
    config: DevConfig | None = None,
) -> tuple[list[str], list[str]]:
    """Compare the generated module on disk with a manifest.

    Returns:
        ``(missing, extra)`` — specifiers the file lacks, and specifiers it
        imports that the manifest no longer lists.  Both empty when the
        file is up to date.

    Raises:
        FileNotFoundError: If the generated module does not exist.
    """
    config = config or DevConfig()
    text = (Path(directory) / config.output_file).read_text(encoding="utf-8")
    found = _IMPORT_RE.findall(text)
    expected = expected_imports(manifest, config)

    missing = [spec for spec in expected if spec not in found]
    extra = [spec for spec in found if spec not in expected]
    return missing, extra
