"""
Dev use case — the development loop run once per process start.

Ties together discovery, the snapshot channel, the manifest generator
and the entrypoint handoff:

    collect → compare with snapshot → (generate) → store snapshot
            → mark dev mode → load entrypoint
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

from lemonade_dev.adapters.formatter import Formatter
from lemonade_dev.core.config.loader import DevConfig, load_config
from lemonade_dev.core.models.manifest import Manifest, has_changed
from lemonade_dev.core.models.template import GeneratedFile
from lemonade_dev.core.persistence.snapshot import SnapshotChannel
from lemonade_dev.core.services.discovery import collect
from lemonade_dev.core.services.generators.manifest_module import generate
from lemonade_dev.core.services.version_check import ensure_min_deno_version

logger = logging.getLogger(__name__)

ENTRYPOINT_MODULE_NAME = "lemonade_entrypoint"


@dataclass
class DevResult:
    """Outcome of one dev loop run."""

    directory: Path
    manifest: Manifest
    previous: Manifest = field(default_factory=Manifest.empty)
    regenerated: bool = False
    generated: GeneratedFile | None = None
    entrypoint: Path | None = None
    module: ModuleType | None = None

    def to_dict(self) -> dict:
        return {
            "directory": str(self.directory),
            "manifest": self.manifest.to_dict(),
            "regenerated": self.regenerated,
            "output": self.generated.path if self.generated else None,
            "entrypoint": str(self.entrypoint) if self.entrypoint else None,
        }


def resolve_directory(base: Path) -> Path:
    """Project directory for ``base``: its parent when it is a file."""
    base = Path(base).resolve()
    return base if base.is_dir() else base.parent


def resolve_entrypoint(directory: Path, entrypoint: str | Path) -> Path:
    """Absolute location of the entrypoint, relative to the project directory."""
    path = Path(entrypoint)
    if not path.is_absolute():
        path = directory / path
    return path.resolve()


def load_entrypoint(path: Path) -> ModuleType:
    """Import the module at ``path`` and return it.

    Errors raised while executing the module propagate unchanged.
    """
    spec = importlib.util.spec_from_file_location(ENTRYPOINT_MODULE_NAME, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load entrypoint {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[ENTRYPOINT_MODULE_NAME] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(ENTRYPOINT_MODULE_NAME, None)
        raise
    return module


def dev(
    base: str | Path,
    entrypoint: str | Path | None = None,
    *,
    channel: SnapshotChannel | None = None,
    formatter: Formatter | None = None,
    config: DevConfig | None = None,
    check_version: bool = True,
    report: bool = True,
) -> DevResult:
    """Run the dev loop for the project containing ``base``.

    Args:
        base: The dev script (its directory is the project) or the
            project directory itself.
        entrypoint: Module to load once the manifest is up to date.
            None skips the handoff.
        channel: Where the previous manifest is kept. Defaults to the
            process environment.
        formatter: Formatter for the generated module. Defaults to the
            configured command.
        config: Dev settings. Defaults to the project's lemonade.yml.
        check_version: Whether to verify the Deno version first.
        report: Print the "manifest has been generated" line when the
            manifest module is rewritten.

    Raises:
        ConfigError: If lemonade.yml is invalid.
        FormatterError: If the formatter fails during regeneration.
        OSError: On filesystem failures other than missing roots.
    """
    directory = resolve_directory(Path(base))
    if config is None:
        config = load_config(directory)

    if check_version:
        ensure_min_deno_version(config.min_deno_version)

    channel = channel or SnapshotChannel()

    previous = channel.load_previous()
    current = collect(directory, config)

    result = DevResult(directory=directory, manifest=current, previous=previous)

    if has_changed(previous, current):
        logger.info("Manifest changed — regenerating %s", config.output_file)
        result.generated = generate(
            directory, current, formatter=formatter, config=config, report=report,
        )
        result.regenerated = True
    else:
        logger.info("Manifest unchanged — keeping %s", config.output_file)

    # Not reached when generation failed; the next run regenerates
    channel.store(current)

    channel.mark_dev_mode()

    if entrypoint is not None:
        result.entrypoint = resolve_entrypoint(directory, entrypoint)
        logger.debug("Loading entrypoint %s", result.entrypoint)
        result.module = load_entrypoint(result.entrypoint)

    return result
