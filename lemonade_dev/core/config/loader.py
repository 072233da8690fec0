"""
Configuration loader — reads the optional lemonade.yml into DevConfig.

Every setting has a default matching the framework's conventions, so a
project without a lemonade.yml gets the standard layout: routes under
``routes/``, output in ``lemonade.gen.ts``, formatting by ``deno fmt``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

# Default config filename
DEV_CONFIG_FILE = "lemonade.yml"


class ConfigError(Exception):
    """Raised when lemonade.yml is unreadable or invalid."""


class DevConfig(BaseModel):
    """Settings for discovery and manifest generation.

    Attributes:
        routes_dir:       Routes root, relative to the project directory.
        output_file:      Generated module, relative to the project directory.
        config_file:      JSON config imported by the generated module.
        formatter:        Command that formats source on stdin → stdout.
        exclude_dirs:     Directory names skipped by the island walk.
        min_deno_version: Oldest Deno release the dev loop accepts.
    """

    routes_dir: str = "routes"
    output_file: str = "lemonade.gen.ts"
    config_file: str = "deno.json"
    formatter: list[str] = Field(default_factory=lambda: ["deno", "fmt", "-"])
    exclude_dirs: list[str] = Field(default_factory=list)
    min_deno_version: str = "1.25.0"


def load_config(directory: Path) -> DevConfig:
    """Load ``lemonade.yml`` from a project directory.

    Args:
        directory: Project directory.

    Returns:
        Validated DevConfig. Defaults when the file does not exist.

    Raises:
        ConfigError: If the file exists but cannot be read or validated.
    """
    path = directory / DEV_CONFIG_FILE
    if not path.is_file():
        logger.debug("No %s in %s — using defaults", DEV_CONFIG_FILE, directory)
        return DevConfig()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return DevConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Settings may sit at the top level or under a "dev" key
    if isinstance(data.get("dev"), dict):
        data = data["dev"]

    try:
        config = DevConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded dev config from %s", path)
    return config
