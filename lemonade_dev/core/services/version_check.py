"""
Version check — refuse to run the dev loop on an outdated Deno.

The generated module uses syntax (JSON import assertions) that older
Deno releases reject, so the dev loop checks the runtime first and
exits with upgrade instructions when it is too old.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
import sys

import click

logger = logging.getLogger(__name__)

MIN_DENO_VERSION = "1.25.0"

_VERSION_RE = re.compile(r"\d+(?:\.\d+)*")
_DENO_VERSION_RE = re.compile(r"^deno\s+(\d+\.\d+\.\d+\S*)", re.MULTILINE)


def parse_version(text: str) -> tuple[int, ...]:
    """Numeric dotted prefix of a version string.

    ``"1.25.0-rc.1"`` → ``(1, 25, 0)``.  Unparseable input gives ``()``.
    """
    m = _VERSION_RE.search(text.strip().lstrip("v"))
    if not m:
        return ()
    return tuple(int(part) for part in m.group(0).split("."))


def _pad(version: tuple[int, ...], width: int) -> tuple[int, ...]:
    return version + (0,) * (width - len(version))


def version_gte(current: str, minimum: str) -> bool:
    """Whether ``current`` is at least ``minimum``."""
    cur, low = parse_version(current), parse_version(minimum)
    width = max(len(cur), len(low))
    return _pad(cur, width) >= _pad(low, width)


def error(message: str) -> None:
    """Print an error for the user and exit the process with status 1."""
    click.secho(f"error: {message}", fg="red", bold=True, err=True)
    sys.exit(1)


def ensure_minimum_version(current: str, minimum: str = MIN_DENO_VERSION, exec_path: str = "") -> None:
    """Exit with upgrade instructions if ``current`` is older than ``minimum``.

    Args:
        current: Installed Deno version (e.g. ``"1.24.3"``).
        minimum: Oldest supported version.
        exec_path: Path of the Deno executable; a Homebrew install gets
            Homebrew upgrade instructions.
    """
    if version_gte(current, minimum):
        return

    message = f"Deno version {minimum} or higher is required. Please update Deno.\n\n"
    if "homebrew" in exec_path:
        message += "You seem to have installed Deno via homebrew. To update, run: `brew upgrade deno`\n"
    else:
        message += "To update, run: `deno upgrade`\n"

    error(message)


def detect_deno_version(executable: str = "deno") -> tuple[str, str] | None:
    """Return ``(version, exec_path)`` of the installed Deno, or None."""
    exec_path = shutil.which(executable)
    if exec_path is None:
        return None

    try:
        result = subprocess.run(
            [exec_path, "--version"],
            capture_output=True,
            text=True,
            timeout=15,
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.debug("Cannot query %s --version: %s", exec_path, e)
        return None

    if result.returncode != 0:
        return None

    m = _DENO_VERSION_RE.search(result.stdout)
    if not m:
        return None
    return m.group(1), exec_path


def ensure_min_deno_version(minimum: str = MIN_DENO_VERSION, executable: str = "deno") -> None:
    """Check the installed Deno against ``minimum``.

    When Deno cannot be found the check is skipped; the formatter step
    reports the missing binary if it is needed.
    """
    detected = detect_deno_version(executable)
    if detected is None:
        logger.warning("Could not determine the Deno version — skipping version check")
        return

    version, exec_path = detected
    logger.debug("Detected Deno %s at %s", version, exec_path)
    ensure_minimum_version(version, minimum, exec_path)
