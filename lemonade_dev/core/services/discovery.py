"""
Discovery service — find route and island files in a project.

Routes live under the routes root (``<project>/routes`` by default) and
are named ``+<kind>.<ext>``.  Islands can live anywhere in the project
and are recognised by their ``.island.<ext>`` suffix alone.

Both lists are returned sorted.  That order is what makes the generated
module deterministic, so nothing downstream re-sorts.

Pure logic — reads the filesystem, writes nothing.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable, Iterator
from urllib.parse import quote

from lemonade_dev.core.config.loader import DevConfig
from lemonade_dev.core.models.manifest import Manifest

logger = logging.getLogger(__name__)

ROUTE_KINDS = ("page", "middleware", "app", "layout", "404", "500")
SOURCE_EXTENSIONS = ("tsx", "jsx", "ts", "js")

ROUTE_PATTERN = re.compile(
    r"^\+(" + "|".join(ROUTE_KINDS) + r")\.(" + "|".join(SOURCE_EXTENSIONS) + r")$"
)
ISLAND_PATTERN = re.compile(r"\.island\.(" + "|".join(SOURCE_EXTENSIONS) + r")$")

# Left unescaped in identifiers, as in the path of a file URL
_URL_PATH_SAFE = "/!$&'()*+,:;=@[]^|"


def _walk_files(root: Path, exclude_dirs: Iterable[str] = ()) -> Iterator[Path]:
    """Yield every regular file below ``root``.

    Directories and symlinks are never yielded.  A missing ``root`` yields
    nothing; any other OS error raised while listing a directory,
    including a subdirectory that vanished mid-walk, propagates.
    """
    top = os.fspath(root)
    skip = set(exclude_dirs)

    def _onerror(err: OSError) -> None:
        if isinstance(err, FileNotFoundError) and err.filename == top:
            logger.debug("Nothing to walk at %s", top)
            return
        raise err

    for dirpath, dirnames, filenames in os.walk(top, onerror=_onerror):
        if skip:
            dirnames[:] = [d for d in dirnames if d not in skip]
        for name in filenames:
            path = Path(dirpath) / name
            if path.is_symlink() or not path.is_file():
                continue
            yield path


def to_identifier(path: Path, root: Path) -> str:
    """URL-style identifier of ``path`` relative to ``root``.

    Always starts with ``/``.  Characters a file URL path would escape
    (space, quotes, backslash, ``#``, ``?``, non-ASCII, ...) are percent-encoded.
    """
    rel = path.relative_to(root).as_posix()
    return "/" + quote(rel, safe=_URL_PATH_SAFE)


def collect_routes(directory: Path, config: DevConfig | None = None) -> list[str]:
    """Discover route files under the routes root.

    Returns:
        Sorted identifiers relative to the routes root, e.g. ``/blog/+page.tsx``.
        An empty list when the routes root does not exist.
    """
    config = config or DevConfig()
    routes_root = Path(os.path.abspath(Path(directory) / config.routes_dir))

    routes = [
        to_identifier(path, routes_root)
        for path in _walk_files(routes_root)
        if ROUTE_PATTERN.match(path.name)
    ]

    routes.sort()
    return routes


def collect_islands(directory: Path, config: DevConfig | None = None) -> list[str]:
    """Discover island files anywhere under the project directory.

    Returns:
        Sorted identifiers relative to the project directory, e.g.
        ``/components/Counter.island.tsx``.  An empty list when the
        project directory does not exist.
    """
    config = config or DevConfig()
    root = Path(os.path.abspath(directory))

    islands = [
        to_identifier(path, root)
        for path in _walk_files(root, config.exclude_dirs)
        if ISLAND_PATTERN.search(path.name)
    ]

    islands.sort()
    return islands


def collect(directory: Path, config: DevConfig | None = None) -> Manifest:
    """Build the manifest for a project directory.

    Raises:
        OSError: For any filesystem failure other than a missing root.
    """
    directory = Path(directory)
    routes = collect_routes(directory, config)
    islands = collect_islands(directory, config)
    logger.debug(
        "Collected %d routes and %d islands in %s", len(routes), len(islands), directory,
    )
    return Manifest(routes=tuple(routes), islands=tuple(islands))
