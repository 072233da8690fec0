"""
Domain models — Pydantic types for the manifest generator.

All models are re-exported here for convenient access:

    from lemonade_dev.core.models import Manifest, GeneratedFile
"""

from lemonade_dev.core.models.manifest import Manifest, SnapshotError, has_changed
from lemonade_dev.core.models.template import GeneratedFile

__all__ = [
    # manifest.py
    "Manifest",
    "SnapshotError",
    "has_changed",
    # template.py
    "GeneratedFile",
]
