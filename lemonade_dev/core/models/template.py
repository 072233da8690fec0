"""
Generated file model — returned by the generators.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file produced by a generator.

    Attributes:
        path:    Relative path from project root.
        content: Full file content, as written to disk.
    """

    path: str
    content: str
