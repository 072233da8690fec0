"""
Manifest — the sorted pair of route and island identifiers.

A manifest is built fresh by discovery on every run, compared once
against the snapshot left by the previous run, and serialized back
into the snapshot channel for the next one.

Identifiers are root-relative, URL-style paths (``/blog/+page.tsx``).
Both sequences are sorted; that order drives import order and binding
names in the generated module.
"""

from __future__ import annotations

import json
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class SnapshotError(Exception):
    """Raised when a manifest snapshot string cannot be decoded."""


class Manifest(BaseModel):
    """Immutable manifest value."""

    model_config = ConfigDict(frozen=True)

    routes: tuple[str, ...] = Field(default_factory=tuple)
    islands: tuple[str, ...] = Field(default_factory=tuple)

    @classmethod
    def empty(cls) -> Manifest:
        """The manifest assumed when no snapshot exists."""
        return cls()

    def to_snapshot(self) -> str:
        """Serialize to the compact JSON form stored between runs."""
        return json.dumps(
            {"routes": list(self.routes), "islands": list(self.islands)},
            ensure_ascii=False,
            separators=(",", ":"),
        )

    @classmethod
    def from_snapshot(cls, raw: str) -> Manifest:
        """Decode a snapshot produced by ``to_snapshot()``.

        Raises:
            SnapshotError: If the string is not JSON or has the wrong shape.
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise SnapshotError(
                f"Expected a JSON object in snapshot, got {type(data).__name__}"
            )

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SnapshotError(f"Invalid snapshot: {e}") from e

    def to_dict(self) -> dict:
        return {"routes": list(self.routes), "islands": list(self.islands)}


def _sequences_equal(a: Sequence[str], b: Sequence[str]) -> bool:
    if len(a) != len(b):
        return False
    for left, right in zip(a, b):
        if left != right:
            return False
    return True


def has_changed(previous: Manifest, current: Manifest) -> bool:
    """Return True unless both manifests list the same files in the same order.

    Order matters: a reordering changes import order and binding names
    in the generated module, so it counts as a change.
    """
    return not (
        _sequences_equal(previous.routes, current.routes)
        and _sequences_equal(previous.islands, current.islands)
    )
