# SPDX-License-Identifier: MIT
"""Keep records that could not be migrated so they can be inspected later.

Each input source gets its own directory holding one file per rejected record
and a ``manifest.json`` summarising failures by kind.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import logfire
from pydantic_core import from_json, to_json

from request_versions.core.versioning import ErrorKind
from request_versions.observability import telemetry

MANIFEST = "manifest.json"
JSON_PARSE_ERROR = "json_parse_error"
ALLOWED_KINDS = {JSON_PARSE_ERROR} | {kind.value for kind in ErrorKind}
MAX_EXAMPLES = 3


def _encode(payload: Any) -> str:
    if isinstance(payload, str):
        # Undecodable lines are kept exactly as read.
        return payload
    return to_json(payload, indent=2, fallback=str).decode("utf-8")


class QuarantineWriter:
    """Store rejected payloads as ``<base_dir>/<source>/<kind>_<n>.json``."""

    def __init__(self, base_dir: Path | str = Path("quarantine")) -> None:
        self.base_dir = Path(base_dir)

    def write(self, source: str, kind: str, payload: Any, reason: str = "") -> Path:
        """Store ``payload`` and record it in the manifest of ``source``.

        Args:
            source: Input the payload came from, usually the file stem.
            kind: Failure category, one of :data:`ALLOWED_KINDS`.
            payload: Rejected value. Strings are stored verbatim.
            reason: Failure message copied into the manifest examples.

        Returns:
            Path of the stored payload.

        Raises:
            ValueError: If ``kind`` is not an allowed category.
        """
        if kind not in ALLOWED_KINDS:
            raise ValueError(f"Unsupported quarantine kind: {kind}")

        target_dir = self.base_dir / source
        target_dir.mkdir(parents=True, exist_ok=True)
        seq = len(list(target_dir.glob(f"{kind}_*.json"))) + 1
        target = target_dir / f"{kind}_{seq}.json"
        target.write_text(_encode(payload), encoding="utf-8")
        self._note(target_dir / MANIFEST, kind, target.name, reason)

        logfire.warning(
            "Quarantined {kind} record from {source}",
            kind=kind,
            source=source,
            path=str(target),
        )
        telemetry.record_quarantine(target)
        return target

    @staticmethod
    def _note(manifest_path: Path, kind: str, filename: str, reason: str) -> None:
        """Bump the ``kind`` counter and keep the first few examples."""
        summary: dict[str, Any] = (
            from_json(manifest_path.read_bytes()) if manifest_path.is_file() else {}
        )
        bucket = summary.setdefault(kind, {"count": 0, "examples": []})
        bucket["count"] += 1
        if len(bucket["examples"]) < MAX_EXAMPLES:
            bucket["examples"].append({"file": filename, "reason": reason})
        manifest_path.write_bytes(to_json(summary, indent=2))


__all__ = ["ALLOWED_KINDS", "JSON_PARSE_ERROR", "MANIFEST", "QuarantineWriter"]
