# SPDX-License-Identifier: MIT
"""Aggregate per-run parse outcomes for end-of-run reporting."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

import logfire

_outcome_counter = logfire.metric_counter(
    "rv_record_outcomes", unit="1", description="Records processed by outcome."
)


@dataclass
class SourceMetrics:
    """Outcome counts collected for a single input file."""

    outcomes: Counter[str] = field(default_factory=Counter)
    versions: Counter[int] = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return sum(self.outcomes.values())


_metrics: dict[str, SourceMetrics] = {}
_quarantine_paths: list[Path] = []


def record_outcome(source: str, outcome: str, version: int | None = None) -> None:
    """Record that a record from ``source`` finished with ``outcome``.

    ``version`` is the detected schema version, when one was found.
    """
    metrics = _metrics.setdefault(source, SourceMetrics())
    metrics.outcomes[outcome] += 1
    if version is not None:
        metrics.versions[version] += 1
    _outcome_counter.add(1, {"outcome": outcome})


def record_quarantine(path: Path) -> None:
    """Track creation of a quarantine ``path``."""
    _quarantine_paths.append(path)


def has_quarantines() -> bool:
    """Return ``True`` when any quarantine files were created."""
    return bool(_quarantine_paths)


def outcome_count(source: str, outcome: str) -> int:
    """Return how many records from ``source`` finished with ``outcome``."""
    metrics = _metrics.get(source)
    return metrics.outcomes[outcome] if metrics else 0


def reset() -> None:
    """Clear all recorded metrics and quarantine paths."""
    _metrics.clear()
    _quarantine_paths.clear()


def print_summary() -> None:
    """Write a summary of collected metrics to ``stdout``."""
    if not _metrics:
        return
    for source, data in _metrics.items():
        outcomes = " ".join(f"{k}={v}" for k, v in sorted(data.outcomes.items()))
        versions = ",".join(f"v{k}:{v}" for k, v in sorted(data.versions.items()))
        print(f"{source}: total={data.total} {outcomes} versions=[{versions}]")
    if _quarantine_paths:
        print(f"Quarantined: {len(_quarantine_paths)} record(s)")


__all__ = [
    "SourceMetrics",
    "has_quarantines",
    "outcome_count",
    "print_summary",
    "record_outcome",
    "record_quarantine",
    "reset",
]
