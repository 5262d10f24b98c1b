"""Input and output helpers for record files and configuration.

Exports:
    iter_records: Iterate over the lines of a JSONL records file.
    dump_record: Serialise a current record as one JSON line.
    atomic_write: Write files atomically.
    load_app_config: Read and validate ``config/app.yaml``.
    QuarantineWriter: Persist rejected records and maintain a manifest.
"""

from __future__ import annotations

from .loader import load_app_config
from .persistence import atomic_write
from .quarantine import QuarantineWriter
from .records import RecordLine, dump_record, iter_records

__all__ = [
    "QuarantineWriter",
    "RecordLine",
    "atomic_write",
    "dump_record",
    "iter_records",
    "load_app_config",
]
