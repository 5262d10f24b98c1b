# SPDX-License-Identifier: MIT
"""Reading stored request records from JSON Lines files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

import logfire
from pydantic_core import from_json, to_json

from request_versions.models import to_wire
from request_versions.requests import RestRequest


@dataclass(frozen=True)
class RecordLine:
    """One non-blank line of a records file.

    ``raw`` holds the decoded value; when the line is not valid JSON ``raw`` is
    the original text, with undecodable bytes replaced, and ``error``
    describes the decoding failure.
    """

    line_no: int
    raw: Any
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def iter_records(path: Path) -> Iterator[RecordLine]:
    """Yield each non-blank line of ``path`` decoded as JSON.

    Malformed lines, including ones that are not valid UTF-8, are yielded with
    ``error`` set rather than aborting the whole file.
    """
    with logfire.span("records.iter", attributes={"path": str(path)}):
        with Path(path).open("rb") as handle:
            for line_no, chunk in enumerate(handle, start=1):
                chunk = chunk.strip()
                if not chunk:
                    continue
                try:
                    raw = from_json(chunk.decode("utf-8"))
                except ValueError as exc:
                    # UnicodeDecodeError is a ValueError too.
                    logfire.warning(
                        "Invalid JSON line", path=str(path), line=line_no
                    )
                    text = chunk.decode("utf-8", errors="replace")
                    yield RecordLine(line_no, text, str(exc))
                    continue
                yield RecordLine(line_no, raw)


def dump_record(record: RestRequest) -> str:
    """Return ``record`` as a compact JSON line using wire field names."""
    return to_json(to_wire(record)).decode("utf-8")


__all__ = ["RecordLine", "dump_record", "iter_records"]
