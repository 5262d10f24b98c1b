# SPDX-License-Identifier: MIT
"""Atomic output writes for migrated record files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

import logfire


def atomic_write(path: Path, lines: Iterable[str]) -> int:
    """Write ``lines`` to ``path`` atomically and return how many were written.

    Lines are written to a ``.tmp`` sibling which is flushed and synced before
    :func:`os.replace` moves it over ``path``. A failure part way through
    leaves any existing ``path`` untouched.
    """
    with logfire.span("fs.atomic_write", attributes={"path": str(path)}):
        tmp_path = Path(f"{path}.tmp")
        tmp_path.parent.mkdir(parents=True, exist_ok=True)
        count = 0
        try:
            with open(tmp_path, "w", encoding="utf-8") as handle:
                for line in lines:
                    handle.write(f"{line}\n")
                    count += 1
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logfire.debug("Atomic write complete", path=str(path), lines=count)
        return count


__all__ = ["atomic_write"]
