"""Logging setup and per-run outcome counters.

``monitoring`` configures Pydantic Logfire once per CLI run; ``telemetry``
counts record outcomes and quarantined files and prints the end-of-run
summary.
"""

from . import monitoring, telemetry
from .monitoring import init_logfire

__all__ = ["init_logfire", "monitoring", "telemetry"]
