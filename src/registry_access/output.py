"""Output sinks for listing results."""

from __future__ import annotations

import json
import sys
from typing import Any, Optional, Protocol, TextIO, runtime_checkable


@runtime_checkable
class OutputSink(Protocol):
    """Accepts structured result data for display."""

    def __call__(self, data: Any) -> None: ...


class JsonOutput:
    """Write results as indented JSON, one document per call."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def __call__(self, data: Any) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(json.dumps(data, indent=2))
        stream.write("\n")
