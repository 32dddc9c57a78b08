"""Counts errors and panics found in node and client logs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TextIO

from orcawal import display

_ERROR_MARKER = " ERROR"
_PANIC_MARKER = "panic"


@dataclass
class LogsAnalyzer:
    """Error and panic tallies; a worse analysis compares greater."""

    node_errors: int = 0
    node_panic: bool = False
    client_errors: int = 0
    client_panic: bool = False

    def _worse_than(self, other: "LogsAnalyzer") -> bool:
        return (
            self.node_panic
            or self.client_panic
            or self.client_errors > other.client_errors
            or self.node_errors > other.node_errors
        )

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogsAnalyzer):
            return NotImplemented
        return self._worse_than(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogsAnalyzer):
            return NotImplemented
        return self._worse_than(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogsAnalyzer):
            return NotImplemented
        return not self._worse_than(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogsAnalyzer):
            return NotImplemented
        return not self._worse_than(other)

    def set_node_errors(self, log: str) -> None:
        """Take the node error count and panic flag from a log."""
        self.node_errors = log.count(_ERROR_MARKER)
        self.node_panic = _PANIC_MARKER in log

    def set_client_errors(self, log: str) -> None:
        """Keep the largest client error count seen and the panic flag of this log."""
        self.client_errors = max(self.client_errors, log.count(_ERROR_MARKER))
        self.client_panic = _PANIC_MARKER in log

    def print_summary(self, stream: Optional[TextIO] = None) -> None:
        """Print a short summary of what went wrong, if anything."""
        if self.node_panic:
            display.error("Node(s) panicked!", stream)
        elif self.client_panic:
            display.error("Client(s) panicked!", stream)
        elif self.node_errors or self.client_errors:
            display.newline(stream)
            display.warn(
                f"Logs contain errors (node: {self.node_errors}, "
                f"client: {self.client_errors})",
                stream,
            )