"""Terminal progress and status output for the orchestrator."""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

BOLD = "\x1b[1m"
GREEN = "\x1b[32m"
RED = "\x1b[31m"
RESET = "\x1b[0m"
SAVE_POSITION = "\x1b7"
RESTORE_POSITION = "\x1b8"
CLEAR_UNTIL_NEWLINE = "\x1b[K"


def _emit(stream: Optional[TextIO], *parts: str) -> None:
    out = stream if stream is not None else sys.stdout
    out.write("".join(parts))
    out.flush()


def _styled(text: str, *styles: str) -> str:
    return "".join(styles) + text + RESET


def header(message: Any, stream: Optional[TextIO] = None) -> None:
    """Print a section header in bold green."""
    _emit(stream, _styled(f"\n{message}\n", GREEN, BOLD))


def error(message: Any, stream: Optional[TextIO] = None) -> None:
    """Print an error in bold red."""
    _emit(stream, _styled(f"\n{message}\n", RED, BOLD))


def warn(message: Any, stream: Optional[TextIO] = None) -> None:
    """Print a warning in bold."""
    _emit(stream, _styled(f"\n{message}\n", BOLD))


def config(name: Any, value: Any, stream: Optional[TextIO] = None) -> None:
    """Print a configuration entry as a bold name followed by its value."""
    _emit(stream, _styled(f"{name}: ", BOLD), f"{value}\n")


def action(message: Any, stream: Optional[TextIO] = None) -> None:
    """Announce an action and remember the cursor for later status updates."""
    _emit(stream, f"{message} ... ", SAVE_POSITION)


def status(text: Any, stream: Optional[TextIO] = None) -> None:
    """Replace the status shown after the last action."""
    _emit(
        stream,
        RESTORE_POSITION,
        SAVE_POSITION,
        CLEAR_UNTIL_NEWLINE,
        f"[{text}]",
    )


def done(stream: Optional[TextIO] = None) -> None:
    """Mark the last action as finished."""
    _emit(
        stream,
        RESTORE_POSITION,
        CLEAR_UNTIL_NEWLINE,
        "[",
        _styled("Ok", GREEN),
        "]\n",
    )


def newline(stream: Optional[TextIO] = None) -> None:
    _emit(stream, "\n")