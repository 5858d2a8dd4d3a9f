"""
Output sink: console and file.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from minicurl.errors import OutputFileError
from minicurl.render import LineKind, OutputLine, Rendering

logger = logging.getLogger(__name__)


class ConsoleSink:
    """Writes narration and payload to stdout, errors to stderr."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console(highlight=False, emoji=False)
        self.err_console = err_console or Console(stderr=True, highlight=False, emoji=False)

    def narrate(self, text: str) -> None:
        self.console.print(f"[cyan]{escape(text)}[/cyan]", soft_wrap=True)

    def payload(self, text: str) -> None:
        # Bypasses rich rendering so body text is written unchanged
        self.console.file.write(f"{text}\n")
        self.console.file.flush()

    def error(self, text: str) -> None:
        self.err_console.print(f"[red]Error:[/red] {escape(text)}", soft_wrap=True)

    def usage(self, text: str) -> None:
        self.console.out(text.rstrip("\n"), highlight=False)

    def line(self, line: OutputLine) -> None:
        if line.kind is LineKind.NARRATION:
            self.narrate(line.text)
        elif line.kind is LineKind.ERROR:
            self.error(line.text)
        else:
            self.payload(line.text)

    def emit(self, rendering: Rendering) -> None:
        """Present a rendering, writing the body file first if there is one."""
        for line in rendering.lines:
            self.line(line)

        if rendering.file_path is not None:
            write_body(rendering.file_path, rendering.file_bytes or b"")
            for line in rendering.after_write:
                self.line(line)


def write_body(path: Path, data: bytes) -> None:
    """Create or truncate path and write data to it.

    Raises:
        OutputFileError: the file could not be opened or written
    """
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise OutputFileError(str(path), e.strerror or str(e)) from e
    logger.debug(f"Wrote {len(data)} bytes to {path}")
