"""
Response rendering.

Decides how a response is shown and produces the exact lines to print
(and the bytes to save, for -o). Nothing here performs I/O, so rendering
the same response twice gives the same result.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from minicurl.jsonutil import loads_strict
from minicurl.models import HTTPResponse, RequestConfig

BINARY_PLACEHOLDER = "<binary>"

JSON_ANNOUNCEMENT = "Response body (JSON with sorted keys):"
TEXT_ANNOUNCEMENT = "Response body:"


class OutputMode(Enum):
    """Mutually exclusive ways of presenting a response."""
    HEADERS = "headers"
    STATUS_ERROR = "status_error"
    FILE = "file"
    JSON = "json"
    TEXT = "text"


class LineKind(Enum):
    NARRATION = "narration"  # suppressed by -s
    PAYLOAD = "payload"
    ERROR = "error"


@dataclass(frozen=True)
class OutputLine:
    text: str
    kind: LineKind = LineKind.PAYLOAD


@dataclass(frozen=True)
class Rendering:
    """Everything the output sink needs to present one response."""
    mode: OutputMode
    lines: tuple[OutputLine, ...] = ()
    file_path: Path | None = None
    file_bytes: bytes | None = None
    # Lines printed only after the file has been written
    after_write: tuple[OutputLine, ...] = ()

    @property
    def failed(self) -> bool:
        return self.mode is OutputMode.STATUS_ERROR


def header_value_text(value: bytes) -> str:
    """Header value as text, or the placeholder if it is not printable ASCII."""
    if all(b == 0x09 or 0x20 <= b <= 0x7E for b in value):
        return value.decode("ascii")
    return BINARY_PLACEHOLDER


def render_headers(headers: tuple[tuple[str, bytes], ...]) -> list[str]:
    return [f"{name}: {header_value_text(value)}" for name, value in headers]


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def render_json(data: Any) -> str:
    """Render parsed JSON for display.

    A top-level object is printed one member per line with keys in
    lexicographic order; member values are printed compactly as received.
    Any other top-level value is pretty-printed with two-space indent.
    """
    if not isinstance(data, dict):
        return json.dumps(data, indent=2, ensure_ascii=False)

    keys = sorted(data)
    lines = ["{"]
    for i, key in enumerate(keys):
        comma = "," if i < len(keys) - 1 else ""
        lines.append(f"  {_compact(key)}: {_compact(data[key])}{comma}")
    lines.append("}")
    return "\n".join(lines)


def _narration(text: str, config: RequestConfig) -> tuple[OutputLine, ...]:
    if config.silent:
        return ()
    return (OutputLine(text, LineKind.NARRATION),)


def render_response(response: HTTPResponse, config: RequestConfig) -> Rendering:
    """Choose the output mode for a response and render it.

    Head-only mode is checked before the status code, so headers are
    shown for error responses too.
    """
    if config.head_only:
        lines = tuple(OutputLine(line) for line in render_headers(response.headers))
        return Rendering(mode=OutputMode.HEADERS, lines=lines)

    if not response.is_success:
        message = f"Request failed with status code: {response.status_code}."
        return Rendering(
            mode=OutputMode.STATUS_ERROR,
            lines=(OutputLine(message, LineKind.ERROR),),
        )

    if config.out_file is not None:
        return Rendering(
            mode=OutputMode.FILE,
            file_path=config.out_file,
            file_bytes=response.body_bytes,
            after_write=_narration(f"Response body saved to {config.out_file}", config),
        )

    text = response.text
    try:
        data = loads_strict(text)
    except ValueError:
        lines = _narration(TEXT_ANNOUNCEMENT, config) + (OutputLine(text),)
        return Rendering(mode=OutputMode.TEXT, lines=lines)

    lines = _narration(JSON_ANNOUNCEMENT, config) + (OutputLine(render_json(data)),)
    return Rendering(mode=OutputMode.JSON, lines=lines)
