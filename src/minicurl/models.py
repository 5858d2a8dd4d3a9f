"""
Data models for the request/response pipeline.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Method(str, Enum):
    """Supported HTTP methods."""
    GET = "GET"
    POST = "POST"
    HEAD = "HEAD"


@dataclass(frozen=True)
class RequestConfig:
    """Request configuration accumulated from command-line options.

    Instances are immutable; the argument interpreter derives each new
    state with ``dataclasses.replace``.
    """
    url: str | None = None
    method: Method = Method.GET
    form_data: str | None = None
    json_body: str | None = None
    headers: tuple[tuple[str, str], ...] = ()  # ordered, repeats allowed
    head_only: bool = False
    follow_redirects: bool = False
    silent: bool = False
    out_file: Path | None = None

    # Supplementary switches
    verbose: bool = False
    insecure: bool = False
    timeout: float | None = None
    show_help: bool = False

    def has_header(self, name: str) -> bool:
        name = name.lower()
        return any(h_name.lower() == name for h_name, _ in self.headers)


@dataclass(frozen=True)
class RedirectPolicy:
    """How many redirect hops the transport may follow."""
    follow: bool = False
    max_hops: int = 0

    @classmethod
    def none(cls) -> "RedirectPolicy":
        return cls(follow=False, max_hops=0)

    @classmethod
    def limited(cls, max_hops: int) -> "RedirectPolicy":
        return cls(follow=True, max_hops=max_hops)


@dataclass(frozen=True)
class OutboundRequest:
    """Fully specified request handed to the transport."""
    method: Method
    url: str
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes | None = None
    redirects: RedirectPolicy = field(default_factory=RedirectPolicy.none)
    timeout: float = 30.0
    verify_ssl: bool = True


_CHARSET_RE = re.compile(r"charset\s*=\s*\"?([\w.:-]+)\"?", re.IGNORECASE)


@dataclass(frozen=True)
class HTTPResponse:
    """Response as received from the transport.

    Header values are kept as raw bytes so that values which are not
    printable text can still be detected by the renderer.
    """
    status_code: int
    headers: tuple[tuple[str, bytes], ...] = ()
    body_bytes: bytes = b""
    reason: str = ""
    url: str = ""
    http_version: str = "HTTP/1.1"
    elapsed_ms: float = 0.0
    redirect_chain: tuple[str, ...] = ()

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str | None:
        for name, value in self.headers:
            if name.lower() == "content-type":
                return value.decode("latin-1")
        return None

    @property
    def charset(self) -> str | None:
        match = _CHARSET_RE.search(self.content_type or "")
        return match.group(1) if match else None

    @property
    def text(self) -> str:
        """Body decoded with the declared charset, falling back to UTF-8."""
        encoding = self.charset or "utf-8"
        try:
            return self.body_bytes.decode(encoding, errors="replace")
        except LookupError:
            return self.body_bytes.decode("utf-8", errors="replace")
