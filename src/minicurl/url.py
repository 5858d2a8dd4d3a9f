"""
URL validation.

Purely syntactic: no DNS lookups or connections. A URL is split into
scheme, authority and the remainder, the host and port are checked, and
only then is the scheme matched against the supported set. Hosts follow
the WHATWG rules: for special schemes they are percent-decoded and
checked as domains or IP addresses, for any other scheme they are opaque.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re
from dataclasses import dataclass
from urllib.parse import unquote_to_bytes

from netaddr import IPAddress, valid_ipv6

from minicurl.errors import InvalidURLError, URLErrorKind

SUPPORTED_SCHEMES = frozenset({"http", "https"})

# Schemes whose hosts are parsed as domains or IP addresses
SPECIAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss", "file"})

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):(.*)$", re.DOTALL)

# WHATWG forbidden domain code points (subset relevant after splitting)
_FORBIDDEN_HOST_CHARS = frozenset("\x00\t\n\r #/:<>?@[\\]^|%")

_MAX_PORT = 65535


@dataclass(frozen=True)
class ValidatedURL:
    """A URL that passed validation."""
    scheme: str
    host: str
    port: int | None = None
    userinfo: str | None = None
    rest: str = ""  # path, query and fragment as given

    @property
    def url(self) -> str:
        """URL to send, with scheme lower-cased and IPv4 hosts normalised."""
        authority = self.host
        if self.userinfo is not None:
            authority = f"{self.userinfo}@{authority}"
        if self.port is not None:
            authority = f"{authority}:{self.port}"
        return f"{self.scheme}://{authority}{self.rest}"

    def __str__(self) -> str:
        return self.url


def _fail(kind: URLErrorKind, raw: str) -> InvalidURLError:
    return InvalidURLError(kind, raw)


def _split_authority(remainder: str, special: bool) -> tuple[str, str]:
    """Split the part after 'scheme:' into authority and the rest.

    Special schemes tolerate any run of '/' or '\\' before the authority,
    including none at all; other schemes need exactly '//'.
    """
    if special:
        body = remainder.lstrip("/\\")
        delims = "/\\?#"
    else:
        body = remainder[2:]
        delims = "/?#"
    end = len(body)
    for delim in delims:
        pos = body.find(delim)
        if pos != -1:
            end = min(end, pos)
    return body[:end], body[end:]


def _normalise_path(rest: str) -> str:
    """Turn backslashes in the path of a special URL into slashes."""
    cut = len(rest)
    for delim in "?#":
        pos = rest.find(delim)
        if pos != -1:
            cut = min(cut, pos)
    return rest[:cut].replace("\\", "/") + rest[cut:]


def _ends_in_number(host: str) -> bool:
    """True if the last dot-label of host is numeric, making it an IPv4 host."""
    labels = host.split(".")
    if labels[-1] == "" and len(labels) > 1:
        labels.pop()
    last = labels[-1]
    if last and last.isascii() and last.isdigit():
        return True
    if last[:2].lower() == "0x":
        return all(c in "0123456789abcdefABCDEF" for c in last[2:])
    return False


def _ipv4_number(part: str) -> int:
    if not part:
        raise ValueError("empty IPv4 part")
    radix = 10
    if part[:2].lower() == "0x":
        radix = 16
        part = part[2:]
    elif len(part) > 1 and part[0] == "0":
        radix = 8
        part = part[1:]
    if not part:
        return 0
    return int(part, radix)


def parse_ipv4(host: str) -> str:
    """Parse an IPv4 host using the WHATWG rules, returning dotted-quad form.

    Accepts one to four parts, each decimal, octal (leading 0) or hex (0x).
    Raises ValueError for anything else.
    """
    parts = host.split(".")
    if parts[-1] == "" and len(parts) > 1:
        parts.pop()
    if len(parts) > 4:
        raise ValueError("too many IPv4 parts")

    for part in parts:
        if not part.isascii() or part.startswith(("+", "-")) or "_" in part:
            raise ValueError(f"invalid IPv4 part: {part!r}")
    numbers = [_ipv4_number(p) for p in parts]

    if any(n > 255 for n in numbers[:-1]):
        raise ValueError("IPv4 part out of range")
    if numbers[-1] >= 256 ** (5 - len(numbers)):
        raise ValueError("IPv4 address out of range")

    value = numbers[-1]
    for i, n in enumerate(numbers[:-1]):
        value += n * 256 ** (3 - i)

    return str(IPAddress(value, 4))


def _parse_port(port: str, raw: str) -> int | None:
    if port == "":
        return None
    if not (port.isascii() and port.isdigit()) or int(port) > _MAX_PORT:
        raise _fail(URLErrorKind.INVALID_PORT, raw)
    return int(port)


def _parse_domain(host: str, raw: str) -> str:
    """Percent-decode a special-scheme host and check it as domain or IPv4."""
    try:
        host = unquote_to_bytes(host).decode("utf-8")
    except UnicodeDecodeError:
        raise _fail(URLErrorKind.INVALID_SCHEME, raw) from None
    if not host or any(c in _FORBIDDEN_HOST_CHARS for c in host):
        raise _fail(URLErrorKind.INVALID_SCHEME, raw)
    if host.isascii():
        host = host.lower()
    if _ends_in_number(host):
        try:
            host = parse_ipv4(host)
        except ValueError:
            raise _fail(URLErrorKind.INVALID_IPV4, raw) from None
    return host


def _parse_host_port(hostport: str, raw: str, special: bool) -> tuple[str, int | None]:
    if hostport.startswith("["):
        end = hostport.find("]")
        if end == -1:
            raise _fail(URLErrorKind.INVALID_IPV6, raw)
        literal = hostport[1:end]
        if not literal or not valid_ipv6(literal):
            raise _fail(URLErrorKind.INVALID_IPV6, raw)
        host = f"[{str(IPAddress(literal, 6))}]"
        after = hostport[end + 1:]
        if after == "":
            return host, None
        if not after.startswith(":"):
            raise _fail(URLErrorKind.INVALID_PORT, raw)
        return host, _parse_port(after[1:], raw)

    host, _, port = hostport.partition(":")
    if special:
        host = _parse_domain(host, raw)
    # Hosts of other schemes are opaque

    return host, _parse_port(port, raw)


def validate_url(raw: str) -> ValidatedURL:
    """Validate a URL string.

    Raises:
        InvalidURLError: with ``kind`` set to the failure category. Any
            failure not attributable to the IPv6 literal, IPv4 literal or
            port, including a missing or unsupported scheme, is reported
            as ``INVALID_SCHEME``.
    """
    text = raw.strip()

    match = _SCHEME_RE.match(text)
    if not match:
        raise _fail(URLErrorKind.INVALID_SCHEME, raw)
    scheme = match.group(1).lower()
    remainder = match.group(2)

    special = scheme in SPECIAL_SCHEMES

    if not special and not remainder.startswith("//"):
        # No authority, e.g. mailto: or urn:
        raise _fail(URLErrorKind.INVALID_SCHEME, raw)

    authority, rest = _split_authority(remainder, special)
    userinfo, at, hostport = authority.rpartition("@")
    host, port = _parse_host_port(hostport, raw, special)

    if scheme not in SUPPORTED_SCHEMES:
        raise _fail(URLErrorKind.INVALID_SCHEME, raw)

    return ValidatedURL(
        scheme=scheme,
        host=host,
        port=port,
        userinfo=userinfo if at else None,
        rest=_normalise_path(rest),
    )
