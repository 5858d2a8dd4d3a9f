"""
Command-line argument interpreter.

Turns the flat token list into a ``RequestConfig``. Tokens are first
grouped into directives (a flag plus its value, or a bare positional) and
then folded left to right over an immutable config, so a later directive
overrides an earlier one.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import re
from dataclasses import dataclass, replace
from functools import reduce
from pathlib import Path
from typing import Iterator, Sequence

from minicurl.errors import (
    HeaderSyntaxError,
    InvalidOptionValueError,
    UnknownOptionError,
    UnsupportedMethodError,
)
from minicurl.models import Method, RequestConfig

logger = logging.getLogger(__name__)

USAGE = """\
Usage: minicurl <URL> [-X METHOD] [-d DATA] [--json JSON] [-H "Name: Value"]...
                [-I|--head] [-o FILE] [-L] [-s]

Options:
  -X, --request METHOD   HTTP method: GET, POST or HEAD (default GET)
  -d, --data DATA        Request body sent with POST
  --json JSON            JSON request body; implies POST, wins over -d
  -H, --header HEADER    Add a "Name: Value" header (repeatable)
  -I, --head             Send HEAD and print the response headers only
  -o, --output FILE      Write the response body to FILE
  -L, --location         Follow redirects (at most 10 hops)
  -s, --silent           Do not print progress narration
  -m, --max-time SECS    Request timeout in seconds
  -k, --insecure         Skip TLS certificate verification
  -v, --verbose          Log request and response details to stderr
  -h, --help             Show this message
"""

# Canonical flag names; aliases map onto them.
VALUE_FLAGS = {
    "-X": "-X", "--request": "-X",
    "-d": "-d", "--data": "-d",
    "--json": "--json",
    "-H": "-H", "--header": "-H",
    "-o": "-o", "--output": "-o",
    "-m": "-m", "--max-time": "-m",
}

SWITCH_FLAGS = {
    "-I": "-I", "--head": "-I",
    "-L": "-L", "--location": "-L",
    "-s": "-s", "--silent": "-s",
    "-k": "-k", "--insecure": "-k",
    "-v": "-v", "--verbose": "-v",
    "-h": "-h", "--help": "-h",
}

# RFC 9110 token characters
_HEADER_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
# Field values may not carry control characters other than horizontal tab
_HEADER_VALUE_BAD_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


@dataclass(frozen=True)
class Directive:
    """One step of the fold: a flag with optional value, or a positional."""
    flag: str | None
    value: str | None = None


def is_flag(token: str) -> bool:
    return token.startswith("-")


def iter_directives(tokens: Sequence[str]) -> Iterator[Directive]:
    """Group tokens into directives.

    A value flag consumes the next token whatever it looks like. A value
    flag in last position has nothing to consume and is dropped.
    """
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if not is_flag(token):
            yield Directive(flag=None, value=token)
        elif token in VALUE_FLAGS:
            if i + 1 < len(tokens):
                yield Directive(flag=VALUE_FLAGS[token], value=tokens[i + 1])
                i += 1
            else:
                logger.debug(f"Ignoring {token}: no value follows it")
        elif token in SWITCH_FLAGS:
            yield Directive(flag=SWITCH_FLAGS[token])
        else:
            raise UnknownOptionError(token)
        i += 1


def parse_method(value: str) -> Method:
    """Normalise a -X value to a supported method."""
    try:
        return Method(value.strip().upper())
    except ValueError:
        raise UnsupportedMethodError(value) from None


def parse_header(raw: str) -> tuple[str, str]:
    """Split a 'Name: Value' header on its first colon."""
    if ":" not in raw:
        raise HeaderSyntaxError(raw, "expected 'Name: Value'")

    name, value = raw.split(":", 1)
    name = name.strip()
    value = value.strip()

    if not _HEADER_NAME_RE.match(name):
        raise HeaderSyntaxError(raw, "invalid header name")
    if _HEADER_VALUE_BAD_RE.search(value):
        raise HeaderSyntaxError(raw, "header value contains control characters")

    return name, value


def parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        raise InvalidOptionValueError("-m", value, "a number of seconds") from None
    if not timeout > 0:
        raise InvalidOptionValueError("-m", value, "a positive number of seconds")
    return timeout


def apply_directive(config: RequestConfig, directive: Directive) -> RequestConfig:
    """Return the config that results from applying one directive."""
    flag, value = directive.flag, directive.value

    if flag is None:
        # First positional is the URL; later ones are ignored
        if config.url is not None:
            logger.debug(f"Ignoring extra positional argument {value!r}")
            return config
        return replace(config, url=value.strip())

    if flag == "-X":
        return replace(config, method=parse_method(value))
    if flag == "-d":
        return replace(config, form_data=value)
    if flag == "--json":
        return replace(config, json_body=value, method=Method.POST)
    if flag == "-H":
        return replace(config, headers=config.headers + (parse_header(value),))
    if flag == "-o":
        return replace(config, out_file=Path(value))
    if flag == "-m":
        return replace(config, timeout=parse_timeout(value))
    if flag == "-I":
        return replace(config, head_only=True, method=Method.HEAD)
    if flag == "-L":
        return replace(config, follow_redirects=True)
    if flag == "-s":
        return replace(config, silent=True)
    if flag == "-k":
        return replace(config, insecure=True)
    if flag == "-v":
        return replace(config, verbose=True)
    if flag == "-h":
        return replace(config, show_help=True)

    raise UnknownOptionError(flag)


def parse_args(tokens: Sequence[str]) -> RequestConfig:
    """Interpret command-line tokens (program name excluded).

    Raises a ``UsageError`` subclass or ``UnsupportedMethodError`` for
    input that cannot describe a request. A missing URL is left as
    ``None`` for the caller to report.
    """
    return reduce(apply_directive, iter_directives(tokens), RequestConfig())
