"""
Exceptions raised by the request/response pipeline.

Every fatal condition is raised as a ``MinicurlError`` whose message is the
single line shown to the user. Only the CLI entry point catches them.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from enum import Enum


class MinicurlError(Exception):
    """Base exception for minicurl errors."""
    pass


class UsageError(MinicurlError):
    """Command line could not be interpreted."""
    pass


class UnknownOptionError(UsageError):
    """An unrecognised flag was given."""

    def __init__(self, token: str):
        super().__init__(f"Unknown option: {token}")
        self.token = token


class HeaderSyntaxError(UsageError):
    """A -H value is not a valid 'Name: Value' header."""

    def __init__(self, header: str, reason: str):
        super().__init__(f"Invalid header {header!r}: {reason}")
        self.header = header
        self.reason = reason


class MissingURLError(UsageError):
    """Options were given but no URL."""

    def __init__(self):
        super().__init__("No URL specified.")


class InvalidOptionValueError(UsageError):
    """An option value could not be converted."""

    def __init__(self, option: str, value: str, expected: str):
        super().__init__(f"Invalid value {value!r} for {option}: expected {expected}")
        self.option = option
        self.value = value


class UnsupportedMethodError(MinicurlError):
    """Requested HTTP method is not GET, POST or HEAD."""

    def __init__(self, method: str):
        super().__init__(f"Unsupported HTTP method: {method} (expected GET, POST or HEAD)")
        self.method = method


class URLErrorKind(Enum):
    """Categories of URL validation failure."""
    INVALID_IPV6 = "The URL contains an invalid IPv6 address."
    INVALID_IPV4 = "The URL contains an invalid IPv4 address."
    INVALID_PORT = "The URL contains an invalid port number."
    INVALID_SCHEME = "The URL does not have a valid base protocol."

    @property
    def message(self) -> str:
        return self.value


class InvalidURLError(MinicurlError):
    """URL failed syntactic validation."""

    def __init__(self, kind: URLErrorKind, url: str = ""):
        super().__init__(kind.message)
        self.kind = kind
        self.url = url


class JSONBodyError(MinicurlError):
    """The --json payload is not valid JSON."""

    def __init__(self, detail: str):
        super().__init__(f"Invalid JSON body: {detail}")
        self.detail = detail


class TransportError(MinicurlError):
    """The request could not be delivered.

    All transport failures share one user-facing message; ``cause`` keeps
    the underlying detail for logging.
    """

    MESSAGE = (
        "Unable to connect to the server. Perhaps the network is offline "
        "or the server hostname is invalid."
    )

    def __init__(self, cause: str = ""):
        super().__init__(self.MESSAGE)
        self.cause = cause


class OutputFileError(MinicurlError):
    """Response body could not be written to the output file."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not write response body to {path}: {reason}")
        self.path = path
        self.reason = reason
