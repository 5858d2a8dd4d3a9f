"""
minicurl - Single-shot command-line HTTP client

Issues exactly one HTTP request built from curl-style options and renders
the response headers or body (JSON pretty-printed with sorted keys) to the
console or to a file.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"
