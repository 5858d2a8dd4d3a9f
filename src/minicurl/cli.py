"""
minicurl command-line entry point.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from typing import Sequence

import click

from minicurl.args import USAGE, parse_args
from minicurl.builder import build_request
from minicurl.client import send_request
from minicurl.errors import InvalidURLError, MinicurlError, MissingURLError, TransportError
from minicurl.logging_config import configure_logging
from minicurl.models import HTTPResponse
from minicurl.render import render_response
from minicurl.sink import ConsoleSink
from minicurl.url import validate_url

logger = logging.getLogger(__name__)

# Options are interpreted by minicurl.args, so click passes every token through.
CONTEXT_SETTINGS = {
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}


def log_response(response: HTTPResponse) -> None:
    for hop in response.redirect_chain:
        logger.debug(f"Redirected from {hop}")
    logger.debug(
        f"{response.http_version} {response.status_code} {response.reason} from {response.url} "
        f"({response.elapsed_ms:.0f}ms, {len(response.body_bytes)} bytes)"
    )


def run(tokens: Sequence[str], sink: ConsoleSink | None = None) -> int:
    """Run one request/response cycle and return the exit status.

    This is the only place where pipeline errors are caught: each one is
    reported as a single error line.
    """
    sink = sink or ConsoleSink()
    tokens = list(tokens)

    if not tokens:
        sink.usage(USAGE)
        return 0

    configure_logging(verbose=False)

    try:
        config = parse_args(tokens)
    except MinicurlError as e:
        sink.error(str(e))
        return 1

    configure_logging(verbose=config.verbose)
    logger.debug(f"Parsed configuration: {config}")

    if config.show_help:
        sink.usage(USAGE)
        return 0

    if config.url is None:
        sink.error(str(MissingURLError()))
        sink.usage(USAGE)
        return 1

    if not config.silent:
        sink.narrate(f"Requesting URL: {config.url}")
        sink.narrate(f"Method: {config.method.value}")
        if config.form_data:
            sink.narrate(f"Data: {config.form_data}")

    try:
        url = validate_url(config.url)
        request = build_request(url, config)
        response = send_request(request)
        log_response(response)
        rendering = render_response(response, config)
        sink.emit(rendering)
    except InvalidURLError as e:
        logger.debug(f"Rejected URL {e.url!r}: {e.kind.name}")
        sink.error(str(e))
        return 1
    except TransportError as e:
        logger.debug(f"Transport failure: {e.cause}")
        sink.error(str(e))
        return 1
    except MinicurlError as e:
        sink.error(str(e))
        return 1

    return 1 if rendering.failed else 0


@click.command(context_settings=CONTEXT_SETTINGS, add_help_option=False)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
def main(tokens: tuple[str, ...]):
    """Send one HTTP request and print the response.

    \b
    Examples:
        minicurl https://api.example.com/users
        minicurl https://api.example.com/users --json '{"name": "test"}'
        minicurl https://example.com -I
        minicurl https://example.com/file.bin -o file.bin -s
    """
    raise SystemExit(run(tokens))
