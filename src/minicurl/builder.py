"""
Request builder.

Combines a validated URL and the request configuration into the single
``OutboundRequest`` handed to the transport.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import logging

from minicurl.config import ClientConfig, get_config
from minicurl.errors import JSONBodyError, UnsupportedMethodError
from minicurl.jsonutil import loads_strict
from minicurl.models import Method, OutboundRequest, RedirectPolicy, RequestConfig
from minicurl.url import ValidatedURL

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def canonical_json(text: str) -> str:
    """Parse JSON text and re-serialise it compactly with sorted keys."""
    try:
        data = loads_strict(text)
    except ValueError as e:
        raise JSONBodyError(str(e)) from e
    return json.dumps(data, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def redirect_policy(config: RequestConfig, settings: ClientConfig) -> RedirectPolicy:
    if config.follow_redirects:
        return RedirectPolicy.limited(settings.max_redirects)
    return RedirectPolicy.none()


def build_headers(config: RequestConfig, settings: ClientConfig) -> tuple[tuple[str, str], ...]:
    """User headers in order, plus defaults for anything the user left unset."""
    headers = list(config.headers)

    if not config.has_header("Content-Type"):
        if config.json_body is not None:
            headers.append(("Content-Type", JSON_CONTENT_TYPE))
        elif config.form_data is not None:
            headers.append(("Content-Type", FORM_CONTENT_TYPE))

    if not config.has_header("User-Agent"):
        headers.append(("User-Agent", settings.user_agent))

    return tuple(headers)


def build_body(config: RequestConfig, method: Method) -> bytes | None:
    """Select the request body: JSON first, then form data for POST."""
    if config.json_body is not None:
        return canonical_json(config.json_body).encode("utf-8")
    if method is Method.POST and config.form_data is not None:
        return config.form_data.encode("utf-8")
    return None


def build_request(
    url: ValidatedURL,
    config: RequestConfig,
    settings: ClientConfig | None = None,
) -> OutboundRequest:
    """Build the outbound request.

    Raises:
        UnsupportedMethodError: config carries a method other than GET/POST/HEAD
        JSONBodyError: the JSON body does not parse
    """
    settings = settings or get_config()

    try:
        method = Method(config.method)
    except ValueError:
        raise UnsupportedMethodError(str(config.method)) from None

    body = build_body(config, method)
    request = OutboundRequest(
        method=method,
        url=url.url,
        headers=build_headers(config, settings),
        body=body,
        redirects=redirect_policy(config, settings),
        timeout=config.timeout if config.timeout is not None else settings.timeout,
        verify_ssl=settings.verify_ssl and not config.insecure,
    )

    logger.debug(f"Built request: {request.method.value} {request.url}")
    for name, value in request.headers:
        logger.debug(f"  {name}: {value}")

    return request
