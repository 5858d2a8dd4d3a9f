"""
Strict JSON helpers shared by the request builder and the renderer.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def loads_strict(text: str) -> Any:
    """json.loads without the NaN/Infinity extensions.

    Strings holding an unpaired surrogate escape (e.g. ``"\\ud800"``) are
    rejected too, since they cannot be written back out as UTF-8.

    Raises ValueError (json.JSONDecodeError included) for invalid input.
    """
    data = json.loads(text, parse_constant=_reject_constant)
    try:
        json.dumps(data, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError("unpaired surrogate escape in string") from None
    return data
