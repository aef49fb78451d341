"""API version detection from the configured base URL."""

from __future__ import annotations

import re

from .enums import ApiVersion

_VERSION_SEGMENT = re.compile(r"/v([0-9])", re.IGNORECASE)


def detect_api_version(api_url: str) -> ApiVersion:
    """Return the API version named by the first ``/v<digit>`` segment.

    Unknown digits and URLs without a version segment fall back to the
    legacy schema.

    Example:
        >>> detect_api_version("https://api.sendinblue.com/v3")
        <ApiVersion.V3: 3>
        >>> detect_api_version("https://api.sendinblue.com/v2.0")
        <ApiVersion.V2: 2>
        >>> detect_api_version("dummy")
        <ApiVersion.V2: 2>
    """
    found = _VERSION_SEGMENT.search(api_url)
    if found is None:
        return ApiVersion.V2
    try:
        return ApiVersion(int(found.group(1)))
    except ValueError:
        return ApiVersion.V2


__all__ = ["detect_api_version"]
