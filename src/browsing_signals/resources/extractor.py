"""Collapse cosmetically different URLs into one resource identity.

No per-site lookup table is involved; the same rule ladder applies to
every domain. Rules are tried in order and the first match wins:

1. root path (``/``, empty, ``/index.html``) -> ``homepage``
2. one path segment -> ``category``, unless it carries an identifying
   query parameter (``/watch?v=...``), which makes it ``specific``
3. an identifying query parameter -> ``specific``
4. four or more segments -> ``deep`` (first four kept)
5. two or three segments -> ``specific``
6. anything else -> ``category`` on the raw path

Identifiers must stay stable across versions, so neither the order nor
the parameter priority may change.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs

from browsing_signals.resources.models import ExtractedResource
from browsing_signals.urls import parse_url, strip_www

logger = logging.getLogger(__name__)

# Priority order: the first one present in the query string is used.
ID_PARAMS = ("v", "id", "q", "p", "post", "article", "list", "playlist")


def extract_resource_identifier(url: str) -> ExtractedResource | None:
    """Return the resource identity of ``url``, or None if it cannot be parsed."""
    parts = parse_url(url)
    if parts is None or not parts.hostname:
        logger.debug("Skipping untrackable URL: %s", url)
        return None

    domain = strip_www(parts.hostname)
    path = parts.path

    if path in ("", "/", "/index.html"):
        return ExtractedResource(domain, "homepage", f"{domain}/")

    segments = [s for s in path.split("/") if s]

    params = parse_qs(parts.query, keep_blank_values=True)
    id_param = next((name for name in ID_PARAMS if name in params), None)

    if len(segments) == 1 and id_param is None:
        return ExtractedResource(domain, "category", f"{domain}/{segments[0]}")

    if id_param is not None:
        first_segment = segments[0] if segments else "page"
        value = params[id_param][0]
        return ExtractedResource(domain, "specific", f"{domain}/{first_segment}?{id_param}={value}")

    if len(segments) >= 4:
        return ExtractedResource(domain, "deep", f"{domain}/" + "/".join(segments[:4]))

    if len(segments) >= 2:
        return ExtractedResource(domain, "specific", f"{domain}/" + "/".join(segments[:3]))

    return ExtractedResource(domain, "category", f"{domain}{path}")
