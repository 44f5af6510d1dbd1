"""Search URL construction for x.com."""

from __future__ import annotations

from urllib.parse import quote

# Characters JavaScript's encodeURIComponent leaves untouched besides
# letters and digits.
_URI_COMPONENT_SAFE = "-_.!~*'()"

SEARCH_TABS = ("live", "top", "user", "image", "media")


def build_search_url(query: str, *, domain: str = "x.com", tab: str = "live") -> str:
    """Embed a query string in the platform search URL.

    No validation is done here; run `is_valid_query_string` first when the
    query comes from untrusted input.

    Args:
        query: Finished query string.
        domain: Platform host name.
        tab: Result tab passed as the `f` parameter.

    Returns:
        `https://<domain>/search?q=<encoded>&src=typed_query&f=<tab>`.
    """
    encoded = quote(query or "", safe=_URI_COMPONENT_SAFE)
    return f"https://{domain}/search?q={encoded}&src=typed_query&f={tab}"
