"""
resilient_client.urls - Base URL normalization and page URL construction.
"""

from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse


def normalize_base_url(url: str) -> str:
    """
    Normalize the collection endpoint:
      - Strip leading/trailing whitespace
      - Lowercase the scheme and host
      - Remove default ports (80 for http, 443 for https)
      - Remove trailing slash on path (unless root)
      - Drop any fragment
    """
    url = url.strip()
    if not url:
        return url

    parsed = urlparse(url)

    scheme = parsed.scheme.lower()
    host = parsed.hostname.lower() if parsed.hostname else ""

    port = parsed.port
    if (scheme == "http" and port == 80) or (scheme == "https" and port == 443):
        port = None
    if ":" in host:
        host = f"[{host}]"
    netloc = host if port is None else f"{host}:{port}"
    if parsed.username:
        userinfo = parsed.username if parsed.password is None else f"{parsed.username}:{parsed.password}"
        netloc = f"{userinfo}@{netloc}"

    path = parsed.path
    if path != "/" and path.endswith("/"):
        path = path.rstrip("/")

    return urlunparse((scheme, netloc, path, parsed.params, parsed.query, ""))


def build_page_url(base_url: str, page: int, limit: int) -> str:
    """
    Return ``{base_url}?page={page}&limit={limit}``.

    Only the query changes: scheme, host, path and any trailing slash are
    sent exactly as configured.  Query parameters already on ``base_url``
    are kept; ``page`` and ``limit`` replace any existing values of the
    same name.
    """
    parsed = urlparse(base_url)
    params = [
        (k, v) for k, v in parse_qsl(parsed.query, keep_blank_values=True)
        if k not in ("page", "limit")
    ]
    params.extend([("page", str(page)), ("limit", str(limit))])
    return urlunparse(parsed._replace(query=urlencode(params)))
