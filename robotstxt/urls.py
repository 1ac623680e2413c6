"""
URL helpers: candidate normalisation and robots.txt location.
"""

from urllib.parse import urlsplit, urlunsplit

from .errors import RobotsUrlError
from .pattern import normalize_path

DEFAULT_PORTS = {"http": 80, "https": 443}


def prepare_path(url: str) -> str:
    """
    Reduce a URL or path to the normalised form rules are matched against.

    Full URLs keep only path, params and query. Relative input is treated
    as a path. The fragment is always dropped.

    Args:
        url: Absolute URL or path

    Returns:
        Percent-normalised path starting with `/`
    """
    if not url:
        return "/"

    try:
        parts = urlsplit(url)
    except ValueError:
        parts = None

    if parts is not None and parts.scheme and parts.netloc:
        path = parts.path
        if parts.query:
            path += "?" + parts.query
    else:
        path = url.split("#", 1)[0]

    if not path.startswith("/"):
        path = "/" + path
    return normalize_path(path)


def get_robots_url(url: str) -> str:
    """
    Get the robots.txt URL that governs a page URL.

    User info, path, query and fragment are dropped; the port is kept
    unless it is the default for the scheme.

    Raises:
        RobotsUrlError: If the URL is not an absolute http(s) URL with a host
    """
    try:
        parts = urlsplit(url.strip())
    except ValueError as exc:
        raise RobotsUrlError(f"Invalid URL: {url!r}") from exc

    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        raise RobotsUrlError(f"robots.txt is only defined for http(s) URLs: {url!r}")

    host = parts.hostname
    if not host:
        raise RobotsUrlError(f"URL has no host: {url!r}")

    try:
        port = parts.port
    except ValueError as exc:
        raise RobotsUrlError(f"Invalid port in URL: {url!r}") from exc

    if ":" in host:
        host = f"[{host}]"
    netloc = host if port in (None, DEFAULT_PORTS[scheme]) else f"{host}:{port}"
    return urlunsplit((scheme, netloc, "/robots.txt", "", ""))
