"""
URL normalization for incoming analysis requests.

Acceptance rules (parser: ``urllib.parse.urlsplit``):
- input must be a non-empty string
- anything not starting with ``http`` gets ``https://`` prepended
- scheme must be http or https and a host must be present
- the host may not contain whitespace or URL delimiters, and the port
  (if given) must be a valid number
- non-ASCII hosts are serialized as punycode (IDNA)
"""

from urllib.parse import quote, urlsplit, urlunsplit

from analyzer.errors import InvalidInput, InvalidURL

ALLOWED_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}

_FORBIDDEN_HOST_CHARS = frozenset(" \t\r\n<>\"{}|\\^`#?/@")
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"


def normalize_url(raw) -> str:
    """
    Validate raw user input and return a canonical absolute URL string.

    Args:
        raw: Whatever the client sent in the ``url`` field

    Returns:
        Absolute URL, e.g. ``"example.com"`` -> ``"https://example.com/"``

    Raises:
        InvalidInput: Missing, non-string or blank input
        InvalidURL: Input that cannot be parsed into an http(s) URL
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidInput()

    candidate = raw.strip()
    if not candidate.startswith("http"):
        candidate = f"https://{candidate}"

    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as e:
        raise InvalidURL() from e

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise InvalidURL()

    host = parts.hostname
    if not host or any(ch in _FORBIDDEN_HOST_CHARS for ch in host):
        raise InvalidURL()

    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError as e:
            raise InvalidURL() from e

    if ":" in host:
        host = f"[{host}]"  # IPv6 literal

    netloc = host
    if port is not None and port != DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    path = quote(parts.path, safe=_PATH_SAFE) or "/"
    query = quote(parts.query, safe=_QUERY_SAFE)
    fragment = quote(parts.fragment, safe=_QUERY_SAFE)

    return urlunsplit((scheme, netloc, path, query, fragment))
