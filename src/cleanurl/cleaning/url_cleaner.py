"""URL cleaning - remove tracking parameters, keep everything the page needs."""

import ipaddress
import re
from typing import Any, List, Optional, Sequence, Tuple
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlsplit, SplitResult

from ..logging import get_logger
from .models import CleanResult, RemovedParam
from .patterns import is_tracking_param

logger = get_logger(__name__)


ERROR_NOT_A_STRING = "Invalid URL: URL must be a non-empty string"
ERROR_MALFORMED = "Invalid URL: Not a properly formatted URL"
ERROR_NOT_A_LIST = "Input must be an array of URLs"

# Schemes that require a host, with their default ports
SPECIAL_SCHEMES = {"http": 80, "https": 443, "ftp": 21, "ws": 80, "wss": 443}

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20#%/:<>?@\[\\\]^|]")

# Characters left as-is when re-serializing a path or a fragment
_PATH_SAFE = "/%:@!$&'()*+,;=[]^|"
_FRAGMENT_SAFE = "/%:@!$&'()*+,;=?#[]\\^{|}"

# Hash fragment heuristics
_BAD_ESCAPE = re.compile(r"%(?![0-9a-fA-F]{2})")
_MALFORMED_MARKERS = ("Vite%20RSC", "Next.js", "TypeScript")
_CAMPAIGN_PREFIX = re.compile(r"^[0-9]+:")
_ANCHOR_WITH_QUERY = re.compile(r"^[a-zA-Z0-9_-]+\?")


def _normalize_special(url: str) -> str:
    """
    Read special-scheme URLs the way browsers do.

    Backslashes before the query act as '/', and any run of slashes after
    the scheme introduces the host, so ``https:\\\\example.com\\a`` and
    ``http:example.com`` both become ``scheme://host/...``.
    """
    match = _SCHEME_RE.match(url)
    if not match:
        return url
    scheme = url[:match.end() - 1].lower()
    if scheme not in SPECIAL_SCHEMES:
        return url

    rest = url[match.end():]
    cut = min((i for i in (rest.find("?"), rest.find("#")) if i != -1), default=len(rest))
    head = rest[:cut].replace("\\", "/").lstrip("/")
    return f"{scheme}://{head}{rest[cut:]}"


def _host(parts: SplitResult) -> Optional[str]:
    """Lowercased host with percent-escapes decoded."""
    host = parts.hostname
    if not host:
        return None
    return unquote(host).lower()


def _has_valid_host(parts: SplitResult) -> bool:
    host = _host(parts)
    if not host:
        return False
    if ":" in host:
        # Bracketed IPv6 literal
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            return False
        return True
    return not _FORBIDDEN_HOST_CHARS.search(host)


def is_valid_url(url: Any) -> bool:
    """
    Check whether a string is an absolute URL with a scheme.

    Protocol-relative (``//host``) and bare-host (``example.com``) strings
    are rejected. Never raises.
    """
    if not isinstance(url, str):
        return False

    candidate = url.strip()
    if not _SCHEME_RE.match(candidate):
        return False

    try:
        parts = urlsplit(_normalize_special(candidate))
        if parts.scheme.lower() in SPECIAL_SCHEMES:
            if not _has_valid_host(parts):
                return False
            parts.port  # raises ValueError for a non-numeric or out of range port
    except ValueError:
        return False

    return True


def _decode_component(text: str) -> str:
    """Strict percent-decoding: malformed escapes and invalid UTF-8 raise ValueError."""
    if _BAD_ESCAPE.search(text):
        raise ValueError(f"Malformed percent-escape in {text!r}")
    return unquote(text, errors="strict")


def _serialize_query(pairs: Sequence[Tuple[str, str]]) -> str:
    """Form-encode pairs (space as '+', only alphanumerics and *-._ unescaped)."""
    return urlencode(pairs, safe="*").replace("~", "%7E")


def clean_hash_fragment(hash_content: str) -> Optional[str]:
    """
    Strip tracking data from a URL fragment.

    Args:
        hash_content: Fragment content without the leading '#'

    Returns:
        The fragment to keep, or None when the whole fragment is tracking data.
        Anything that cannot be decoded or parsed is returned unchanged.
    """
    if not hash_content:
        return None

    try:
        decoded = _decode_component(hash_content)
    except ValueError:
        return hash_content

    # SPA routes (#/path) are never tracking data
    if decoded.startswith("/"):
        return hash_content

    # Leaked campaign payloads from newsletter tooling, e.g. "242: Vite RSC, Next.js"
    if (
        any(marker in hash_content for marker in _MALFORMED_MARKERS)
        or _CAMPAIGN_PREFIX.match(hash_content)
        or _CAMPAIGN_PREFIX.match(decoded)
    ):
        logger.debug(f"Dropping malformed tracking fragment: {hash_content}")
        return None

    # "anchor-name?params" hash routing
    if _ANCHOR_WITH_QUERY.match(decoded):
        return hash_content

    if "=" not in decoded:
        return hash_content

    # "#?utm_source=..." carries a plain query string
    query = decoded[1:] if decoded.startswith("?") else decoded
    try:
        pairs = parse_qsl(query, keep_blank_values=True)
    except ValueError:
        return hash_content

    kept = [(key, value) for key, value in pairs if not is_tracking_param(key)]
    if len(kept) == len(pairs):
        # No tracking keys, so treat it as a legitimate anchor
        return hash_content

    logger.debug(f"Removed {len(pairs) - len(kept)} tracking params from fragment")
    return _serialize_query(kept) or None


def _origin(parts: SplitResult) -> str:
    scheme = parts.scheme.lower()
    host = _host(parts)
    if not host:
        raise ValueError("URL has no origin to rebuild from")

    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and SPECIAL_SCHEMES.get(scheme) != port:
        host = f"{host}:{port}"

    return f"{scheme}://{host}"


def _remove_dot_segments(path: str) -> str:
    """Resolve '.' and '..' segments of an absolute path (RFC 3986 5.2.4)."""
    segments = path.split("/")[1:]
    output: List[str] = []
    for segment in segments:
        if segment == "..":
            if output:
                output.pop()
        elif segment != ".":
            output.append(segment)
    if segments[-1] in (".", ".."):
        # "/a/b/.." resolves to "/a/"
        output.append("")
    return "/" + "/".join(output)


def _path(parts: SplitResult) -> str:
    path = parts.path
    if not path and parts.scheme.lower() in SPECIAL_SCHEMES:
        path = "/"
    if path.startswith("/"):
        path = _remove_dot_segments(path)
    return quote(path, safe=_PATH_SAFE)


def clean_url(original_url: Any) -> CleanResult:
    """
    Remove tracking parameters from a URL.

    Query parameters whose key matches the tracking table (case-insensitive)
    are dropped, everything else is kept in its original order. The fragment
    goes through clean_hash_fragment().

    Args:
        original_url: URL to clean; anything that is not a non-empty string
            yields a failed result rather than an exception

    Returns:
        CleanResult describing the cleaned URL and removed parameters
    """
    if not original_url or not isinstance(original_url, str):
        return CleanResult.failure(original_url, ERROR_NOT_A_STRING)

    trimmed = original_url.strip()
    if not is_valid_url(trimmed):
        return CleanResult.failure(original_url, ERROR_MALFORMED)

    try:
        parts = urlsplit(_normalize_special(trimmed))

        kept: List[Tuple[str, str]] = []
        removed: List[RemovedParam] = []
        for key, value in parse_qsl(parts.query, keep_blank_values=True):
            if is_tracking_param(key):
                removed.append(RemovedParam(key=key, value=value))
            else:
                kept.append((key, value))

        cleaned_url = _origin(parts) + _path(parts)

        query = _serialize_query(kept)
        if query:
            cleaned_url += "?" + query

        if parts.fragment:
            hash_content = quote(parts.fragment, safe=_FRAGMENT_SAFE)
            cleaned_hash = clean_hash_fragment(hash_content)
            if cleaned_hash:
                cleaned_url += "#" + quote(cleaned_hash, safe=_FRAGMENT_SAFE)

    except Exception as e:
        logger.warning(f"Failed to clean {original_url!r}: {e}")
        return CleanResult.failure(original_url, f"URL processing error: {e}")

    if removed:
        removed_keys = ", ".join(p.key for p in removed)
        logger.debug(f"Removed {len(removed)} tracking params from {trimmed}: {removed_keys}")

    return CleanResult(
        success=True,
        error=None,
        original_url=original_url,
        cleaned_url=cleaned_url,
        removed_params=removed,
        removed_count=len(removed),
        has_changes=len(removed) > 0,
        saved_bytes=len(original_url) - len(cleaned_url),
    )


def clean_urls(urls: Sequence[str]) -> List[CleanResult]:
    """
    Clean a batch of URLs, preserving order.

    Raises:
        TypeError: If urls is not a list or tuple
    """
    if not isinstance(urls, (list, tuple)):
        raise TypeError(ERROR_NOT_A_LIST)

    return [clean_url(url) for url in urls]
