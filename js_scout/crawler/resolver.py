# js_scout/crawler/resolver.py
"""
URL resolution for script references.

Every relative form is rooted at the scheme and host of the base URL; the
base's own path is never used. Bundlers serve their assets from the host
root regardless of the depth of the page that references them.
"""
from __future__ import annotations

from typing import Union
from urllib.parse import SplitResult, urlsplit

__all__ = ("resolve_script_url", "looks_like_bundle", "ensure_next_prefix", "host_of")

_ABSOLUTE_PREFIXES = ("http://", "https://")
_NEXT_PREFIXES = ("/_next/", "_next/")
_BUNDLE_MARKERS = ("webpack", "bundle", "chunks", "_next/static")

BaseT = Union[str, SplitResult]


def host_of(base: SplitResult) -> str:
    """Return ``host[:port]`` of *base* without user-info."""
    return base.netloc.rpartition("@")[2]


def _split(base: BaseT) -> SplitResult:
    return base if isinstance(base, SplitResult) else urlsplit(base)


def resolve_script_url(base: BaseT, path: str) -> str:
    """Resolve *path* found on a document served from *base* to an absolute URL.

    Classification, first match wins:

    * ``http://`` / ``https://`` - returned unchanged;
    * ``//host/...`` - gets the scheme of *base*;
    * ``/_next/...`` or ``_next/...`` - rooted at the host of *base*;
    * anything else - a leading ``/`` is added and the result is rooted at
      the host of *base*.
    """
    if path.startswith(_ABSOLUTE_PREFIXES):
        return path

    parts = _split(base)
    if path.startswith("//"):
        return f"{parts.scheme}:{path}"

    if path.startswith(_NEXT_PREFIXES):
        if not path.startswith("/"):
            path = "/" + path
        return f"{parts.scheme}://{host_of(parts)}{path}"

    if not path.startswith("/"):
        path = "/" + path
    return f"{parts.scheme}://{host_of(parts)}{path}"


def looks_like_bundle(url: str) -> bool:
    """True if *url* is named like a bundler entry file worth expanding."""
    return any(marker in url for marker in _BUNDLE_MARKERS)


def ensure_next_prefix(path: str) -> str:
    """Root a chunk path under ``/_next/`` unless it already is."""
    if path.startswith(_NEXT_PREFIXES):
        return path
    if path.startswith("/"):
        return "/_next" + path
    return "/_next/" + path
