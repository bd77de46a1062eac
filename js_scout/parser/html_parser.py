# === FILE: js_scout/parser/html_parser.py ===
"""HTML script discovery for JsScout.

:func:`extract_scripts` walks a fetched page and yields a :class:`ScriptRef`
for every JavaScript URL it can find:

* ``<script src="…">`` - resolved with :func:`resolve_script_url`; marked
  as a bundle when the URL is named like one;
* inline ``<script>`` text - tokens such as ``//cdn.x/y.js`` or
  ``/static/app.js``; relative tokens without a leading slash are ignored;
* ``<div data-script-src="…">`` - resolved like ``src``, never expanded.

The generator is lazy: the caller may fetch and expand a bundle before
asking for the next reference, so references stay in document order.
Duplicates are *not* removed here; that is the crawler's job.
"""
from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from urllib.parse import SplitResult, urlsplit

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag

from js_scout.crawler.models import PageData, ScriptRef
from js_scout.crawler.resolver import host_of, looks_like_bundle, resolve_script_url
from js_scout.logger import logger

__all__: Sequence[str] = ("extract_scripts", "inline_script_urls")

_INLINE_JS_RE = re.compile(r"[\w./:()]*js", re.ASCII)


def inline_script_urls(base: SplitResult, text: str) -> Iterator[str]:
    """Yield absolute URLs for protocol-relative and host-rooted tokens in *text*."""
    for token in _INLINE_JS_RE.findall(text):
        if token.startswith("//"):
            yield f"{base.scheme}:{token}"
        elif token.startswith("/"):
            yield f"{base.scheme}://{host_of(base)}{token}"


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    return value if isinstance(value, str) else ""


def extract_scripts(page: PageData) -> Iterator[ScriptRef]:
    """Yield script references found in *page* in document order.

    A page whose URL or markup cannot be parsed yields nothing.
    """
    try:
        base = urlsplit(page.url)
        soup = BeautifulSoup(page.content, "html.parser")
    except (ValueError, ParserRejectedMarkup) as exc:
        logger.debug("Skipping %s: %s", page.url, exc)
        return

    for tag in soup.find_all("script"):
        if not isinstance(tag, Tag):
            continue
        src = _attr(tag, "src")
        if src:
            url = resolve_script_url(base, src)
            yield ScriptRef(url, bundle=looks_like_bundle(url))
        for url in inline_script_urls(base, tag.get_text()):
            yield ScriptRef(url)

    for tag in soup.find_all("div"):
        if not isinstance(tag, Tag):
            continue
        src = _attr(tag, "data-script-src")
        if src:
            yield ScriptRef(resolve_script_url(base, src))
