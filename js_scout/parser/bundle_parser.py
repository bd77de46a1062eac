# js_scout/parser/bundle_parser.py
"""Chunk discovery inside bundler output.

Bundles produced by webpack / Next.js reference the chunks they load on
demand through a handful of recognisable code shapes.  Each shape is handled
by an independent *extractor*: a callable that takes the raw bundle text and
yields relative chunk paths.  :func:`extract_chunk_urls` runs every extractor
over the same text, prefixes the paths with ``/_next/`` where needed, resolves
them against the bundle URL and yields each absolute URL once.

Supported shapes
----------------
* ``2986===e?"static/chunks/2986-2488e3e4a13aed5b.js"`` - direct ternary map;
* ``"static/chunks/"+(({1027:"4b26d002"})[e]||e)+"."+({142:"b1a9"})[e]+".js"``
  - split id / hash object literals;
* ``a.p+"static/chunks/pages/about-12345.js"`` - public path concatenation;
* ``a.u=e=>2986===e?"...":7699===e?"..."`` - the chunk-url function only.

A new bundler convention is supported by writing another extractor and
passing it in *extractors* (or appending it to :data:`CHUNK_EXTRACTORS`).
"""
from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Dict, Optional
from urllib.parse import urlsplit

from js_scout.crawler.resolver import ensure_next_prefix, resolve_script_url
from js_scout.logger import logger

__all__: Sequence[str] = (
    "ChunkExtractor",
    "CHUNK_EXTRACTORS",
    "parse_js_map",
    "direct_chunks",
    "split_map_chunks",
    "public_path_chunks",
    "chunk_url_function",
    "extract_chunk_urls",
)

ChunkExtractor = Callable[[str], Iterable[str]]

_DIRECT_RE = re.compile(r'(\d+)===e\?"([^"]+)"')
_SPLIT_MAP_RE = re.compile(
    r'"(static/chunks/)"\+\(\(\{([^}]+)\}\)\[e\]\|\|e\)\+"\."\+\(\{([^}]+)\}\)\[e\]\+"\.js"'
)
_PUBLIC_PATH_RE = re.compile(r'a\.p\+"([^"]+\.js)"')
# body ends at the first "}" even if the function nests braces
_CHUNK_FN_RE = re.compile(r"a\.u=e=>([^}]+)")
_MAP_PAIR_RE = re.compile(r'(\d+):"([^"]+)"')


def parse_js_map(body: str) -> Dict[str, str]:
    """Parse ``142:"b1a9",143:"c2d3"`` (an object-literal body) into a dict."""
    return {key: value for key, value in _MAP_PAIR_RE.findall(body)}


def direct_chunks(content: str) -> Iterator[str]:
    for _chunk_id, path in _DIRECT_RE.findall(content):
        yield path


def split_map_chunks(content: str) -> Iterator[str]:
    match = _SPLIT_MAP_RE.search(content)
    if match is None:
        return
    prefix, id_body, hash_body = match.groups()
    names = parse_js_map(id_body)
    for chunk_id, chunk_hash in parse_js_map(hash_body).items():
        name = names.get(chunk_id, chunk_id)
        yield f"{prefix}{name}.{chunk_hash}.js"


def public_path_chunks(content: str) -> Iterator[str]:
    yield from _PUBLIC_PATH_RE.findall(content)


def chunk_url_function(content: str) -> Iterator[str]:
    """Direct ternary matches restricted to the body of ``a.u=e=>…``."""
    match = _CHUNK_FN_RE.search(content)
    if match is None:
        return
    yield from direct_chunks(match.group(1))


CHUNK_EXTRACTORS: list[ChunkExtractor] = [
    direct_chunks,
    split_map_chunks,
    public_path_chunks,
    chunk_url_function,
]


def extract_chunk_urls(
    bundle_url: str,
    content: str,
    extractors: Optional[Iterable[ChunkExtractor]] = None,
) -> Iterator[str]:
    """Yield absolute chunk URLs referenced by the bundle at *bundle_url*.

    Every extractor runs over the whole *content*; their results are unioned
    and each URL is yielded once per call.
    """
    try:
        base = urlsplit(bundle_url)
    except ValueError as exc:
        logger.debug("Bad bundle URL %s: %s", bundle_url, exc)
        return
    seen: set[str] = set()
    for extractor in CHUNK_EXTRACTORS if extractors is None else extractors:
        found = 0
        for path in extractor(content):
            url = resolve_script_url(base, ensure_next_prefix(path))
            if url in seen:
                continue
            seen.add(url)
            found += 1
            yield url
        name = getattr(extractor, "__name__", repr(extractor))
        logger.debug("%s: %d new chunk(s) in %s", name, found, bundle_url)
