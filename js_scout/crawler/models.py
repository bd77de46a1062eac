# js_scout/crawler/models.py
"""
Data models for the JsScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PageData:
    """Holds the requested URL and the raw response body."""

    url: str
    content: bytes


@dataclass(slots=True, frozen=True)
class ScriptRef:
    """A JavaScript URL found on a page; *bundle* marks it for chunk expansion."""

    url: str
    bundle: bool = False
