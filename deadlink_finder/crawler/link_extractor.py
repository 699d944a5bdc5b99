# deadlink_finder/crawler/link_extractor.py
"""
Link extraction, URL normalization and domain scoping for DeadLinkFinder.

Only absolute ``http(s)://`` links and site-root-relative ``/path`` links are
ever crawled; everything else (relative paths, fragments, ``mailto:``,
``javascript:``) is dropped.
"""
from __future__ import annotations

import re
from typing import Callable, Dict, List, NewType, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__ = (
    "CrawlTarget",
    "extract_links",
    "extract_links_html",
    "get_extractor",
    "normalize_url",
    "origin_of",
    "in_scope",
)

#: Normalized absolute URL; identity is the string itself.
CrawlTarget = NewType("CrawlTarget", str)

_HREF_RE = re.compile(r"""<a[^>]+href=["']([^"']+)["']""", re.IGNORECASE)
_ABSOLUTE_PREFIXES = ("http://", "https://")

Extractor = Callable[[str, int], List[str]]


def extract_links(html: str, cap: int) -> List[str]:
    """
    Lexically scan *html* for ``<a ... href="...">`` values.

    Returns raw hrefs in document order, at most *cap* of them. Anchors
    without a quoted href are skipped.
    """
    links: List[str] = []
    if cap <= 0:
        return links
    for match in _HREF_RE.finditer(html):
        links.append(match.group(1))
        if len(links) >= cap:
            break
    return links


def extract_links_html(html: str, cap: int) -> List[str]:
    """Same contract as :func:`extract_links`, using BeautifulSoup."""
    links: List[str] = []
    if cap <= 0:
        return links
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str) or not href_val:
            continue
        links.append(href_val)
        if len(links) >= cap:
            break
    return links


_EXTRACTORS: Dict[str, Extractor] = {
    "regex": extract_links,
    "html": extract_links_html,
}


def get_extractor(name: str) -> Extractor:
    try:
        return _EXTRACTORS[name]
    except KeyError:
        raise ValueError(f"Unknown link parser: {name!r}") from None


def normalize_url(origin: str, href: str) -> Optional[CrawlTarget]:
    """
    Turn *href* into an absolute URL against the crawl *origin*.

    >>> normalize_url("http://a.com", "http://b.com/x")
    'http://b.com/x'
    >>> normalize_url("http://a.com", "/p")
    'http://a.com/p'
    >>> normalize_url("http://a.com", "contact.html") is None
    True
    """
    if href.lower().startswith(_ABSOLUTE_PREFIXES):
        return CrawlTarget(href)
    if href.startswith("/"):
        return CrawlTarget(origin + href)
    return None


def origin_of(url: str) -> str:
    """Scheme and host of *url* (``http://host:port``), without path."""
    parsed = urlparse(url)
    if parsed.scheme and parsed.netloc:
        return f"{parsed.scheme}://{parsed.netloc}"
    return url.rstrip("/")


def in_scope(origin: str, url: str) -> bool:
    """
    True iff *url* starts with *origin*.

    Plain prefix comparison: ``http://example.com.evil.org`` passes for the
    origin ``http://example.com``.
    """
    return url.startswith(origin)
