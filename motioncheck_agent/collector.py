"""Asset and metadata extraction from a parsed document."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from .errors import MalformedInput
from .models import Asset

logger = logging.getLogger("motioncheck_agent.collector")


@dataclass
class AssetCollection:
    """Assets of one document, each list in discovery order."""

    stylesheets: list[Asset] = field(default_factory=list)
    inline_styles: list[Asset] = field(default_factory=list)
    external_scripts: list[Asset] = field(default_factory=list)
    inline_scripts: list[Asset] = field(default_factory=list)
    declared_stylesheets: int = 0


@dataclass
class PageMetadata:
    title: str
    description: str
    internal_links: int
    external_links: int
    images: list[str]
    open_graph_tags: int


def resolve_url(href: str, base_url: str) -> str:
    """Resolve ``href`` against ``base_url``; raise MalformedInput when impossible."""
    href = (href or "").strip()
    try:
        resolved = urljoin(base_url, href)
        parsed = urlparse(resolved)
        # .port raises ValueError on an out-of-range or non-numeric port.
        _ = parsed.port
    except ValueError as e:
        raise MalformedInput(f"Unable to resolve {href!r}: {e}") from e
    if not parsed.scheme:
        raise MalformedInput(f"Unable to resolve {href!r}")
    return resolved


def base_origin(url: str) -> str:
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.hostname:
        raise MalformedInput(f"Not an absolute URL: {url!r}")
    origin = f"{parsed.scheme}://{parsed.hostname}"
    if parsed.port:
        origin += f":{parsed.port}"
    return origin


def inline_asset_url(kind: str, index: int) -> str:
    return f"inline-{'style' if kind == 'css' else 'script'}-{index}"


def _resolved_assets(hrefs: list[str], base_url: str, kind: str) -> list[Asset]:
    assets: list[Asset] = []
    for href in hrefs:
        try:
            url = resolve_url(href, base_url)
        except MalformedInput as e:
            logger.debug("Dropping %s asset: %s", kind, e)
            continue
        assets.append(Asset(url=url, origin="external", kind=kind))
    return assets


def collect_assets(soup: BeautifulSoup, base_url: str) -> AssetCollection:
    stylesheet_hrefs = [
        link.get("href")
        for link in soup.select('link[rel="stylesheet"]')
        if link.get("href")
    ]

    inline_styles = [
        Asset(
            url=inline_asset_url("css", index),
            origin="inline",
            kind="css",
            index=index,
            content=el.get_text() or "",
        )
        for index, el in enumerate(soup.find_all("style"))
    ]

    script_srcs: list[str] = []
    inline_texts: list[str] = []
    for el in soup.find_all("script"):
        src = el.get("src")
        if src:
            script_srcs.append(src)
            continue
        text = el.get_text()
        if text:
            inline_texts.append(text)

    inline_scripts = [
        Asset(
            url=inline_asset_url("js", index),
            origin="inline",
            kind="js",
            index=index,
            content=text,
        )
        for index, text in enumerate(inline_texts)
    ]

    collection = AssetCollection(
        stylesheets=_resolved_assets(stylesheet_hrefs, base_url, "css"),
        inline_styles=inline_styles,
        external_scripts=_resolved_assets(script_srcs, base_url, "js"),
        inline_scripts=inline_scripts,
        declared_stylesheets=len(stylesheet_hrefs),
    )
    logger.info(
        "Collected %d stylesheet(s), %d inline style(s), %d external script(s), %d inline script(s)",
        len(collection.stylesheets),
        len(collection.inline_styles),
        len(collection.external_scripts),
        len(collection.inline_scripts),
    )
    return collection


def extract_page_metadata(soup: BeautifulSoup, page_url: str, base_url: str) -> PageMetadata:
    title_el = soup.find("title")
    title = (title_el.get_text() if title_el else "") or "No title found"

    description = "Not found"
    description_tag = soup.select_one('meta[name="description"]')
    if description_tag and description_tag.get("content"):
        description = description_tag["content"]

    page_host = urlparse(page_url).hostname
    hrefs = [a.get("href") or "" for a in soup.select("a[href]")]
    internal = 0
    for href in hrefs:
        try:
            if urlparse(resolve_url(href, base_url)).hostname == page_host:
                internal += 1
        except MalformedInput:
            continue

    images: list[str] = []
    for img in soup.find_all("img"):
        src = img.get("src")
        if not src:
            continue
        try:
            images.append(resolve_url(src, base_url))
        except MalformedInput:
            continue

    return PageMetadata(
        title=title,
        description=description,
        internal_links=internal,
        external_links=len(hrefs) - internal,
        images=images,
        open_graph_tags=len(soup.select('meta[property^="og:"]')),
    )
