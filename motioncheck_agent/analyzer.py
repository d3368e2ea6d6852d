from __future__ import annotations

import html as html_lib
import logging
import re
import time
from datetime import datetime, timezone
from typing import Callable
from urllib.parse import urlparse, urlunparse

import httpx
from bs4 import BeautifulSoup, Doctype

from .cdn import resolve_cdn
from .classifier import classify, format_confidence, is_persisted
from .collector import base_origin, collect_assets, extract_page_metadata
from .config import Settings, get_settings
from .errors import MalformedInput, SessionFetchExhausted
from .fetcher import fetch_with_retry
from .fingerprint import fingerprint
from .models import AnalysisResult, AnalyzeRequest, AnimationFile, Asset, Classification

logger = logging.getLogger("motioncheck_agent.analyzer")

SCRIPT_SEPARATOR = "\n\n// ===== NEXT SCRIPT =====\n\n"


def _normalize_url(raw: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise MalformedInput("Please provide a URL.")

    if not re.match(r"^https?://", value, flags=re.IGNORECASE):
        value = "https://" + value

    try:
        parsed = urlparse(value)
        hostname = parsed.hostname
        # .port raises ValueError on an out-of-range or non-numeric port.
        _ = parsed.port
    except ValueError as e:
        raise MalformedInput("Please enter a valid website URL.") from e
    if parsed.scheme.lower() not in ("http", "https"):
        raise MalformedInput("Please use an http(s) website URL.")
    if not hostname or "." not in hostname:
        raise MalformedInput("Please enter a valid website domain.")

    return urlunparse(parsed)


def _annotation(info: Classification, label: str) -> str:
    if not info.is_animation:
        return ""
    return f"({label} - {format_confidence(info.confidence)}%)"


def _record_animation(files: list[AnimationFile], asset: Asset, content: str, info: Classification) -> None:
    if not is_persisted(info):
        if info.confidence > 0:
            logger.debug("Low confidence animation: %s (%s%%)", asset.url, format_confidence(info.confidence))
        return
    logger.info(
        "%s animation detected: %s (%s) - confidence %s%%",
        asset.kind.upper(),
        asset.url,
        info.library or "Generic",
        format_confidence(info.confidence),
    )
    files.append(
        AnimationFile(
            url=asset.url,
            content=content,
            kind=asset.kind,
            library=info.library,
            confidence=info.confidence,
        )
    )


def _failure_marker(asset: Asset, attempts: int, error: str | None) -> str:
    text = f"FETCH FAILED after {attempts} attempts: {asset.url} - Error: {error}"
    if asset.kind == "css":
        return f"/* {text} */"
    return f"// {text}"


def _css_block(asset: Asset, content: str, info: Classification) -> str:
    if asset.origin == "inline":
        return f"/* Inline style {asset.index} {_annotation(info, 'ANIMATION')} */\n{content}"
    return f"/* Fetched from: {asset.url} {_annotation(info, 'ANIMATION FILE')} */\n{content}"


def _js_block(asset: Asset, content: str, info: Classification) -> str:
    library = f"// Library: {info.library or 'None'}"
    if asset.origin == "inline":
        return f"// Inline script {asset.index} {_annotation(info, 'ANIMATION CODE')}\n{library}\n{content}"
    return f"// Fetched from: {asset.url} {_annotation(info, 'ANIMATION FILE')}\n{library}\n{content}"


def _reconstruct_body(html: str) -> str:
    """Body markup with its attributes; scripts, styles and base tags are
    dropped because the bundles and the preview head carry them."""
    soup = BeautifulSoup(html, "html.parser")
    body = soup.body
    if body is None:
        # No <body> tag: keep what sits outside <head> and the document shell.
        for node in list(soup.contents):
            if isinstance(node, Doctype):
                node.extract()
        for el in soup.find_all("head"):
            el.decompose()
        for el in soup.find_all("html"):
            el.unwrap()
        body = soup
    for el in body.find_all(["script", "style", "base"]):
        el.decompose()

    inner = body.decode_contents()
    if body is soup:
        return inner.strip()

    attrs = " ".join(
        f'{name}="{html_lib.escape(" ".join(value) if isinstance(value, list) else value, quote=True)}"'
        for name, value in body.attrs.items()
    )
    return f"<body {attrs}>{inner}</body>" if attrs else inner


def analyze(
    req: AnalyzeRequest,
    *,
    client: httpx.Client | None = None,
    settings: Settings | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> AnalysisResult:
    """Run one analysis session for ``req.url``.

    Only the primary document is retried at session level; asset failures
    are recorded in the bundles and never restart the session. Raises
    SessionFetchExhausted when the document cannot be retrieved and
    MalformedInput when the URL is unusable.
    """
    settings = settings or get_settings()
    normalized_url = _normalize_url(req.url)
    base_url = base_origin(normalized_url)

    file_attempts = req.max_file_attempts or settings.file_fetch_attempts
    file_delay = settings.file_fetch_delay_ms if req.file_delay_ms is None else req.file_delay_ms
    site_attempts = req.max_site_attempts or settings.site_fetch_attempts
    site_delay = settings.site_fetch_delay_ms if req.site_delay_ms is None else req.site_delay_ms

    timings: dict[str, int] = {}
    warnings: list[str] = []

    def timed(name: str, fn):
        start = time.perf_counter()
        try:
            return fn()
        finally:
            timings[name] = timings.get(name, 0) + int((time.perf_counter() - start) * 1000)

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.timeout_ms / 1000, follow_redirects=True)

    def fetch(url: str, attempts: int, delay_ms: int):
        return fetch_with_retry(url, attempts, delay_ms, client=client, settings=settings, sleep=sleep)

    try:
        logger.info("Analyzing %s", normalized_url)
        page = timed("document", lambda: fetch(normalized_url, site_attempts, site_delay))
        if not page.success:
            raise SessionFetchExhausted(normalized_url, site_attempts, page.error)

        html = page.content
        soup = BeautifulSoup(html, "html.parser")
        logger.info("HTML parsed, base URL: %s", base_url)

        meta = extract_page_metadata(soup, normalized_url, base_url)
        assets = collect_assets(soup, base_url)

        animation_files: list[AnimationFile] = []

        css_blocks: list[str] = []
        for asset in assets.stylesheets:
            res = timed("stylesheets", lambda: fetch(asset.url, file_attempts, file_delay))
            if not res.success:
                css_blocks.append(_failure_marker(asset, file_attempts, res.error))
                warnings.append(f"Stylesheet unavailable: {asset.url}")
                continue
            info = classify(asset.url, res.content)
            _record_animation(animation_files, asset, res.content, info)
            css_blocks.append(_css_block(asset, res.content, info))

        for asset in assets.inline_styles:
            content = asset.content or ""
            info = classify(asset.url, content)
            _record_animation(animation_files, asset, content, info)
            css_blocks.append(_css_block(asset, content, info))

        js_blocks: list[str] = []
        for asset in assets.external_scripts:
            res = timed("scripts", lambda: fetch(asset.url, file_attempts, file_delay))
            if not res.success:
                js_blocks.append(_failure_marker(asset, file_attempts, res.error))
                warnings.append(f"Script unavailable: {asset.url}")
                continue
            info = classify(asset.url, res.content)
            _record_animation(animation_files, asset, res.content, info)
            js_blocks.append(_js_block(asset, res.content, info))

        for asset in assets.inline_scripts:
            content = asset.content or ""
            info = classify(asset.url, content)
            _record_animation(animation_files, asset, content, info)
            js_blocks.append(_js_block(asset, content, info))
    finally:
        if owns_client:
            client.close()

    full_css = "\n\n".join(css_blocks)
    full_js = SCRIPT_SEPARATOR.join(js_blocks)
    logger.info("High-confidence animation files found: %d", len(animation_files))

    required_cdn_urls = resolve_cdn(f.library for f in animation_files)
    tech_guesses = fingerprint(" ".join([full_js, full_css, html]), animation_files)
    logger.info("Technologies detected: %s", ", ".join(tech_guesses) or "none")

    return AnalysisResult(
        url=normalized_url,
        title=meta.title,
        description=meta.description,
        tech_guesses=tech_guesses,
        internal_links=meta.internal_links,
        external_links=meta.external_links,
        images=meta.images,
        stylesheets=assets.declared_stylesheets,
        open_graph_tags=meta.open_graph_tags,
        full_html=_reconstruct_body(html),
        full_css=full_css,
        full_js=full_js,
        base_url=base_url,
        animation_files=animation_files,
        required_cdn_urls=required_cdn_urls,
        analyzed_at=datetime.now(timezone.utc).isoformat(),
        timings_ms=timings,
        warnings=warnings,
    )
