from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from motioncheck_agent.collector import base_origin, collect_assets, extract_page_metadata, resolve_url
from motioncheck_agent.errors import MalformedInput

PAGE = """<!DOCTYPE html>
<html><head>
<title>Demo</title>
<meta name="description" content="A demo page">
<meta property="og:title" content="Demo">
<meta property="og:image" content="/og.png">
<link rel="stylesheet" href="/css/main.css">
<link rel="stylesheet" href="https://cdn.example.net/lib.css">
<link rel="icon" href="/favicon.ico">
<style>.a { color: red; }</style>
</head>
<body class="home dark" data-x="1">
<a href="/about">About</a>
<a href="https://other.org/">Other</a>
<a href="#top">Top</a>
<img src="/img/a.png"><img alt="no source">
<script src="/js/app.js"></script>
<script>console.log(1)</script>
<script></script>
<style>.b { color: blue; }</style>
</body></html>"""


@pytest.fixture
def soup() -> BeautifulSoup:
    return BeautifulSoup(PAGE, "html.parser")


def test_stylesheets_resolved_against_origin(soup):
    assets = collect_assets(soup, "https://example.com")

    assert [a.url for a in assets.stylesheets] == [
        "https://example.com/css/main.css",
        "https://cdn.example.net/lib.css",
    ]
    assert all(a.origin == "external" and a.kind == "css" for a in assets.stylesheets)
    assert assets.declared_stylesheets == 2


def test_inline_styles_indexed_in_discovery_order(soup):
    assets = collect_assets(soup, "https://example.com")

    assert [(a.index, a.url) for a in assets.inline_styles] == [(0, "inline-style-0"), (1, "inline-style-1")]
    assert assets.inline_styles[0].content == ".a { color: red; }"
    assert assets.inline_styles[1].origin == "inline"


def test_scripts_partitioned_and_empty_inline_skipped(soup):
    assets = collect_assets(soup, "https://example.com")

    assert [a.url for a in assets.external_scripts] == ["https://example.com/js/app.js"]
    assert len(assets.inline_scripts) == 1
    inline = assets.inline_scripts[0]
    assert inline.index == 0
    assert inline.url == "inline-script-0"
    assert inline.kind == "js"
    assert inline.content == "console.log(1)"


def test_unresolvable_href_is_dropped():
    soup = BeautifulSoup(
        '<link rel="stylesheet" href="http://[broken"><link rel="stylesheet" href="/ok.css">',
        "html.parser",
    )

    assets = collect_assets(soup, "https://example.com")

    assert [a.url for a in assets.stylesheets] == ["https://example.com/ok.css"]
    assert assets.declared_stylesheets == 2


def test_page_metadata(soup):
    meta = extract_page_metadata(soup, "https://example.com/", "https://example.com")

    assert meta.title == "Demo"
    assert meta.description == "A demo page"
    assert meta.internal_links == 2
    assert meta.external_links == 1
    assert meta.images == ["https://example.com/img/a.png"]
    assert meta.open_graph_tags == 2


def test_page_metadata_fallbacks():
    soup = BeautifulSoup("<body><p>bare</p></body>", "html.parser")

    meta = extract_page_metadata(soup, "https://example.com/", "https://example.com")

    assert meta.title == "No title found"
    assert meta.description == "Not found"
    assert meta.internal_links == 0
    assert meta.images == []


def test_base_origin_keeps_explicit_port():
    assert base_origin("https://example.com/a/b?q=1") == "https://example.com"
    assert base_origin("http://localhost.test:8080/x") == "http://localhost.test:8080"


def test_resolve_url_rejects_garbage():
    with pytest.raises(MalformedInput):
        resolve_url("http://[broken", "https://example.com")
