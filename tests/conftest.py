from __future__ import annotations

from typing import Callable

import httpx
import pytest

from motioncheck_agent.config import Settings
from motioncheck_agent.models import AnalysisResult, AnimationFile

PROXY_BASE = "https://proxy.test"


class FakeProxy:
    """Proxy stand-in: serves ``pages`` by target URL, 500 for anything else."""

    def __init__(self, pages: dict[str, str] | None = None):
        self.pages = dict(pages or {})
        self.requests: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        target = request.url.params.get("url", "")
        self.requests.append(target)
        if target in self.pages:
            return httpx.Response(200, json={"contents": self.pages[target], "status": {"http_code": 200}})
        return httpx.Response(500, json={"error": "upstream unavailable"})

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def attempts_for(self, target: str) -> int:
        return self.requests.count(target)


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_proxy() -> Callable[..., FakeProxy]:
    return FakeProxy


@pytest.fixture
def settings() -> Settings:
    return Settings(proxy_base=PROXY_BASE)


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_result() -> Callable[..., AnalysisResult]:
    def _make(**overrides) -> AnalysisResult:
        data = dict(
            url="https://example.com/",
            title="Example",
            description="Not found",
            tech_guesses=[],
            internal_links=0,
            external_links=0,
            images=[],
            stylesheets=0,
            open_graph_tags=0,
            full_html='<body class="home"><h1>Hello</h1></body>',
            full_css="/* Inline style 0  */\nh1 { color: red; }",
            full_js="// Inline script 0 \n// Library: None\nconsole.log('hi');",
            base_url="https://example.com",
            animation_files=[],
            required_cdn_urls=[],
        )
        data.update(overrides)
        return AnalysisResult(**data)

    return _make


@pytest.fixture
def gsap_file() -> AnimationFile:
    return AnimationFile(
        url="https://example.com/js/anim.js",
        content="gsap.to('.hero', {opacity: 1});",
        kind="js",
        library="GSAP",
        confidence=100,
    )
