from __future__ import annotations

from motioncheck_agent.cdn import CDN_MAP, library_cdn, resolve_cdn

GSAP_URLS = [
    "https://cdnjs.cloudflare.com/ajax/libs/gsap/3.12.2/gsap.min.js",
    "https://cdnjs.cloudflare.com/ajax/libs/gsap/3.12.2/ScrollTrigger.min.js",
    "https://cdnjs.cloudflare.com/ajax/libs/gsap/3.12.2/TextPlugin.min.js",
    "https://cdnjs.cloudflare.com/ajax/libs/gsap/3.12.2/MotionPathPlugin.min.js",
]


def test_gsap_resolves_to_four_urls_in_order():
    assert resolve_cdn({"GSAP"}) == GSAP_URLS


def test_empty_input():
    assert resolve_cdn(set()) == []
    assert resolve_cdn([]) == []


def test_unknown_libraries_contribute_nothing():
    assert resolve_cdn(["Nope", "GSAP", "Framer Motion"]) == GSAP_URLS


def test_library_names_deduplicated_in_first_seen_order():
    urls = resolve_cdn(["AOS", "GSAP", "AOS", None, "GSAP"])

    assert urls == library_cdn("AOS") + GSAP_URLS
    assert urls[1].endswith("aos.css")


def test_library_cdn_returns_a_copy():
    urls = library_cdn("Swiper")
    urls.append("https://evil.example/x.js")

    assert len(CDN_MAP["Swiper"]) == 2
    assert library_cdn("Unknown") == []
