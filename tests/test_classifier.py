from __future__ import annotations

import pytest

from motioncheck_agent.cdn import CDN_MAP
from motioncheck_agent.classifier import (
    BLACKLIST,
    LIBRARY_RULES,
    classify,
    format_confidence,
    generic_score,
    is_persisted,
)

SAMPLES = [
    ("", ""),
    ("https://example.com/app.js", "console.log('hello world');"),
    ("https://example.com/vendor.js", "gsap.to(a); gsap.to(b); gsap.to(c); gsap gsap gsap"),
    ("inline-style-0", "@keyframes spin { to { transform: rotate(360deg); } }" * 20),
    ("https://cdn.example.com/three.min.js", "new THREE.Scene(); webgl webgl webgl"),
    ("https://www.googletagmanager.com/gtm.js", "gsap.registerPlugin(ScrollTrigger)"),
]


@pytest.mark.parametrize("url,content", SAMPLES)
def test_confidence_always_within_bounds(url, content):
    result = classify(url, content)
    assert 0 <= result.confidence <= 100


@pytest.mark.parametrize("host", BLACKLIST)
def test_blacklisted_urls_short_circuit(host):
    result = classify(f"https://{host}/script.js", "gsap.registerPlugin(ScrollTrigger); AOS.init();")

    assert result.is_animation is False
    assert result.confidence == 0
    assert result.library is None


def test_blacklist_match_is_case_insensitive():
    result = classify("https://WWW.GoogleTagManager.com/gtm.js", "lottie.loadAnimation({})")
    assert result.confidence == 0


def test_single_register_plugin_call_is_gsap():
    result = classify("", "gsap.registerPlugin")

    assert result.library == "GSAP"
    assert result.is_animation is True
    # 95 (registerPlugin rule) + 70 (bare "gsap" rule) over two matching rules.
    assert result.confidence == 82.5


def test_repeated_gsap_calls_reach_full_confidence():
    content = "gsap.registerPlugin(ScrollTrigger); gsap.to('.a', {x: 1}); gsap.from('.b', {y: 2});"

    result = classify("https://example.com/js/anim.js", content)

    assert result.library == "GSAP"
    assert result.confidence >= 95
    assert result.confidence == 100


def test_repeated_low_weight_matches_inflate_confidence():
    # One rule matching three times: score 3 * 60, match count 1.
    result = classify("", "webgl webgl webgl")

    assert result.library == "Three.js"
    assert result.confidence == 100


def test_no_matches_anywhere():
    result = classify("https://example.com/app.js", "console.log('hello world');")

    assert result.is_animation is False
    assert result.library is None
    assert result.confidence == 0


def test_aos_init_scores_top_weight():
    result = classify("inline-script-0", "AOS.init({duration: 800})")

    assert result.library == "AOS"
    assert result.confidence == 95
    assert is_persisted(result)


def test_best_library_wins():
    result = classify("", "lottie.loadAnimation({container: el})")

    assert result.library == "Lottie"
    assert result.confidence == 82.5


def test_generic_heuristic_is_capped_below_persistence():
    css = (
        "@keyframes spin { from { transform: rotate(0deg); } to { transform: rotate(360deg); } } "
        ".a { transition: opacity 1s ease-in-out; }"
    )

    result = classify("inline-style-0", css)

    assert result.is_animation is True
    assert result.library is None
    assert result.confidence == 50
    assert not is_persisted(result)


def test_generic_heuristic_needs_more_than_two_hits():
    assert generic_score("a { transition: color 1s; }") == 10
    result = classify("inline-style-0", "a { transition: color 1s; }")
    assert result.is_animation is False
    assert result.confidence == 0


def test_weak_library_match_is_not_animation():
    # Only the 60-weight rule fires: reported, but not above the threshold.
    result = classify("", "webgl")

    assert result.library == "Three.js"
    assert result.confidence == 60
    assert result.is_animation is False


def test_classify_is_pure():
    args = ("https://example.com/js/anim.js", "gsap.timeline().to('.x', {x: 10})")
    assert classify(*args) == classify(*args)


def test_every_library_has_a_cdn_entry():
    for rule in LIBRARY_RULES:
        assert rule.library in CDN_MAP


def test_format_confidence_matches_number_rendering():
    assert format_confidence(95) == "95"
    assert format_confidence(100.0) == "100"
    assert format_confidence(82.5) == "82.5"
