"""Weighted-pattern classification of CSS/JS assets by animation library."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import Classification

# Anything above this is kept as an AnimationFile by the orchestrator.
PERSISTENCE_THRESHOLD = 60
HIGH_CONFIDENCE_THRESHOLD = 80

GENERIC_MATCH_WEIGHT = 10
GENERIC_TRIGGER_SCORE = 20
GENERIC_CONFIDENCE_CAP = 50

# Analytics, chat widgets and ad networks.
BLACKLIST = (
    "googletagmanager",
    "google-analytics",
    "gtag",
    "facebook.net",
    "doubleclick",
    "adsystem",
    "googlesyndication",
    "hotjar",
    "intercom",
    "zendesk",
    "crisp.chat",
    "tawk.to",
)


@dataclass(frozen=True)
class ClassificationRule:
    library: str
    rules: tuple[tuple[re.Pattern[str], int], ...]


def _rule(library: str, *rules: tuple[str, int]) -> ClassificationRule:
    return ClassificationRule(
        library=library,
        rules=tuple((re.compile(p, re.IGNORECASE), weight) for p, weight in rules),
    )


LIBRARY_RULES: tuple[ClassificationRule, ...] = (
    _rule(
        "GSAP",
        (r"gsap\.registerPlugin|gsap\.timeline|gsap\.to|gsap\.from", 95),
        (r"greensock|tweenmax|tweenlite|timelinemax", 90),
        (r"scrolltrigger|motionpath|drawsvg", 85),
        (r"gsap", 70),
    ),
    _rule(
        "Three.js",
        (r"new THREE\.|THREE\.Scene|THREE\.WebGLRenderer", 95),
        (r"PerspectiveCamera|BufferGeometry|MeshBasicMaterial", 90),
        (r"three\.js|three\.min\.js", 85),
        (r"webgl|canvas.*3d", 60),
    ),
    _rule(
        "Lottie",
        (r"lottie\.loadAnimation|bodymovin", 95),
        (r"lottie-web|lottie\.js", 85),
        (r"lottie", 70),
    ),
    _rule(
        "AOS",
        (r"AOS\.init|data-aos", 95),
        (r"aos\.js|animate.*on.*scroll", 85),
    ),
    _rule(
        "Anime.js",
        (r"anime\(\{|anime\.timeline", 95),
        (r"anime\.js|animejs", 85),
    ),
    _rule(
        "Locomotive Scroll",
        (r"new LocomotiveScroll|data-scroll", 95),
        (r"locomotive-scroll", 85),
    ),
    _rule(
        "Framer Motion",
        (r"framer-motion|motion\.|useAnimation|AnimatePresence", 95),
    ),
)

# Library-agnostic animation idioms, consulted only when no library matched.
GENERIC_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"@keyframes|animation:|transform:|transition:",
        r"requestAnimationFrame|setInterval.*animation",
        r"\.animate\(|\.transition\(",
        r"transform.*translate|rotate|scale",
        r"opacity.*transition|visibility.*transition",
        r"cubic-bezier|ease-in|ease-out",
    )
)


def _count(pattern: re.Pattern[str], text: str) -> int:
    return sum(1 for _ in pattern.finditer(text))


def is_blacklisted(url: str) -> bool:
    lowered = (url or "").lower()
    return any(item in lowered for item in BLACKLIST)


def score_library(rule: ClassificationRule, text: str) -> float:
    """Confidence for one library over already-lowercased ``text``.

    Each matching pattern adds ``weight * occurrences`` to the score but only
    one to the match count, so repeated hits push the ratio up.
    """
    total_score = 0
    match_count = 0
    for pattern, weight in rule.rules:
        hits = _count(pattern, text)
        if hits:
            total_score += weight * hits
            match_count += 1
    if match_count == 0:
        return 0
    return min(100, total_score / match_count)


def generic_score(content: str) -> int:
    return sum(_count(p, content) for p in GENERIC_PATTERNS) * GENERIC_MATCH_WEIGHT


def classify(url: str, content: str) -> Classification:
    url_lower = (url or "").lower()
    content_lower = (content or "").lower()

    if is_blacklisted(url_lower):
        return Classification(is_animation=False, confidence=0)

    haystack = url_lower + " " + content_lower
    best_library = ""
    best_confidence: float = 0
    for rule in LIBRARY_RULES:
        confidence = score_library(rule, haystack)
        if confidence > best_confidence:
            best_library, best_confidence = rule.library, confidence

    if best_confidence == 0:
        score = generic_score(content_lower)
        if score > GENERIC_TRIGGER_SCORE:
            return Classification(is_animation=True, confidence=min(GENERIC_CONFIDENCE_CAP, score))

    return Classification(
        is_animation=best_confidence > PERSISTENCE_THRESHOLD,
        library=best_library or None,
        confidence=best_confidence,
    )


def is_persisted(classification: Classification) -> bool:
    return classification.is_animation and classification.confidence > PERSISTENCE_THRESHOLD


def format_confidence(value: float) -> str:
    """Render a score the way the downstream text artifacts expect (95, 82.5)."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
