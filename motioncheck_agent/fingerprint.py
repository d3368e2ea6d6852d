from __future__ import annotations

import re
from typing import Iterable

from .models import AnimationFile

TECH_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (name, re.compile(pattern, re.IGNORECASE))
    for name, pattern in (
        ("React", r"react|jsx|createelement"),
        ("Vue", r"vue\.js|v-if|v-for|\{\{.*\}\}"),
        ("Angular", r"angular|ng-|@component"),
        ("jQuery", r"jquery|\$\("),
        ("GSAP", r"gsap|greensock|tweenmax|tweenlite"),
        ("Framer Motion", r"framer-motion|motion\."),
        ("Lottie", r"lottie|bodymovin"),
        ("Three.js", r"three\.js|webgl"),
        ("Bootstrap", r"bootstrap"),
        ("Tailwind", r"tailwind"),
        ("AOS", r"aos\.js|data-aos"),
        ("Locomotive Scroll", r"locomotive-scroll"),
        ("Barba.js", r"barba\.js"),
        ("Swiper", r"swiper"),
        ("Particles", r"particles"),
    )
)


def fingerprint(text: str, animation_files: Iterable[AnimationFile] = ()) -> list[str]:
    """Technologies whose signature appears anywhere in ``text``.

    Libraries already attributed to animation files are appended afterwards,
    keeping first-seen order and skipping names already present.
    """
    text = text or ""
    found = [name for name, pattern in TECH_PATTERNS if pattern.search(text)]
    for f in animation_files:
        if f.library and f.library not in found:
            found.append(f.library)
    return found
