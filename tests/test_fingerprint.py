from __future__ import annotations

from motioncheck_agent.fingerprint import fingerprint
from motioncheck_agent.models import AnimationFile


def test_signatures_found_anywhere():
    text = '<div data-aos="fade-up"></div><script src="/bootstrap.min.js"></script> jQuery $(".x")'

    found = fingerprint(text)

    assert "AOS" in found
    assert "Bootstrap" in found
    assert "jQuery" in found
    assert "React" not in found


def test_empty_text():
    assert fingerprint("") == []


def test_order_follows_signature_table():
    found = fingerprint("swiper tailwind gsap")
    assert found == ["GSAP", "Tailwind", "Swiper"]


def test_classifier_libraries_are_merged_without_duplicates():
    files = [
        AnimationFile(url="a.js", content="", kind="js", library="GSAP", confidence=90),
        AnimationFile(url="b.js", content="", kind="js", library="Anime.js", confidence=95),
        AnimationFile(url="c.js", content="", kind="js", library="Anime.js", confidence=95),
        AnimationFile(url="d.css", content="", kind="css", library=None, confidence=70),
    ]

    found = fingerprint("gsap", files)

    assert found == ["GSAP", "Anime.js"]
