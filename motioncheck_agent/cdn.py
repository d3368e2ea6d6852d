from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

# Resources needed to run each library standalone, in load order.
CDN_MAP: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "GSAP": (
        "https://cdnjs.cloudflare.com/ajax/libs/gsap/3.12.2/gsap.min.js",
        "https://cdnjs.cloudflare.com/ajax/libs/gsap/3.12.2/ScrollTrigger.min.js",
        "https://cdnjs.cloudflare.com/ajax/libs/gsap/3.12.2/TextPlugin.min.js",
        "https://cdnjs.cloudflare.com/ajax/libs/gsap/3.12.2/MotionPathPlugin.min.js",
    ),
    "Three.js": (
        "https://cdnjs.cloudflare.com/ajax/libs/three.js/r128/three.min.js",
        "https://cdnjs.cloudflare.com/ajax/libs/dat-gui/0.7.9/dat.gui.min.js",
    ),
    "Lottie": ("https://cdnjs.cloudflare.com/ajax/libs/lottie-web/5.12.2/lottie.min.js",),
    "AOS": (
        "https://cdnjs.cloudflare.com/ajax/libs/aos/2.3.4/aos.js",
        "https://cdnjs.cloudflare.com/ajax/libs/aos/2.3.4/aos.css",
    ),
    "Anime.js": ("https://cdnjs.cloudflare.com/ajax/libs/animejs/3.2.1/anime.min.js",),
    "Locomotive Scroll": (
        "https://cdn.jsdelivr.net/npm/locomotive-scroll@4.1.4/dist/locomotive-scroll.min.js",
        "https://cdn.jsdelivr.net/npm/locomotive-scroll@4.1.4/dist/locomotive-scroll.min.css",
    ),
    "Barba.js": ("https://cdnjs.cloudflare.com/ajax/libs/barba.js/1.0.0/barba.min.js",),
    "ScrollMagic": (
        "https://cdnjs.cloudflare.com/ajax/libs/ScrollMagic/2.0.8/ScrollMagic.min.js",
        "https://cdnjs.cloudflare.com/ajax/libs/ScrollMagic/2.0.8/plugins/animation.gsap.min.js",
    ),
    "Velocity.js": ("https://cdnjs.cloudflare.com/ajax/libs/velocity/2.0.6/velocity.min.js",),
    "Swiper": (
        "https://cdn.jsdelivr.net/npm/swiper@8/swiper-bundle.min.js",
        "https://cdn.jsdelivr.net/npm/swiper@8/swiper-bundle.min.css",
    ),
    "Particles": ("https://cdn.jsdelivr.net/npm/particles.js@2.0.0/particles.min.js",),
    # Ships as an ES module bound to React; there is no standalone bundle to inject.
    "Framer Motion": (),
})


def library_cdn(library: str) -> list[str]:
    return list(CDN_MAP.get(library, ()))


def resolve_cdn(libraries: Iterable[str | None]) -> list[str]:
    """Concatenate the CDN lists of ``libraries`` in first-seen order.

    Library names are de-duplicated; URLs shared by two libraries are not.
    """
    urls: list[str] = []
    for library in dict.fromkeys(lib for lib in libraries if lib):
        urls.extend(CDN_MAP.get(library, ()))
    return urls
