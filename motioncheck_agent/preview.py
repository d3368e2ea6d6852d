"""Reconstruction of a self-contained, sandboxable preview document."""

from __future__ import annotations

import html
import json
import re

from .classifier import HIGH_CONFIDENCE_THRESHOLD
from .models import AnalysisResult

_BASE_TAG_RE = re.compile(r"<base\b[^>]*>", re.IGNORECASE)

HELPER_CSS = """/* Enhanced Animation CSS helpers */
.animate-in { animation-play-state: running !important; }
body.animations-loaded .fade-in { animation: fadeIn 1s ease-in-out; }
body.animations-loaded .slide-up { animation: slideUp 1s ease-out; }

@keyframes fadeIn {
  from { opacity: 0; transform: translateY(20px); }
  to { opacity: 1; transform: translateY(0); }
}

@keyframes slideUp {
  from { opacity: 0; transform: translateY(50px); }
  to { opacity: 1; transform: translateY(0); }
}

* { animation-fill-mode: both; }
canvas { display: block; width: 100%; height: 100%; }"""

# Placeholders are substituted with str.replace so the JS braces stay literal.
_INIT_SCRIPT_TEMPLATE = """
// ENHANCED ANIMATION INITIALIZATION
console.log('Initializing animations...');
console.log('CDN URLs requested:', __CDN_URLS__);
console.log('High-confidence animations:', __HIGH_CONFIDENCE__);

function waitForCdnResources() {
  var tags = Array.prototype.slice.call(document.querySelectorAll('[data-cdn-resource]'));
  return Promise.all(tags.map(function (tag) {
    if (tag.dataset.cdnState) {
      return Promise.resolve(tag.dataset.cdnState);
    }
    return new Promise(function (resolve) {
      tag.addEventListener('load', function () { resolve('loaded'); }, { once: true });
      tag.addEventListener('error', function () { resolve('failed'); }, { once: true });
    });
  }));
}

async function initializeAnimations() {
  var states = await waitForCdnResources();
  var failed = states.filter(function (s) { return s === 'failed'; }).length;
  console.log('CDN resources settled:', states.length, 'failed:', failed);

  // 1. GSAP
  if (typeof gsap !== 'undefined') {
    console.log('GSAP ready - initializing animations...');
    try {
      gsap.set("*", {clearProps: "all"});

      const elementsToAnimate = document.querySelectorAll('h1, h2, h3, .hero, .title, [class*="fade"], [class*="slide"], [class*="animate"]');
      if (elementsToAnimate.length > 0) {
        gsap.from(elementsToAnimate, {
          opacity: 0,
          y: 50,
          duration: 1,
          stagger: 0.1,
          ease: "power2.out"
        });
      }

      if (typeof ScrollTrigger !== 'undefined') {
        gsap.registerPlugin(ScrollTrigger);
        gsap.utils.toArray('[data-scroll], .scroll-trigger').forEach(element => {
          gsap.from(element, {
            opacity: 0,
            y: 100,
            duration: 1,
            scrollTrigger: {
              trigger: element,
              start: "top 80%",
              end: "bottom 20%",
              toggleActions: "play none none reverse"
            }
          });
        });
      }
    } catch (e) {
      console.warn('GSAP initialization error:', e);
    }
  }

  // 2. Three.js
  if (typeof THREE !== 'undefined') {
    console.log('Three.js ready - initializing scene...');
    const canvas = document.querySelector('canvas') || document.querySelector('#three-canvas');
    if (canvas) {
      try {
        const scene = new THREE.Scene();
        const camera = new THREE.PerspectiveCamera(75, canvas.clientWidth / canvas.clientHeight, 0.1, 1000);
        const renderer = new THREE.WebGLRenderer({ canvas: canvas, alpha: true });
        renderer.setSize(canvas.clientWidth, canvas.clientHeight);

        const geometry = new THREE.BufferGeometry();
        const vertices = [];
        for (let i = 0; i < 1000; i++) {
          vertices.push(
            (Math.random() - 0.5) * 2000,
            (Math.random() - 0.5) * 2000,
            (Math.random() - 0.5) * 2000
          );
        }
        geometry.setAttribute('position', new THREE.Float32BufferAttribute(vertices, 3));

        const material = new THREE.PointsMaterial({ color: 0xffffff, size: 2 });
        const particles = new THREE.Points(geometry, material);
        scene.add(particles);
        camera.position.z = 1000;

        function animate() {
          requestAnimationFrame(animate);
          particles.rotation.x += 0.001;
          particles.rotation.y += 0.001;
          renderer.render(scene, camera);
        }
        animate();
        console.log('Three.js scene initialized');
      } catch (e) {
        console.warn('Three.js initialization failed:', e);
      }
    }
  }

  // 3. AOS
  if (typeof AOS !== 'undefined') {
    console.log('AOS ready - initializing...');
    try {
      AOS.init({
        duration: 1000,
        once: false,
        mirror: true,
        offset: 100
      });
    } catch (e) {
      console.warn('AOS initialization error:', e);
    }
  }

  // 4. Lottie
  if (typeof lottie !== 'undefined') {
    console.log('Lottie ready - initializing...');
    try {
      document.querySelectorAll('[data-lottie], .lottie, [data-animation-path]').forEach(el => {
        const path = el.dataset.lottie || el.dataset.animationPath;
        if (path) {
          lottie.loadAnimation({
            container: el,
            renderer: 'svg',
            loop: true,
            autoplay: true,
            path: path
          });
        }
      });
    } catch (e) {
      console.warn('Lottie initialization error:', e);
    }
  }

  document.body.classList.add('animations-loaded');
  console.log('Enhanced animation initialization complete');
}

if (document.readyState === 'loading') {
  document.addEventListener('DOMContentLoaded', initializeAnimations);
} else {
  initializeAnimations();
}
"""

# Each CDN tag records its own settle state so the barrier also sees
# resources that finished before the init script ran.
_SETTLE_ATTRS = (
    'data-cdn-resource onload="this.dataset.cdnState=\'loaded\'" '
    'onerror="this.dataset.cdnState=\'failed\'"'
)


def _guard_raw_text(content: str, tag: str) -> str:
    """Neutralize closing-tag sequences so ``content`` cannot end its block early."""
    return re.sub(rf"</({tag})", r"<\\/\1", content or "", flags=re.IGNORECASE)


def cdn_tag(url: str) -> str:
    src = html.escape(url, quote=True)
    if url.endswith(".css"):
        return f'    <link rel="stylesheet" href="{src}" crossorigin="anonymous" {_SETTLE_ATTRS}>'
    return f'    <script src="{src}" crossorigin="anonymous" {_SETTLE_ATTRS}></script>'


def high_confidence_count(result: AnalysisResult) -> int:
    return sum(1 for f in result.animation_files if f.confidence > HIGH_CONFIDENCE_THRESHOLD)


def animation_bundle(result: AnalysisResult, kind: str) -> str:
    return "\n\n".join(f.content for f in result.animation_files if f.kind == kind)


def init_script(result: AnalysisResult) -> str:
    return (
        _INIT_SCRIPT_TEMPLATE
        .replace("__CDN_URLS__", json.dumps(result.required_cdn_urls))
        .replace("__HIGH_CONFIDENCE__", str(high_confidence_count(result)))
    )


def build_preview(result: AnalysisResult) -> str:
    cdn_tags = "\n".join(cdn_tag(url) for url in result.required_cdn_urls)
    animation_css = _guard_raw_text(animation_bundle(result, "css"), "style")
    regular_css = _guard_raw_text(result.full_css, "style")
    animation_js = _guard_raw_text(animation_bundle(result, "js"), "script")
    regular_js = _guard_raw_text(result.full_js, "script")
    body = _BASE_TAG_RE.sub("", result.full_html or "")
    base_href = html.escape(result.base_url, quote=True)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <base href="{base_href}">
    <title>UI Preview with Enhanced Animation Detection</title>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">

    <!-- CDN Libraries for Animations -->
{cdn_tags}

    <!-- Animation CSS -->
    <style id="animation-styles">
{animation_css}

{HELPER_CSS}
    </style>

    <!-- Regular CSS -->
    <style id="regular-styles">
{regular_css}
    </style>
</head>
<body>
{body}

<!-- Enhanced Animation Initialization Script -->
<script>
{_guard_raw_text(init_script(result), "script")}
</script>

<!-- Animation JavaScript -->
<script>
{animation_js}
</script>

<!-- Regular JavaScript -->
<script>
{regular_js}
</script>

<script>
console.log('Enhanced preview ready');
console.log('Animation files detected:', {len(result.animation_files)});
console.log('High-confidence animations:', {high_confidence_count(result)});
</script>
</body>
</html>"""
