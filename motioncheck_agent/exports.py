"""Export artifacts derived from an AnalysisResult."""

from __future__ import annotations

from .classifier import HIGH_CONFIDENCE_THRESHOLD, PERSISTENCE_THRESHOLD, format_confidence
from .models import AnalysisResult, AnimationExtract, AnimationQuality, ExportBundle
from .preview import build_preview, high_confidence_count

# artifact -> (download filename, media type)
EXPORT_FILES: dict[str, tuple[str, str]] = {
    "html": ("analyzed-site.html", "text/html"),
    "css": ("analyzed-site.css", "text/css"),
    "js": ("analyzed-site.js", "text/javascript"),
    "preview": ("complete-site-with-enhanced-animations.html", "text/html"),
    "animations_css": ("animations-only.css", "text/css"),
    "animations_js": ("animations-only.js", "text/javascript"),
    "prompt": ("design_prompt.txt", "text/plain"),
}


def extract_animations_only(result: AnalysisResult) -> AnimationExtract:
    css = "\n\n".join(
        f"/* {f.library or 'Animation'} - {f.url} - Confidence: {format_confidence(f.confidence)}% */\n{f.content}"
        for f in result.animation_files
        if f.kind == "css"
    )
    js = "\n\n".join(
        f"// {f.library or 'Animation'} - {f.url} - Confidence: {format_confidence(f.confidence)}%\n{f.content}"
        for f in result.animation_files
        if f.kind == "js"
    )
    return AnimationExtract(css=css, js=js)


def build_prompt(result: AnalysisResult) -> str:
    """The fixed design-cloning prompt consumed by downstream tools."""
    libraries = ", ".join(f.library for f in result.animation_files if f.library) or "None detected"
    cdn_urls = "\n".join(result.required_cdn_urls)
    return f"""Here is the HTML and CSS code representing the pixel-perfect design of the website I want to create. Adapt it completely to the specified framework (e.g., React, Svelte, Vue). Do not alter the design or omit any elements.

IMPORTANT: This site uses the following animation libraries: {libraries}

High-confidence animations detected: {high_confidence_count(result)}

Here are the CDN URLs for these libraries:
{cdn_urls}

Here is the HTML code:
```html
{result.full_html}
```

Here is the CSS code:
```css
{result.full_css}
```

Here is the JavaScript code (including animations):
```javascript
{result.full_js}
```"""


def analyze_animation_quality(result: AnalysisResult) -> AnimationQuality:
    files = result.animation_files
    high = [f for f in files if f.confidence > HIGH_CONFIDENCE_THRESHOLD]
    medium = [f for f in files if PERSISTENCE_THRESHOLD < f.confidence <= HIGH_CONFIDENCE_THRESHOLD]
    return AnimationQuality(
        total_files=len(files),
        high_confidence=len(high),
        medium_confidence=len(medium),
        css_animations=sum(1 for f in files if f.kind == "css"),
        js_animations=sum(1 for f in files if f.kind == "js"),
        libraries=list(dict.fromkeys(f.library for f in files if f.library)),
        has_inline_animations=any("inline" in f.url for f in files),
        estimated_completeness=min(100, len(high) * 30 + len(medium) * 15),
    )


def build_exports(result: AnalysisResult) -> ExportBundle:
    animations = extract_animations_only(result)
    return ExportBundle(
        html=result.full_html,
        css=result.full_css,
        js=result.full_js,
        preview=build_preview(result),
        animations_css=animations.css,
        animations_js=animations.js,
        prompt=build_prompt(result),
    )
