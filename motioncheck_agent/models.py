from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AssetKind = Literal["css", "js"]
AssetOrigin = Literal["external", "inline"]


class AnalyzeRequest(BaseModel):
    url: str = Field(..., min_length=1)
    # Left unset, the configured defaults apply (15 x 1s per asset, 10 x 2s for the page).
    max_file_attempts: int | None = Field(None, ge=1, le=50)
    file_delay_ms: int | None = Field(None, ge=0, le=60000)
    max_site_attempts: int | None = Field(None, ge=1, le=50)
    site_delay_ms: int | None = Field(None, ge=0, le=60000)


class ClassifyRequest(BaseModel):
    url: str = ""
    content: str = ""


class ResolveCdnRequest(BaseModel):
    libraries: list[str] = Field(default_factory=list)


class FingerprintRequest(BaseModel):
    text: str = ""


class FetchResult(BaseModel):
    success: bool
    content: str = ""
    error: str | None = None
    attempts: int = 0


class Asset(BaseModel):
    url: str
    origin: AssetOrigin
    kind: AssetKind
    index: int | None = None
    # Literal text of inline assets; external assets are fetched later.
    content: str | None = None


class Classification(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_animation: bool
    library: str | None = None
    confidence: float = Field(0, ge=0, le=100)


class AnimationFile(BaseModel):
    url: str
    content: str
    kind: AssetKind
    is_animation: bool = True
    library: str | None = None
    confidence: float = Field(..., ge=0, le=100)


class AnalysisResult(BaseModel):
    url: str
    title: str
    description: str
    tech_guesses: list[str]
    internal_links: int
    external_links: int
    images: list[str]
    stylesheets: int
    open_graph_tags: int
    full_html: str
    full_css: str
    full_js: str
    base_url: str
    animation_files: list[AnimationFile]
    required_cdn_urls: list[str]

    # metadata
    analyzed_at: str | None = None
    timings_ms: dict[str, int] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)


class AnalysisSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: int
    url: str
    status: Literal["completed", "failed"]
    result: AnalysisResult | None = None
    error: str | None = None
    started_at: str
    finished_at: str


class AnimationQuality(BaseModel):
    total_files: int
    high_confidence: int
    medium_confidence: int
    css_animations: int
    js_animations: int
    libraries: list[str]
    has_inline_animations: bool
    estimated_completeness: int


class AnimationExtract(BaseModel):
    css: str
    js: str


class ExportBundle(BaseModel):
    html: str
    css: str
    js: str
    preview: str
    animations_css: str
    animations_js: str
    prompt: str
