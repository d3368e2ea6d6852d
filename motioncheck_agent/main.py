from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response

from .analyzer import analyze
from .cdn import resolve_cdn
from .classifier import classify
from .config import get_settings
from .errors import AnalysisError, MalformedInput
from .exports import EXPORT_FILES, analyze_animation_quality, build_exports
from .fingerprint import fingerprint
from .models import (
    AnalysisResult,
    AnalysisSession,
    AnalyzeRequest,
    AnimationQuality,
    Classification,
    ClassifyRequest,
    ExportBundle,
    FingerprintRequest,
    ResolveCdnRequest,
)
from .preview import build_preview
from .sessions import SessionTracker

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("motioncheck_agent")

app = FastAPI(title="MotionCheck Python Agent", version="0.1.0")

sessions = SessionTracker()

# For local dev, this defaults to allowing http://localhost:3000.
# In production, set MOTIONCHECK_CORS_ORIGINS to your deployed frontend origins.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz")
def healthz():
    return {"ok": True}


@app.post("/analyze", response_model=AnalysisSession)
def analyze_endpoint(req: AnalyzeRequest):
    session_id = sessions.start(req.url)
    try:
        result = analyze(req, settings=settings)
    except MalformedInput as e:
        sessions.finish(session_id, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except AnalysisError as e:
        logger.error("Session %d failed: %s", session_id, e)
        sessions.finish(session_id, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.exception("Session %d crashed", session_id)
        sessions.finish(session_id, error=str(e) or type(e).__name__)
        raise

    session, published = sessions.finish(session_id, result=result)
    if not published:
        logger.warning("Session %d finished after a newer session; not published", session_id)
    return session


@app.get("/session", response_model=AnalysisSession)
def current_session():
    session = sessions.current()
    if session is None:
        raise HTTPException(status_code=404, detail="No analysis has completed yet.")
    return session


@app.post("/classify", response_model=Classification)
def classify_endpoint(req: ClassifyRequest):
    return classify(req.url, req.content)


@app.post("/resolve-cdn")
def resolve_cdn_endpoint(req: ResolveCdnRequest):
    return {"urls": resolve_cdn(req.libraries)}


@app.post("/fingerprint")
def fingerprint_endpoint(req: FingerprintRequest):
    return {"technologies": fingerprint(req.text)}


@app.post("/preview", response_class=HTMLResponse)
def preview_endpoint(result: AnalysisResult):
    return HTMLResponse(content=build_preview(result), headers={"cache-control": "no-store"})


@app.post("/quality", response_model=AnimationQuality)
def quality_endpoint(result: AnalysisResult):
    return analyze_animation_quality(result)


@app.post("/exports", response_model=ExportBundle)
def exports_endpoint(result: AnalysisResult):
    return build_exports(result)


@app.post("/exports/{artifact}")
def export_download(artifact: str, result: AnalysisResult):
    if artifact not in EXPORT_FILES:
        raise HTTPException(status_code=404, detail=f"Unknown artifact: {artifact}")
    filename, media_type = EXPORT_FILES[artifact]
    content = getattr(build_exports(result), artifact)
    return Response(
        content=content,
        media_type=media_type,
        headers={"content-disposition": f'attachment; filename="{filename}"'},
    )
