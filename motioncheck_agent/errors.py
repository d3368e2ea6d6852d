from __future__ import annotations


class MotionCheckError(Exception):
    """Base class for errors raised by the analysis engine."""


class TransientFetchError(MotionCheckError):
    """A single proxy attempt failed. Retried by the fetcher, never surfaced."""


class MalformedInput(MotionCheckError, ValueError):
    """A URL could not be parsed or resolved."""


class AnalysisError(MotionCheckError):
    """An analysis session produced no result."""


class SessionFetchExhausted(AnalysisError):
    def __init__(self, url: str, attempts: int, last_error: str | None = None):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        super().__init__("Analysis failed after multiple attempts.")
