import logging
from fastapi import (
    FastAPI,
    HTTPException,
    Request,
    BackgroundTasks,
)

from app.core.config import settings
from app.models.schemas import (
    TranscriptRequest,
    AnalyzeRequest,
    SummaryRequest,
    CategorizeRequest,
    KeyPointsResponse,
    CategorizeResponse,
    SummaryResponse,
    ActionItemsResponse,
    AnalyzeResponse,
    AnalyzeAsyncResponse,
    JobStatusResponse,
    LimitsResponse,
)

from app.lexicons.loader import get_lexicons
from app.extract.key_points import extract_key_points
from app.extract.categorizer import categorize
from app.extract.summarizer import summarize
from app.extract.tasks import extract_action_items
from app.ingest.jobs import JOBS
from app.ingest.worker import (
    run_analysis,
    summary_to_response,
    action_items_to_response,
    categories_to_payload,
)

from app.guardrails.errors import as_http_500, transcript_too_large
from app.guardrails.rate_limit import SimpleRateLimiter
from app.observability.middleware import RequestTimingMiddleware, get_request_id


# -------------------------
# App setup
# -------------------------

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Broken lexicon files must stop the app at startup, not fail individual requests.
LEXICONS = get_lexicons()

app = FastAPI(title="Meeting Transcript Analysis")
app.add_middleware(RequestTimingMiddleware)

rate_limiter = SimpleRateLimiter(
    max_requests=settings.rate_limit_requests,
    window_seconds=settings.rate_limit_window_seconds,
)


def _check_size(transcript: str) -> None:
    """Reject transcripts over MAX_TRANSCRIPT_KB (400)."""
    size = len(transcript.encode("utf-8"))
    if size > settings.max_transcript_kb * 1024:
        raise transcript_too_large(size, settings.max_transcript_kb)


# -------------------------
# Root
# -------------------------

@app.get("/")
def root():
    """Returns a minimal welcome payload with app name and docs URL.
    Why available: Gives clients and load balancers a simple root endpoint to confirm the API is running."""
    return {"app": "Meeting Transcript Analysis", "docs": "/docs"}


@app.get("/health")
def health():
    """Returns 200 OK with status and the loaded lexicon version. Used by load balancers and probes."""
    return {"status": "ok", "lexicon_version": LEXICONS.version}


# -------------------------
# Limits (for UI / clients)
# -------------------------

@app.get("/limits", response_model=LimitsResponse)
def limits(request: Request):
    """Returns current limits (transcript size, key-point count/length, lexicon version, rate limit window).
    Why available: Lets the UI and clients display or enforce limits before sending a transcript."""
    rate_limiter.check(request)
    return LimitsResponse(
        max_transcript_kb=settings.max_transcript_kb,
        max_key_points=settings.max_key_points,
        min_key_point_chars=settings.min_key_point_chars,
        key_point_max_chars=settings.key_point_max_chars,
        lexicon_version=LEXICONS.version,
        rate_limit_requests=settings.rate_limit_requests,
        rate_limit_window_seconds=settings.rate_limit_window_seconds,
    )


# -------------------------
# Key points / categories
# -------------------------

@app.post("/key_points", response_model=KeyPointsResponse)
def key_points(req: TranscriptRequest, request: Request):
    """Extracts up to 8 unique key points from the transcript, in line order."""
    rate_limiter.check(request)
    _check_size(req.transcript)
    try:
        return KeyPointsResponse(key_points=extract_key_points(req.transcript, LEXICONS))
    except Exception as e:
        raise as_http_500(e, get_request_id(request))


@app.post("/categorize", response_model=CategorizeResponse)
def categorize_points(req: CategorizeRequest, request: Request):
    """Buckets the given points into 决策 / 问题 / 计划 / 执行 / 其他; empty buckets are omitted."""
    rate_limiter.check(request)
    try:
        return CategorizeResponse(categories=categories_to_payload(categorize(req.points, LEXICONS)))
    except Exception as e:
        raise as_http_500(e, get_request_id(request))


# -------------------------
# Summary
# -------------------------

@app.post("/summary", response_model=SummaryResponse)
def summary(req: SummaryRequest, request: Request):
    """Composes the meeting summary. Uses key_points from the request when given, otherwise extracts them from the transcript.
    Why available: Core feature so users get a short summary without reading the full transcript."""
    rate_limiter.check(request)
    _check_size(req.transcript)

    try:
        result = summarize(req.transcript, req.key_points, enhance=req.enhance, lexicons=LEXICONS)
        return summary_to_response(result)
    except Exception as e:
        raise as_http_500(e, get_request_id(request))


# -------------------------
# Action items
# -------------------------

@app.post("/action_items", response_model=ActionItemsResponse)
def action_items(req: TranscriptRequest, request: Request):
    """Extracts action items (content, assignee, source line) from the transcript, at most one per line."""
    rate_limiter.check(request)
    _check_size(req.transcript)
    try:
        items = extract_action_items(req.transcript, LEXICONS)
        return ActionItemsResponse(action_items=action_items_to_response(items))
    except Exception as e:
        raise as_http_500(e, get_request_id(request))


# -------------------------
# Full analysis
# -------------------------

@app.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest, request: Request):
    """Runs the whole pipeline: summary (with key points and categories) and action items."""
    rate_limiter.check(request)
    _check_size(req.transcript)
    try:
        return run_analysis(req.transcript, enhance=req.enhance)
    except Exception as e:
        raise as_http_500(e, get_request_id(request))


@app.post("/analyze_async", response_model=AnalyzeAsyncResponse)
def analyze_async(req: AnalyzeRequest, request: Request, background_tasks: BackgroundTasks):
    """Enqueues a background analysis job and returns job_id. Client polls GET /jobs/{job_id} for status (queued / running / done / failed).
    If the same transcript is already queued or running, that job's id is returned and nothing new is started."""
    rate_limiter.check(request)
    _check_size(req.transcript)

    job, created = JOBS.submit(req.transcript, enhance=req.enhance)
    if not created:
        logger.info("analysis_deduplicated", extra={"job_id": job.job_id})
        return AnalyzeAsyncResponse(job_id=job.job_id, deduplicated=True)

    job_id = job.job_id
    transcript, enhance = req.transcript, req.enhance

    def _runner():
        """Background task: run analysis and update job status."""
        try:
            JOBS.mark_running(job_id)
            JOBS.mark_done(job_id, run_analysis(transcript, enhance=enhance))
        except Exception as e:
            logger.warning("analysis_job_failed", exc_info=True, extra={"job_id": job_id})
            JOBS.mark_failed(job_id, str(e))

    background_tasks.add_task(_runner)

    return AnalyzeAsyncResponse(job_id=job_id)


# -------------------------
# Job Status
# -------------------------

@app.get("/jobs/{job_id}", response_model=JobStatusResponse)
def job_status(job_id: str, request: Request):
    """Returns the status of an async analysis job, plus the result when done or the error if failed."""
    rate_limiter.check(request)

    job = JOBS.get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return JobStatusResponse(
        job_id=job.job_id,
        status=job.status,
        result=job.result,
        error=job.error,
    )
