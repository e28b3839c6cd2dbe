from pydantic import BaseModel, Field
from typing import List, Optional, Dict


class TranscriptRequest(BaseModel):
    """Request body carrying a finalized transcript. Why available: Shared input of /key_points and /action_items."""

    transcript: str = Field(..., description="Full transcript text; lines are separated by newlines. May be empty.")


class AnalyzeRequest(TranscriptRequest):
    """Request body for /analyze and /analyze_async. Why available: Adds the enhance switch to a transcript request."""

    enhance: bool = Field(False, description="Annotate short key points and prefix the summary with a dated header")


class SummaryRequest(AnalyzeRequest):
    """Request body for /summary. Why available: Lets clients summarize with their own (e.g. edited) key points instead of extracted ones."""

    key_points: Optional[List[str]] = Field(None, description="Use these key points instead of extracting them")


class CategorizeRequest(BaseModel):
    """Request body for /categorize."""

    points: List[str] = Field(default_factory=list)


class KeyPointsResponse(BaseModel):
    """Response for /key_points. Why available: At most 8 unique points in transcript order."""

    key_points: List[str] = Field(default_factory=list)


class CategorizeResponse(BaseModel):
    """Response for /categorize: category label -> points. Empty categories are omitted."""

    categories: Dict[str, List[str]] = Field(default_factory=dict)


class SummaryResponse(BaseModel):
    """Response for /summary: meeting type, topic, key points, categorized points and composed text. Why available: Standard shape so UI can render the summary."""

    meeting_type: str = Field(..., description="Inferred meeting type e.g. 周例会")
    topic_phrase: str = Field(..., description="Inferred topic phrase e.g. 讨论了")
    key_points: List[str] = Field(default_factory=list)
    categorized_points: Dict[str, List[str]] = Field(default_factory=dict)
    composed_text: str


class SourceLine(BaseModel):
    """The transcript line an action item came from."""

    line_no: int = Field(..., ge=1)
    text: str


class ActionItem(BaseModel):
    """One action item (content, assignee, source line). Why available: Part of /action_items and /analyze so users see who should do what."""

    content: str
    assignee: str = Field(..., description="Resolved person, or 未指定 when none was found")
    source_line: SourceLine


class ActionItemsResponse(BaseModel):
    """Response for /action_items."""

    action_items: List[ActionItem] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    """Response for /analyze: summary and action items of one transcript. Why available: One call for clients that need everything."""

    summary: SummaryResponse
    action_items: List[ActionItem] = Field(default_factory=list)


class AnalyzeAsyncResponse(BaseModel):
    """Response for POST /analyze_async: job_id. Why available: Clients poll /jobs/{job_id} until done."""

    job_id: str
    deduplicated: bool = Field(False, description="True if an analysis of the same transcript was already queued or running")


class JobStatusResponse(BaseModel):
    """Response for GET /jobs/{job_id}: job state and result or error. Why available: Lets clients know when async analysis finished or failed."""

    job_id: str
    status: str
    result: Optional[AnalyzeResponse] = None
    error: Optional[str] = None


class LimitsResponse(BaseModel):
    """Response for GET /limits: engine and API limits. Why available: Lets UI display or enforce limits before sending transcripts."""

    max_transcript_kb: int = Field(..., description="Max transcript size in KB")
    max_key_points: int = Field(..., description="Max key points per transcript")
    min_key_point_chars: int = Field(..., description="Shortest accepted key point")
    key_point_max_chars: int = Field(..., description="Key points longer than this are truncated")
    lexicon_version: str
    rate_limit_requests: int = Field(..., description="Rate limit requests per window")
    rate_limit_window_seconds: int = Field(..., description="Rate limit window in seconds")
