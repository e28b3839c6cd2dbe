from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from app.extract.categorizer import Category
from app.extract.summarizer import MeetingSummary, summarize
from app.extract.tasks import ActionItem, extract_action_items
from app.lexicons.loader import get_lexicons
from app.models.schemas import (
    ActionItem as ActionItemOut,
    AnalyzeResponse,
    SourceLine,
    SummaryResponse,
)


def categories_to_payload(categories: Mapping[Category, Sequence[str]]) -> Dict[str, List[str]]:
    """Key categorized points by their display label (决策, 问题, ...), keeping category order."""
    return {c.value: list(points) for c, points in categories.items()}


def summary_to_response(summary: MeetingSummary) -> SummaryResponse:
    """Convert an engine MeetingSummary into the API response model."""
    return SummaryResponse(
        meeting_type=summary.meeting_type,
        topic_phrase=summary.topic_phrase,
        key_points=list(summary.key_points),
        categorized_points=categories_to_payload(summary.categorized_points),
        composed_text=summary.composed_text,
    )


def action_items_to_response(items: List[ActionItem]) -> List[ActionItemOut]:
    """Convert engine ActionItems into API models (source line number and text included)."""
    return [
        ActionItemOut(
            content=item.content,
            assignee=item.assignee,
            source_line=SourceLine(line_no=item.source_line.line_no, text=item.source_line.text),
        )
        for item in items
    ]


def run_analysis(transcript: str, enhance: bool = False, meeting_date: Optional[date] = None) -> AnalyzeResponse:
    """Summarize a transcript and extract its action items. Returns an AnalyzeResponse.
    Why available: Single entry point for sync and async analysis so /analyze, background /analyze_async and the CLI use the same pipeline."""
    lexicons = get_lexicons()
    summary = summarize(transcript, enhance=enhance, meeting_date=meeting_date, lexicons=lexicons)
    items = extract_action_items(transcript, lexicons)
    return AnalyzeResponse(
        summary=summary_to_response(summary),
        action_items=action_items_to_response(items),
    )
