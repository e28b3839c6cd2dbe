import logging
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from app.extract.categorizer import Category, categorize
from app.extract.key_points import enhance_key_points, extract_key_points
from app.lexicons.loader import Lexicons, get_lexicons

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeetingSummary:
    """Result of summarizing one transcript: inferred meeting type and topic, key points, categorized points and the composed text.
    Why available: Returned by summarize() and serialized by the /summary and /analyze endpoints."""

    meeting_type: str
    topic_phrase: str
    key_points: Tuple[str, ...]
    categorized_points: Mapping[Category, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    composed_text: str = ""


def _first_match(transcript: str, table: Tuple[Tuple[str, str], ...], default: str) -> str:
    """Return the label of the first keyword (in table order) contained in the transcript, else default."""
    for keyword, label in table:
        if keyword in transcript:
            return label
    return default


def infer_topic(transcript: str, lexicons: Optional[Lexicons] = None) -> str:
    """Return the topic phrase for the transcript (e.g. "讨论了"), or the generic fallback phrase."""
    lx = lexicons or get_lexicons()
    return _first_match(transcript or "", lx.topics, lx.default_topic)


def infer_meeting_type(transcript: str, lexicons: Optional[Lexicons] = None) -> str:
    """Return the meeting type label for the transcript (e.g. "周例会"), or the generic "会议"."""
    lx = lexicons or get_lexicons()
    return _first_match(transcript or "", lx.meeting_types, lx.default_meeting_type)


def _body(key_points: List[str], lx: Lexicons) -> List[str]:
    """Summary body, shaped by how many key points there are."""
    ph = lx.phrases
    if not key_points:
        return [ph["empty"]]

    if len(key_points) <= 3:
        return [ph["few"], ph["point_separator"].join(key_points), ph["period"]]

    parts = [ph["many"]]
    categories = categorize(key_points, lx)
    if categories:
        for category, points in categories.items():
            if points:
                parts.append(
                    ph["category"].format(
                        label=category.value,
                        points=ph["category_point_separator"].join(points),
                    )
                )
    else:
        parts.append(ph["point_separator"].join(key_points[:4]))
    parts.append(ph["period"])
    return parts


def compose_summary(
    transcript: str,
    key_points: List[str],
    lexicons: Optional[Lexicons] = None,
) -> str:
    """Compose the prose summary: opening with meeting type and topic, a body depending on the key-point count, and a fixed closing sentence.
    Why available: Core summary text shown to users; callers may pass their own (e.g. edited) key points."""
    lx = lexicons or get_lexicons()
    opening = lx.phrases["opening"].format(
        meeting_type=infer_meeting_type(transcript, lx),
        topic=infer_topic(transcript, lx),
    )
    parts = [opening, *_body(list(key_points), lx), lx.phrases["closing"]]
    return "".join(parts)


def dated_header(day: date, lexicons: Optional[Lexicons] = None) -> str:
    """Header used by the enhanced summary, e.g. "【03月07日会议摘要】"."""
    lx = lexicons or get_lexicons()
    return lx.phrases["dated_header"].format(month=day.month, day=day.day)


def summarize(
    transcript: str,
    key_points: Optional[List[str]] = None,
    *,
    enhance: bool = False,
    meeting_date: Optional[date] = None,
    lexicons: Optional[Lexicons] = None,
) -> MeetingSummary:
    """Run the full summary pipeline on a transcript and return a MeetingSummary.
    key_points, when given, replace the extracted ones (e.g. points edited by a user).
    With enhance=True short key points get an attention annotation and the text is prefixed with a dated header (meeting_date, default today).
    Why available: Single entry point used by the API, the analysis worker and the CLI script."""
    lx = lexicons or get_lexicons()
    transcript = transcript or ""

    if key_points is None:
        key_points = extract_key_points(transcript, lx)
    key_points = list(key_points)
    if enhance:
        key_points = enhance_key_points(key_points, lx)

    text = compose_summary(transcript, key_points, lx)
    if enhance:
        text = dated_header(meeting_date or date.today(), lx) + "\n\n" + text

    summary = MeetingSummary(
        meeting_type=infer_meeting_type(transcript, lx),
        topic_phrase=infer_topic(transcript, lx),
        key_points=tuple(key_points),
        categorized_points=MappingProxyType(
            {c: tuple(points) for c, points in categorize(key_points, lx).items()}
        ),
        composed_text=text,
    )
    logger.debug(
        "summary_composed",
        extra={"meeting_type": summary.meeting_type, "key_points": len(key_points), "enhance": enhance},
    )
    return summary
