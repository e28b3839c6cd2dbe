"""
Key-point extraction: picks salient transcript lines by importance words or list-item shape,
cleans enumerators, dedups and caps the result.
"""
import logging
from typing import Iterable, List, Optional

from app.core.config import settings
from app.ingest.parser import line_texts
from app.lexicons.loader import Lexicons, get_lexicons

logger = logging.getLogger(__name__)


def is_important(line: str, lexicons: Lexicons) -> bool:
    """True if the line contains any importance word (case-sensitive substring)."""
    return any(word in line for word in lexicons.importance_indicators)


def is_list_item(line: str, lexicons: Lexicons) -> bool:
    """True if the line starts like an enumerated item ("1.", "二、", "3 ") or a bullet ("-", "•", "*")."""
    if lexicons.list_item_re.match(line):
        return True
    return line.startswith(lexicons.bullet_prefixes)


def clean_key_point(line: str, lexicons: Optional[Lexicons] = None) -> str:
    """Strip a leading enumerator and a "第N点/条/项" ordinal, trim, and truncate long points.
    Why available: Normalizes candidate lines so dedup compares the point text, not its numbering."""
    lx = lexicons or get_lexicons()
    cleaned = lx.enumerator_re.sub("", line, count=1)
    cleaned = lx.ordinal_re.sub("", cleaned, count=1)
    cleaned = cleaned.strip()

    limit = settings.key_point_max_chars
    if len(cleaned) > limit:
        cleaned = cleaned[:limit] + lx.truncation_marker
    return cleaned


def select_key_points(lines: Iterable[str], lexicons: Optional[Lexicons] = None) -> List[str]:
    """Scan already segmented lines and return accepted key points in order of first acceptance.
    Every line is scanned; once the cap is reached further candidates are ignored."""
    lx = lexicons or get_lexicons()
    points: List[str] = []
    candidates = 0

    for line in lines:
        if not (is_important(line, lx) or is_list_item(line, lx)):
            continue
        candidates += 1
        point = clean_key_point(line, lx)
        if len(point) < settings.min_key_point_chars or point in points:
            continue
        if len(points) < settings.max_key_points:
            points.append(point)

    logger.debug("key_points_extracted", extra={"candidates": candidates, "accepted": len(points)})
    return points


def extract_key_points(transcript: str, lexicons: Optional[Lexicons] = None) -> List[str]:
    """Extract up to 8 unique key points (each at least 5 characters) from a transcript, in line order.
    Why available: First stage of the summary; also exposed on its own via /key_points."""
    return select_key_points(line_texts(transcript), lexicons)


def enhance_key_points(points: List[str], lexicons: Optional[Lexicons] = None) -> List[str]:
    """Append the attention annotation to points shorter than ENHANCE_MAX_CHARS. Used by the enhanced summary."""
    lx = lexicons or get_lexicons()
    return [
        p + lx.enhance_annotation if len(p) < settings.enhance_max_chars else p
        for p in points
    ]
