import logging
import unicodedata
from dataclasses import dataclass
from typing import Iterable, List, Optional

from app.extract.names import resolve_assignee
from app.ingest.parser import TranscriptLine, split_lines
from app.lexicons.loader import Lexicons, get_lexicons

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionItem:
    """A task candidate extracted from one transcript line: cleaned content, assignee (or the unassigned sentinel) and the source line.
    Why available: Returned by extract_action_items; callers assign ids and timestamps when they persist it."""

    content: str
    assignee: str
    source_line: TranscriptLine


def has_task_intent(line: str, lexicons: Optional[Lexicons] = None) -> bool:
    """True if the line contains any task keyword (case-sensitive substring)."""
    lx = lexicons or get_lexicons()
    return any(k in line for k in lx.task_keywords)


def _is_trimmable(ch: str) -> bool:
    return ch.isspace() or unicodedata.category(ch).startswith("P")


def _strip_punctuation(text: str) -> str:
    """Trim whitespace and Unicode punctuation from both ends."""
    start, end = 0, len(text)
    while start < end and _is_trimmable(text[start]):
        start += 1
    while end > start and _is_trimmable(text[end - 1]):
        end -= 1
    return text[start:end]


def clean_task_content(content: str, assignee: str, lexicons: Optional[Lexicons] = None) -> str:
    """Remove task markers, a leading assignee name and surrounding punctuation; upper-case an ASCII first letter.
    Why available: Turns a raw transcript line into the task text shown on the board."""
    lx = lexicons or get_lexicons()
    cleaned = content
    for marker in lx.task_markers:
        cleaned = cleaned.replace(marker, "")

    if assignee and cleaned.startswith(assignee):
        cleaned = cleaned[len(assignee):].strip()

    cleaned = _strip_punctuation(cleaned)

    # CJK has no case; only ASCII letters are upper-cased
    if cleaned and cleaned[0].isascii():
        cleaned = cleaned[0].upper() + cleaned[1:]
    return cleaned


def extract_action_item(line: TranscriptLine, lexicons: Optional[Lexicons] = None) -> Optional[ActionItem]:
    """Build an ActionItem from one line, or None if the line has no task keyword."""
    lx = lexicons or get_lexicons()
    if not has_task_intent(line.text, lx):
        return None

    assignee = resolve_assignee(line.text, lx)
    return ActionItem(
        content=clean_task_content(line.text, assignee, lx),
        assignee=assignee,
        source_line=line,
    )


def select_action_items(lines: Iterable[TranscriptLine], lexicons: Optional[Lexicons] = None) -> List[ActionItem]:
    """Extract at most one ActionItem per line, in line order."""
    lx = lexicons or get_lexicons()
    items: List[ActionItem] = []
    for line in lines:
        item = extract_action_item(line, lx)
        if item is not None:
            items.append(item)

    logger.debug(
        "action_items_extracted",
        extra={"count": len(items), "unassigned": sum(1 for i in items if i.assignee == lx.unassigned)},
    )
    return items


def extract_action_items(transcript: str, lexicons: Optional[Lexicons] = None) -> List[ActionItem]:
    """Extract action items (task content + assignee) from a transcript, one at most per line.
    Why available: Powers /action_items and the task list of a full analysis."""
    return select_action_items(split_lines(transcript), lexicons)
