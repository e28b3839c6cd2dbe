from enum import Enum
from typing import Dict, List, Optional

from app.lexicons.loader import Lexicons, get_lexicons


class Category(str, Enum):
    """Summary buckets for key points; declaration order is the order they are rendered in."""

    DECISION = "决策"
    ISSUE = "问题"
    PLAN = "计划"
    EXECUTION = "执行"
    OTHER = "其他"


def categorize_point(point: str, lexicons: Optional[Lexicons] = None) -> Category:
    """Return the first category whose keywords occur in the point, or Category.OTHER."""
    lx = lexicons or get_lexicons()
    for name, keywords in lx.category_keywords:
        if any(k in point for k in keywords):
            return Category[name.upper()]
    return Category.OTHER


def categorize(points: List[str], lexicons: Optional[Lexicons] = None) -> Dict[Category, List[str]]:
    """Bucket key points into categories (first match wins, each point lands in exactly one bucket).
    Empty categories are left out; points keep their input order inside a bucket and buckets follow Category order.
    Why available: Used by the summary composer for meetings with many key points and exposed via /categorize."""
    lx = lexicons or get_lexicons()
    buckets: Dict[Category, List[str]] = {}
    for point in points:
        buckets.setdefault(categorize_point(point, lx), []).append(point)
    return {c: buckets[c] for c in Category if c in buckets}
