"""
Versioned lexicon loader: reads keyword tables and patterns from app/lexicons/{version}/{component}.yaml.
Use LEXICON_VERSION (default v1) to select version. Tables are validated and regexes compiled once per process.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Tuple

import yaml

# Base path: app/lexicons/ (next to this file)
_LEXICONS_DIR = Path(__file__).resolve().parent

COMPONENTS = ("key_points", "summary", "tasks", "names")
# Keyword-backed categories; anything unmatched is "other".
CATEGORY_NAMES = ("decision", "issue", "plan", "execution")

_lexicons: Optional["Lexicons"] = None


class LexiconError(ValueError):
    """Raised when a lexicon file is malformed: missing table, empty table or a pattern that does not compile."""


@dataclass(frozen=True)
class Lexicons:
    """All static keyword tables and compiled patterns used by the analysis engine.
    Why available: Built once at startup and shared read-only by every extractor, so concurrent calls never see different tables."""

    version: str
    # key points
    importance_indicators: Tuple[str, ...]
    list_item_re: Pattern[str]
    bullet_prefixes: Tuple[str, ...]
    enumerator_re: Pattern[str]
    ordinal_re: Pattern[str]
    truncation_marker: str
    enhance_annotation: str
    # summary
    topics: Tuple[Tuple[str, str], ...]
    default_topic: str
    meeting_types: Tuple[Tuple[str, str], ...]
    default_meeting_type: str
    category_keywords: Tuple[Tuple[str, Tuple[str, ...]], ...]
    phrases: Dict[str, str]
    # tasks
    task_keywords: Tuple[str, ...]
    assignee_indicators: Tuple[str, ...]
    indicator_res: Tuple[Tuple[str, Pattern[str]], ...]
    task_markers: Tuple[str, ...]
    unassigned: str
    # names
    surnames: Tuple[str, ...]
    surname_res: Tuple[Tuple[str, Pattern[str]], ...]
    non_names: frozenset
    name_boundaries: Tuple[str, ...]
    name_patterns: Tuple[Pattern[str], ...]


def load_component(component: str, version: str) -> Dict[str, Any]:
    """Read one lexicon YAML file and return its mapping. Raises FileNotFoundError if the file does not exist."""
    path = _LEXICONS_DIR / version / f"{component}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Lexicon file not found: {path}")

    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise LexiconError(f"{path.name}: expected a mapping at top level")
    return data


def _words(data: Dict[str, Any], key: str, component: str) -> Tuple[str, ...]:
    """Return a non-empty tuple of strings for `key`, deduplicated with first occurrence kept."""
    val = data.get(key)
    if not isinstance(val, list) or not val:
        raise LexiconError(f"{component}.{key}: expected a non-empty list")
    seen = set()
    out: List[str] = []
    for item in val:
        word = str(item).strip()
        if not word:
            raise LexiconError(f"{component}.{key}: empty entry")
        if word in seen:
            continue
        seen.add(word)
        out.append(word)
    return tuple(out)


def _text(data: Dict[str, Any], key: str, component: str) -> str:
    val = data.get(key)
    if not isinstance(val, str) or not val:
        raise LexiconError(f"{component}.{key}: expected a non-empty string")
    return val


def _pairs(data: Dict[str, Any], key: str, component: str) -> Tuple[Tuple[str, str], ...]:
    """Return an ordered keyword -> label table from a list of [keyword, label] pairs."""
    val = data.get(key)
    if not isinstance(val, list) or not val:
        raise LexiconError(f"{component}.{key}: expected a non-empty list of [keyword, label] pairs")
    out = []
    for item in val:
        if not isinstance(item, list) or len(item) != 2 or not all(item):
            raise LexiconError(f"{component}.{key}: bad entry {item!r}")
        out.append((str(item[0]), str(item[1])))
    return tuple(out)


def _compile(pattern: str, where: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise LexiconError(f"{where}: invalid pattern {pattern!r}: {e}") from e


def _indicator_pattern(indicator: str) -> Pattern[str]:
    """Latin indicators must stand alone as words ("by" should not match inside "nearby"); CJK indicators match anywhere."""
    if indicator.isascii():
        return re.compile(r"\b" + re.escape(indicator) + r"\b", re.ASCII)
    return re.compile(re.escape(indicator))


def build_lexicons(tables: Dict[str, Dict[str, Any]], version: str = "custom") -> Lexicons:
    """Validate raw component tables (as read from YAML) and build a Lexicons instance with compiled patterns.
    Why available: Lets tests and callers build lexicons from in-memory tables; the YAML loader uses the same path."""
    kp = tables.get("key_points") or {}
    sm = tables.get("summary") or {}
    tk = tables.get("tasks") or {}
    nm = tables.get("names") or {}

    categories = sm.get("categories")
    if not isinstance(categories, list) or not categories:
        raise LexiconError("summary.categories: expected a non-empty list")
    category_keywords = []
    for entry in categories:
        if not isinstance(entry, dict) or entry.get("name") not in CATEGORY_NAMES:
            raise LexiconError(f"summary.categories: bad entry {entry!r} (name must be one of {', '.join(CATEGORY_NAMES)})")
        category_keywords.append((str(entry["name"]), _words(entry, "keywords", f"summary.categories.{entry['name']}")))

    phrases = sm.get("phrases")
    required_phrases = (
        "opening", "empty", "few", "many", "category", "point_separator",
        "category_point_separator", "period", "closing", "dated_header",
    )
    if not isinstance(phrases, dict):
        raise LexiconError("summary.phrases: expected a mapping")
    missing = [p for p in required_phrases if not isinstance(phrases.get(p), str)]
    if missing:
        raise LexiconError(f"summary.phrases: missing {', '.join(missing)}")

    task_keywords = _words(tk, "task_keywords", "tasks")
    indicators = _words(tk, "assignee_indicators", "tasks")
    surnames = _words(nm, "surnames", "names")
    given_name = _text(nm, "given_name_pattern", "names")
    _compile(given_name, "names.given_name_pattern")

    # Names never run into a following keyword ("张三负责" -> "张三").
    boundaries = _words(nm, "name_boundaries", "names")
    boundary_words = []
    for word in boundaries + task_keywords + indicators:
        if not word.isascii() and word not in boundary_words:
            boundary_words.append(word)

    return Lexicons(
        version=version,
        importance_indicators=_words(kp, "importance_indicators", "key_points"),
        list_item_re=_compile(_text(kp, "list_item_pattern", "key_points"), "key_points.list_item_pattern"),
        bullet_prefixes=_words(kp, "bullet_prefixes", "key_points"),
        enumerator_re=_compile(_text(kp, "enumerator_pattern", "key_points"), "key_points.enumerator_pattern"),
        ordinal_re=_compile(_text(kp, "ordinal_pattern", "key_points"), "key_points.ordinal_pattern"),
        truncation_marker=_text(kp, "truncation_marker", "key_points"),
        enhance_annotation=_text(kp, "enhance_annotation", "key_points"),
        topics=_pairs(sm, "topics", "summary"),
        default_topic=_text(sm, "default_topic", "summary"),
        meeting_types=_pairs(sm, "meeting_types", "summary"),
        default_meeting_type=_text(sm, "default_meeting_type", "summary"),
        category_keywords=tuple(category_keywords),
        phrases={k: str(v) for k, v in phrases.items()},
        task_keywords=task_keywords,
        assignee_indicators=indicators,
        indicator_res=tuple((i, _indicator_pattern(i)) for i in indicators),
        task_markers=_words(tk, "task_markers", "tasks"),
        unassigned=_text(tk, "unassigned", "tasks"),
        surnames=surnames,
        surname_res=tuple((s, _compile(re.escape(s) + given_name, f"names.surnames.{s}")) for s in surnames),
        non_names=frozenset(_words(nm, "non_names", "names")),
        name_boundaries=tuple(boundary_words),
        name_patterns=(
            _compile(_text(nm, "cjk_name_pattern", "names"), "names.cjk_name_pattern"),
            _compile(_text(nm, "latin_name_pattern", "names"), "names.latin_name_pattern"),
        ),
    )


def load_lexicons(version: Optional[str] = None) -> Lexicons:
    """Load, validate and compile every lexicon component for a version. Raises FileNotFoundError or LexiconError on bad configuration.
    Why available: Centralizes the keyword tables so they can be tuned without code changes."""
    if version is None:
        from app.core.config import settings
        version = settings.lexicon_version

    tables = {component: load_component(component, version) for component in COMPONENTS}
    return build_lexicons(tables, version=version)


def get_lexicons() -> Lexicons:
    """Return the process-wide Lexicons, loading them on first use.
    Why available: Single place to get the tables so all extractors share one immutable instance."""
    global _lexicons
    if _lexicons is None:
        _lexicons = load_lexicons()
    return _lexicons
