"""
Assignee name resolution for action items.

Two strategies, tried in order:
1. indicator lookahead: a name right after a word like "由", "请" or "by";
2. surname fallback: a known surname followed by one or two CJK characters anywhere in the line.
"""
from typing import Optional, Pattern

from app.lexicons.loader import Lexicons, get_lexicons


def _cut_at_boundary(text: str, name: str, min_len: int, lx: Lexicons) -> str:
    """Shorten a CJK name candidate (a prefix of text) where a boundary word begins, keeping at least min_len characters."""
    for i in range(min_len, len(name)):
        if text.startswith(lx.name_boundaries, i):
            return name[:i]
    return name


def _name_after(indicator_re: Pattern[str], line: str, lx: Lexicons) -> Optional[str]:
    m = indicator_re.search(line)
    if m is None:
        return None

    after = line[m.end():].strip()
    cjk_re, latin_re = lx.name_patterns
    for pattern in (cjk_re, latin_re):
        found = pattern.match(after)
        if not found:
            continue
        name = found.group(1)
        if pattern is cjk_re:
            name = _cut_at_boundary(after, name, 2, lx)
        if name not in lx.non_names:
            return name
    return None


def extract_name_after(indicator: str, line: str, lexicons: Optional[Lexicons] = None) -> Optional[str]:
    """Return the name that follows the first occurrence of an indicator word, or None.
    The text after the indicator is tried against the CJK pattern first, then the Latin one; group nouns such as "大家" are rejected."""
    lx = lexicons or get_lexicons()
    for word, indicator_re in lx.indicator_res:
        if word == indicator:
            return _name_after(indicator_re, line, lx)
    return None


def extract_surname_name(line: str, lexicons: Optional[Lexicons] = None) -> Optional[str]:
    """Return the first "surname + 1-2 CJK characters" found in the line, trying surnames in table order."""
    lx = lexicons or get_lexicons()
    for surname, pattern in lx.surname_res:
        m = pattern.search(line)
        if not m:
            continue
        name = m.group(0)
        # "张三负责" -> "张三", not "张三负"
        if len(name) - len(surname) == 2 and line.startswith(lx.name_boundaries, m.end() - 1):
            name = name[:-1]
        return name
    return None


def resolve_assignee(line: str, lexicons: Optional[Lexicons] = None) -> str:
    """Resolve the person responsible for the task described by a line.
    Indicator lookahead wins over the surname fallback; the unassigned sentinel ("未指定") is returned when both fail.
    Why available: Used by the task extractor for every line that passed the task-keyword gate."""
    lx = lexicons or get_lexicons()
    for _, indicator_re in lx.indicator_res:
        name = _name_after(indicator_re, line, lx)
        if name:
            return name

    return extract_surname_name(line, lx) or lx.unassigned
