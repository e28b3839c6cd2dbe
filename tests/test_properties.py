"""
Property-based tests for the analysis engine.

Transcripts are generated from a fragment alphabet that mixes enumerators, bullets,
importance words, task keywords, names and filler so that every extraction path is hit.
"""
from hypothesis import given, settings, strategies as st

from app.extract.categorizer import categorize
from app.extract.key_points import clean_key_point, extract_key_points, is_important, is_list_item
from app.extract.summarizer import summarize
from app.extract.tasks import extract_action_items
from app.ingest.parser import split_lines
from app.lexicons.loader import get_lexicons

FRAGMENTS = [
    "1. ", "2、", "三．", "- ", "• ", "第二点", "重要", "决定", "问题", "计划", "推进",
    "张三", "李四", "由", "请", "负责", "需要", "完成", "准备", "大家", "TODO: ",
    "review ", "by Alice", "方案", "产品", "周会", "讨论", "的", "了", "，", "。", " ",
]


@st.composite
def transcript_line(draw):
    parts = draw(st.lists(st.sampled_from(FRAGMENTS), min_size=0, max_size=8))
    return "".join(parts)


@st.composite
def transcript(draw):
    lines = draw(st.lists(transcript_line(), min_size=0, max_size=25))
    return "\n".join(lines)


@given(transcript())
@settings(max_examples=200, deadline=None)
def test_key_points_bounded_unique_and_long_enough(text):
    points = extract_key_points(text)
    assert len(points) <= 8
    assert len(set(points)) == len(points)
    assert all(len(p) >= 5 for p in points)


@given(transcript())
@settings(max_examples=200, deadline=None)
def test_key_points_follow_line_order(text):
    lx = get_lexicons()
    cleaned = [
        clean_key_point(line.text, lx)
        for line in split_lines(text)
        if is_important(line.text, lx) or is_list_item(line.text, lx)
    ]
    points = extract_key_points(text)
    positions = [cleaned.index(p) for p in points]
    assert positions == sorted(positions)


@given(transcript())
@settings(max_examples=100, deadline=None)
def test_key_points_idempotent(text):
    assert extract_key_points(text) == extract_key_points(text)


@given(st.lists(transcript_line(), max_size=20))
@settings(max_examples=200, deadline=None)
def test_categorize_is_a_partition(points):
    buckets = categorize(points)
    flat = [p for bucket in buckets.values() for p in bucket]
    assert sorted(flat) == sorted(points)
    assert all(bucket for bucket in buckets.values())


@given(transcript())
@settings(max_examples=200, deadline=None)
def test_at_most_one_action_item_per_line(text):
    items = extract_action_items(text)
    line_nos = [i.source_line.line_no for i in items]
    assert line_nos == sorted(set(line_nos))
    assert all(i.assignee for i in items)


@given(transcript())
@settings(max_examples=100, deadline=None)
def test_summary_always_closes(text):
    s = summarize(text)
    assert s.composed_text.startswith("本次")
    assert s.composed_text.endswith("后续将按照讨论结果推进相关工作。")
