"""Unit tests for key-point extraction."""
from app.extract.key_points import (
    clean_key_point,
    enhance_key_points,
    extract_key_points,
    is_important,
    is_list_item,
)


def test_is_list_item(lexicons):
    assert is_list_item("1. 确定了产品方向", lexicons)
    assert is_list_item("二、讨论技术方案", lexicons)
    assert is_list_item("3．全角句点", lexicons)
    assert is_list_item("12 空格分隔", lexicons)
    assert is_list_item("- 完成 API 文档", lexicons)
    assert is_list_item("• bullet", lexicons)
    assert is_list_item("* star", lexicons)
    assert not is_list_item("2024年的计划", lexicons)
    assert not is_list_item("普通的一句话", lexicons)


def test_is_important(lexicons):
    assert is_important("这是一个重要的事情", lexicons)
    assert is_important("We agreed on the scope", lexicons)
    assert not is_important("今天天气不错", lexicons)
    # case-sensitive, like the keyword table
    assert not is_important("KEY facts", lexicons)


def test_clean_strips_enumerator(lexicons):
    assert clean_key_point("1. 确定了产品方向", lexicons) == "确定了产品方向"
    assert clean_key_point("二、 讨论了技术方案", lexicons) == "讨论了技术方案"
    assert clean_key_point("3.- 带符号的列表项", lexicons) == "带符号的列表项"


def test_clean_strips_ordinal(lexicons):
    assert clean_key_point("第三点 上线时间推迟一周", lexicons) == "上线时间推迟一周"
    assert clean_key_point("第一条确认预算", lexicons) == "确认预算"


def test_clean_keeps_bare_bullet(lexicons):
    # only numeric enumerators are stripped
    assert clean_key_point("- 完成 API 文档", lexicons) == "- 完成 API 文档"


def test_clean_truncates_long_points(lexicons):
    text = "重" * 150
    out = clean_key_point(text, lexicons)
    assert out == "重" * 100 + "..."
    assert clean_key_point("重" * 100, lexicons) == "重" * 100


def test_scenario_a_numbered_lines():
    transcript = "1. 确定了产品方向\n2. 讨论了技术方案\n张三负责完成前端开发"
    points = extract_key_points(transcript)
    assert points == ["确定了产品方向", "讨论了技术方案"]


def test_scenario_b_bullets():
    points = extract_key_points("- 完成 API 文档\n- 更新部署脚本")
    assert points == ["- 完成 API 文档", "- 更新部署脚本"]


def test_empty_transcript():
    assert extract_key_points("") == []
    assert extract_key_points("\n  \n") == []


def test_length_boundary():
    # "1. " is stripped; 4 characters remain -> rejected, 5 -> accepted
    assert extract_key_points("1. 一二三四") == []
    assert extract_key_points("1. 一二三四五") == ["一二三四五"]


def test_dedup_after_cleaning():
    transcript = "1. 确定了产品方向\n2. 确定了产品方向\n确定了产品方向"
    assert extract_key_points(transcript) == ["确定了产品方向"]


def test_dedup_is_case_sensitive():
    transcript = "- Main goal\n- main goal"
    assert extract_key_points(transcript) == ["- Main goal", "- main goal"]


def test_cap_at_eight_in_line_order():
    transcript = "\n".join(f"{i}. 第{i}个重要事项说明" for i in range(1, 13))
    points = extract_key_points(transcript)
    assert len(points) == 8
    assert points[0] == "第1个重要事项说明"
    assert points[-1] == "第8个重要事项说明"


def test_lines_after_cap_do_not_displace_points():
    lines = [f"- 要点编号{i}" for i in range(8)] + ["- 要点编号0", "- 新的要点内容"]
    points = extract_key_points("\n".join(lines))
    assert points == [f"- 要点编号{i}" for i in range(8)]


def test_non_candidate_lines_skipped():
    transcript = "今天天气不错\n我们的目标是提升留存\n随便聊聊"
    assert extract_key_points(transcript) == ["我们的目标是提升留存"]


def test_enhance_annotates_short_points(lexicons):
    long_point = "这是一个超过二十个字符的很长很长很长的会议要点描述"
    out = enhance_key_points(["确定了产品方向", long_point], lexicons)
    assert out == ["确定了产品方向（需要重点关注）", long_point]


def test_enhance_boundary(lexicons):
    nineteen = "字" * 19
    twenty = "字" * 20
    assert enhance_key_points([nineteen, twenty], lexicons) == [nineteen + "（需要重点关注）", twenty]


def test_mixed_line_endings():
    assert extract_key_points("1. 确定了产品方向\r\n2. 讨论了技术方案\r3. 推进灰度发布") == [
        "确定了产品方向",
        "讨论了技术方案",
        "推进灰度发布",
    ]
