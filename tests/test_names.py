"""Unit tests for assignee name resolution."""
from app.extract.names import extract_name_after, extract_surname_name, resolve_assignee


def test_indicator_cjk_name(lexicons):
    assert extract_name_after("由", "由王五处理测试环境", lexicons) == "王五"
    assert extract_name_after("请", "请李四准备材料", lexicons) == "李四"


def test_indicator_name_stops_at_boundary(lexicons):
    assert extract_name_after("由", "由张三负责前端", lexicons) == "张三"
    assert extract_name_after("由", "由张三和李四一起完成", lexicons) == "张三"
    assert extract_name_after("交给", "交给欧阳明日", lexicons) == "欧阳明日"


def test_indicator_skips_whitespace(lexicons):
    assert extract_name_after("让", "让  赵六 去整理", lexicons) == "赵六"


def test_indicator_latin_name(lexicons):
    assert extract_name_after("by", "docs will be finished by Alice Smith", lexicons) == "Alice Smith"
    assert extract_name_after("ask", "ask Bob, review the doc", lexicons) == "Bob"
    # a second token is taken whatever its case
    assert extract_name_after("ask", "ask Bob to review the doc", lexicons) == "Bob to"
    assert extract_name_after("assign to", "assign to Carol", lexicons) == "Carol"


def test_latin_indicator_needs_word_boundary(lexicons):
    # "ask" inside "task", "by" inside "nearby"
    assert extract_name_after("ask", "review the task list", lexicons) is None
    assert extract_name_after("by", "the nearby office", lexicons) is None


def test_indicator_rejects_group_nouns(lexicons):
    assert extract_name_after("请", "请大家准备材料", lexicons) is None
    assert extract_name_after("由", "由团队负责", lexicons) is None


def test_indicator_absent(lexicons):
    assert extract_name_after("由", "张三负责前端", lexicons) is None


def test_surname_fallback_anywhere(lexicons):
    assert extract_surname_name("前端开发张三负责", lexicons) == "张三"
    assert extract_surname_name("这个交给李小龙吧", lexicons) == "李小龙"
    assert extract_surname_name("nothing here", lexicons) is None


def test_surname_fallback_table_order(lexicons):
    # 王 comes before 陈 in the table, even though 陈 appears first in the line
    assert extract_surname_name("陈七说王八来做", lexicons) == "王八"


def test_surname_given_name_stops_at_keyword(lexicons):
    assert extract_surname_name("张三负责完成前端开发", lexicons) == "张三"


def test_resolve_prefers_indicator_over_surname(lexicons):
    line = "张三负责，请李四处理这个问题"
    assert extract_surname_name(line, lexicons) == "张三"
    assert resolve_assignee(line, lexicons) == "李四"


def test_resolve_falls_back_to_surname(lexicons):
    assert resolve_assignee("张三负责完成前端开发", lexicons) == "张三"


def test_resolve_unassigned(lexicons):
    assert resolve_assignee("需要更新部署脚本", lexicons) == "未指定"
    assert resolve_assignee("请大家准备材料", lexicons) == "未指定"


def test_lowercase_two_token_latin_name(lexicons):
    assert extract_name_after("by", "by john smith", lexicons) == "john smith"
    assert resolve_assignee("please finish the report by john smith", lexicons) == "john smith"


def test_custom_indicator_table_is_used(make_lexicons):
    lx = make_lexicons(tasks__assignee_indicators=["指派"])
    assert resolve_assignee("指派赵六整理纪要", lx) == "赵六"
    assert extract_name_after("由", "由王五处理", lx) is None
