from finance_tracker.categorization.lexicon import (
    CATEGORY_STYLES,
    DEFAULT_ICON,
    EXPENSE_COLOR,
    INCOME_COLOR,
    KEYWORD_LEXICON,
    best_category_name,
    match_keywords,
    style_for,
)


def test_restaurant_description_matches_food() -> None:
    assert best_category_name("海底捞火锅 晚餐") == "餐饮"


def test_subway_matches_transport() -> None:
    assert best_category_name("地铁充值") == "交通"


def test_longer_keyword_wins() -> None:
    # "药店超市" (shopping) is longer than "药店" (medical)
    assert best_category_name("社区药店超市") == "购物"
    assert best_category_name("社区药店") == "医疗"


def test_matches_are_sorted_longest_first() -> None:
    matches = match_keywords("共享单车月卡")
    lengths = [len(m.keyword) for m in matches]
    assert lengths == sorted(lengths, reverse=True)
    assert matches[0].keyword == "共享单车"


def test_equal_length_ties_keep_lexicon_order() -> None:
    # "旅行" is listed under 交通 before 娱乐
    matches = [m for m in match_keywords("旅行") if m.keyword == "旅行"]
    assert [m.category_name for m in matches] == ["交通", "娱乐"]
    assert best_category_name("旅行") == "交通"


def test_uppercase_keywords_match_case_insensitively() -> None:
    assert best_category_name("周末KTV") == "娱乐"
    assert best_category_name("周末ktv") == "娱乐"


def test_no_match_returns_none() -> None:
    assert best_category_name("zzzz") is None
    assert match_keywords("zzzz") == []


def test_empty_description() -> None:
    assert best_category_name("") is None
    assert best_category_name(None) is None


def test_lexicon_keywords_are_lowercase_and_unique() -> None:
    for keywords in KEYWORD_LEXICON.values():
        assert all(kw == kw.lower() for kw in keywords)
        assert len(keywords) == len(set(keywords))


def test_style_for_known_category() -> None:
    style = style_for("餐饮", "expense")
    assert style.icon == "🍜"
    assert style.color == EXPENSE_COLOR
    assert style.type == "expense"


def test_style_for_fallback_categories() -> None:
    assert style_for("其他收入", "income").icon == "💰"
    assert style_for("其他收入", "income").color == INCOME_COLOR
    assert style_for("其他支出", "expense").icon == "💸"


def test_style_for_unknown_category_uses_default() -> None:
    style = style_for("生活缴费", "expense")
    assert "生活缴费" not in CATEGORY_STYLES
    assert style.icon == DEFAULT_ICON
    assert style.color == "#10B981"
    assert style.type == "expense"


def test_style_for_type_mismatch_uses_default() -> None:
    style = style_for("工资", "expense")
    assert style.icon == DEFAULT_ICON
    assert style.type == "expense"
