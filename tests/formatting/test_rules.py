from __future__ import annotations

import pytest

from auto_nbsp.formatting.catalog import RuleCatalog
from auto_nbsp.formatting.config import NbspConfig
from auto_nbsp.formatting.rules import (
    after_numbers_pass,
    after_words_pass,
    apply_rules,
    before_months_pass,
    before_units_pass,
    before_words_pass,
    between_numbers_pass,
    build_passes,
)

NB = "&nbsp;"


def test_after_words_binds_following_word_case_insensitive() -> None:
    p = after_words_pass(["v", "a"], NB)
    assert p.apply("Jdu v Praze a v Brně") == ("Jdu v&nbsp;Praze a&nbsp;v&nbsp;Brně", 3)
    assert p.apply("V  Praze")[0] == "V&nbsp;Praze"


def test_after_words_treats_diacritics_as_word_characters() -> None:
    p = after_words_pass(["že", "s"], NB)
    assert p.apply("může být") == ("může být", 0)
    assert p.apply("přes most") == ("přes most", 0)
    assert p.apply("Že ano") == ("Že&nbsp;ano", 1)


def test_after_words_abbreviation_period_is_a_boundary() -> None:
    p = after_words_pass(["např.", "p."], NB)
    assert p.apply("např. jablko")[0] == "např.&nbsp;jablko"
    assert p.apply("(např. x)")[0] == "(např.&nbsp;x)"


def test_before_words_binds_title_after_name() -> None:
    p = before_words_pass(["Ph.D.", "MBA", "dr. h. c."], NB)
    assert p.apply("Jan Novák, Ph.D.")[0] == "Jan Novák,&nbsp;Ph.D."
    assert p.apply("Jan Novák MBAx") == ("Jan Novák MBAx", 0)
    assert p.apply("Jan Novák dr.&nbsp;h. c.")[0] == "Jan Novák&nbsp;dr.&nbsp;h. c."


def test_before_months_keeps_ordinal_period() -> None:
    p = before_months_pass(["ledna", "května"], NB)
    assert p.apply("10. ledna a 1 května")[0] == "10.&nbsp;ledna a 1&nbsp;května"
    assert p.apply("10. LEDNA")[0] == "10.&nbsp;LEDNA"
    assert p.apply("10. lednař") == ("10. lednař", 0)
    assert p.apply("deset ledna") == ("deset ledna", 0)


def test_after_numbers_binds_digit_to_next_word() -> None:
    p = after_numbers_pass(NB)
    assert p.apply("2024 was 5 years")[0] == "2024&nbsp;was 5&nbsp;years"
    assert p.apply("5 , x") == ("5 , x", 0)


def test_between_numbers() -> None:
    p = between_numbers_pass(NB)
    assert p.apply("1 000 000")[0] == "1&nbsp;000&nbsp;000"
    assert p.apply("3. 5.")[0] == "3.&nbsp;5."
    assert p.apply("3 x") == ("3 x", 0)


def test_before_units_is_case_sensitive() -> None:
    p = before_units_pass(["m", "mm", "MB", "%", "km/h"], NB)
    assert p.apply("5 m")[0] == "5&nbsp;m"
    assert p.apply("12 mm, 3 MB, 20 %, 90 km/h")[0] == "12&nbsp;mm, 3&nbsp;MB, 20&nbsp;%, 90&nbsp;km/h"
    assert p.apply("5 M") == ("5 M", 0)
    assert p.apply("5 mx") == ("5 mx", 0)


def test_matches_inside_tags_are_skipped() -> None:
    p = after_words_pass(["a"], NB)
    assert p.apply('<a href="x y">a b</a>') == ('<a href="x y">a&nbsp;b</a>', 1)
    assert p.apply('<img alt="a > b" title="a c"> a test') == ('<img alt="a > b" title="a c"> a&nbsp;test', 1)
    assert p.apply("<!-- a b --> a b") == ("<!-- a b --> a&nbsp;b", 1)


def test_whitespace_before_a_tag_is_text() -> None:
    p = after_words_pass(["v"], NB)
    assert p.apply("v <strong>Praze</strong>")[0] == "v&nbsp;<strong>Praze</strong>"


def test_no_break_spaces_are_not_rematched() -> None:
    p = after_words_pass(["a"], "\u00a0")
    once, n = p.apply("a b")
    assert (once, n) == ("a\u00a0b", 1)
    assert p.apply(once) == (once, 0)


def test_build_passes_order_and_skipping() -> None:
    names = [p.name for p in build_passes(NbspConfig(units=True), RuleCatalog())]
    assert names == [
        "after_words",
        "before_words",
        "before_months",
        "after_numbers",
        "between_numbers",
        "before_units",
    ]

    cfg = NbspConfig(language="xx", prepositions_conjunctions=False, titles=False)
    names = [p.name for p in build_passes(cfg, RuleCatalog(language="xx"))]
    assert names == ["after_numbers", "between_numbers"]


def test_apply_rules_chains_passes_and_counts() -> None:
    cfg = NbspConfig(language="cs")
    passes = build_passes(cfg, RuleCatalog(language="cs"))
    out, stats = apply_rules("Jdu v Praze 10. ledna", passes)
    assert out == "Jdu v&nbsp;Praze 10.&nbsp;ledna"
    assert stats == {"after_words": 1, "before_months": 1}


@pytest.mark.parametrize("text", ["", "nothing to bind here"])
def test_apply_rules_no_match_is_identity(text: str) -> None:
    passes = build_passes(NbspConfig(language="xx"), RuleCatalog(language="xx"))
    assert apply_rules(text, passes) == (text, {})
