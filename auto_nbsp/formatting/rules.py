from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from auto_nbsp.formatting.catalog import RuleCatalog
from auto_nbsp.formatting.config import BREAKABLE_WS, Category, NbspConfig
from auto_nbsp.formatting.markup import in_spans, protected_spans
from auto_nbsp.formatting.patterns import build_pattern

_WS = rf"(?P<ws>{BREAKABLE_WS}+)"

_after_numbers_re = re.compile(rf"(?<=\d){_WS}(?=\w)")
_between_numbers_re = re.compile(rf"(?<=\d)\.?{_WS}(?=\d)")


@dataclass(frozen=True)
class Pass:
    """One rewrite step: every match's ``ws`` group becomes the marker."""

    name: str
    pattern: re.Pattern[str]
    nbsp: str

    def apply(self, text: str) -> tuple[str, int]:
        spans = protected_spans(text)
        starts = [s for s, _ in spans]
        count = 0

        def _repl(m: re.Match[str]) -> str:
            nonlocal count
            ws_start, ws_end = m.span("ws")
            if spans and in_spans(spans, starts, ws_start):
                return m.group(0)
            count += 1
            s = m.string
            return s[m.start() : ws_start] + self.nbsp + s[ws_end : m.end()]

        out = self.pattern.sub(_repl, text)
        return out, count


def after_words_pass(tokens: Iterable[str], nbsp: str) -> Pass:
    # Unicode \w: diacritics are word characters, so "může" never matches the token "že".
    pattern = build_pattern(tokens, prefix=r"(?<!\w)", suffix=_WS, flags=re.IGNORECASE, joiner=nbsp)
    return Pass("after_words", pattern, nbsp)


def before_words_pass(tokens: Iterable[str], nbsp: str) -> Pass:
    pattern = build_pattern(tokens, prefix=_WS, suffix=r"(?!\w)", flags=re.IGNORECASE, joiner=nbsp)
    return Pass("before_words", pattern, nbsp)


def before_months_pass(tokens: Iterable[str], nbsp: str) -> Pass:
    # "5. května": the ordinal period stays before the marker.
    pattern = build_pattern(
        tokens, prefix=rf"(?<=\d)\.?{_WS}", suffix=r"(?!\w)", flags=re.IGNORECASE, joiner=nbsp
    )
    return Pass("before_months", pattern, nbsp)


def after_numbers_pass(nbsp: str) -> Pass:
    return Pass("after_numbers", _after_numbers_re, nbsp)


def between_numbers_pass(nbsp: str) -> Pass:
    return Pass("between_numbers", _between_numbers_re, nbsp)


def before_units_pass(tokens: Iterable[str], nbsp: str) -> Pass:
    # Case-sensitive: "m" (metre) and "M" are different units.
    pattern = build_pattern(tokens, prefix=rf"(?<=\d){_WS}", suffix=r"(?!\w)", joiner=nbsp)
    return Pass("before_units", pattern, nbsp)


def build_passes(config: NbspConfig, catalog: RuleCatalog) -> tuple[Pass, ...]:
    """Compile the enabled passes for ``config`` in their fixed order.

    A word pass whose toggle is off, or whose word list resolves empty, is
    skipped entirely.
    """

    nbsp = config.nbsp
    lang = config.language
    passes: list[Pass] = []

    after_words: list[str] = []
    for category in config.enabled_categories():
        after_words.extend(catalog.resolve(category, lang))
    if after_words:
        passes.append(after_words_pass(after_words, nbsp))

    if config.titles:
        titles_after = catalog.resolve(Category.TITLES_AFTER_NAME, lang)
        if titles_after:
            passes.append(before_words_pass(titles_after, nbsp))

    if config.months:
        months = catalog.resolve(Category.MONTHS, lang)
        if months:
            passes.append(before_months_pass(months, nbsp))

    if config.after_numbers:
        passes.append(after_numbers_pass(nbsp))

    if config.between_numbers:
        passes.append(between_numbers_pass(nbsp))

    if config.units:
        units = catalog.resolve(Category.UNITS, lang)
        if units:
            passes.append(before_units_pass(units, nbsp))

    return tuple(passes)


def apply_rules(text: str, passes: Sequence[Pass]) -> tuple[str, dict[str, int]]:
    stats: dict[str, int] = {}

    for p in passes:
        text, n = p.apply(text)
        if n:
            stats[p.name] = stats.get(p.name, 0) + n

    return text, stats
