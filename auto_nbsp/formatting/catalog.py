from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from auto_nbsp.formatting.config import WILDCARD, Category, FrozenOverrides

RuleSet = Mapping[str, Mapping[Category, tuple[str, ...]]]


DEFAULT_REPLACEMENTS: dict[str, dict[Category, tuple[str, ...]]] = {
    WILDCARD: {
        Category.PREPOSITIONS_CONJUNCTIONS: ("&", "&amp;"),
        Category.TITLES_BEFORE_NAME: (
            "Bc.", "BcA.", "ing.", "Ing.", "Ing.arch.", "MUDr.", "MVDr.", "MgA.", "Mgr.", "JUDr.",
            "PhDr.", "RNDr.", "PharmDr.", "ThLic.", "ThDr.", "prof.", "doc.", "PaedDr.", "Dr.", "PhMr.",
        ),
        Category.TITLES_AFTER_NAME: ("DiS.", "MBA", "Ph.D.", "Th.D.", "CSc.", "DrSc.", "dr. h. c."),
        Category.UNITS: (
            "m", "g", "l", "q", "t", "w", "J", "%", "ks", "mm", "cm", "km", "mg", "dkg", "kg", "ml", "cl",
            "dl", "hl", "m³", "km³", "mm²", "cm²", "dm²", "m²", "km²", "ha", "Pa", "hPa", "kPa", "MPa",
            "bar", "mbar", "nbar", "atm", "psi", "kW", "MW", "HP", "m/s", "km/h", "m/min", "MPH", "cal",
            "Wh", "kWh", "kp·m", "°C", "°F", "kB", "dB", "MB", "GB", "kHz", "MHz", "Kč", "€",
        ),
    },
    "cs": {
        Category.PREPOSITIONS_CONJUNCTIONS: (
            "a", "i", "o", "u", "k", "s", "v", "z", "by", "co", "či", "do", "je", "ke", "ku", "na", "no",
            "od", "po", "se", "ta", "to", "ve", "za", "ze", "že", "aby", "byl", "což", "jen", "když", "kde",
            "kdy", "který", "která", "které", "nad", "pod", "pro", "před", "při", "tak",
        ),
        Category.ABBREVIATIONS: (
            "cca.", "č.", "čís.", "čj.", "čp.", "fa", "fě", "fy", "kupř.", "mj.", "např.", "p.", "P.", "pí",
            "Pí.", "popř.", "př.", "přib.", "přibl.", "r.", "sl.", "str.", "sv.", "tj.", "tzn.", "tzv.", "zvl.",
        ),
        Category.MONTHS: (
            "leden", "únor", "březen", "duben", "květen", "červen", "červenec", "srpen", "září", "říjen",
            "listopad", "prosinec",
            "ledna", "února", "března", "dubna", "května", "června", "července", "srpna", "října",
            "listopadu", "prosince",
        ),
    },
    "en": {
        Category.ARTICLES: ("a", "an", "the"),
        Category.PREPOSITIONS_CONJUNCTIONS: (
            "of", "in", "on", "at", "by", "to", "for", "and", "&", "but", "or", "nor", "yet", "so", "if", "as",
        ),
        Category.ABBREVIATIONS: ("i.e.", "e.g.", "vs."),
        Category.TITLES_BEFORE_NAME: ("Mr.", "Mrs.", "Ms."),
        Category.MONTHS: (
            "january", "february", "march", "april", "may", "june", "july", "august", "september",
            "october", "november", "december", "a.m.", "p.m.",
        ),
    },
}


def merge_rules(
    base: Mapping[str, Mapping[Category, tuple[str, ...]]],
    overrides: FrozenOverrides,
) -> RuleSet:
    """Union ``overrides`` into ``base`` (per language, per category; overrides append)."""

    merged: dict[str, dict[Category, tuple[str, ...]]] = {
        lang: dict(cats) for lang, cats in base.items()
    }
    for lang, cats in overrides:
        target = merged.setdefault(lang, {})
        for category, tokens in cats:
            target[category] = target.get(category, ()) + tuple(tokens)

    return MappingProxyType({lang: MappingProxyType(cats) for lang, cats in merged.items()})


def _normalize_code(code: str) -> str:
    return code.strip().lower().replace("_", "-")


class RuleCatalog:
    """Word lists per language plus the wildcard ("all languages") lists.

    Wildcard tokens always apply and are merged with, never replaced by, the
    language tokens of the same category. Unknown languages resolve to the
    wildcard lists only.
    """

    def __init__(self, custom_replacements: FrozenOverrides = (), language: str = "en") -> None:
        self.language = language
        self._rules = merge_rules(DEFAULT_REPLACEMENTS, custom_replacements)

    def replacements(self) -> RuleSet:
        return self._rules

    def languages(self) -> list[str]:
        return sorted(lang for lang in self._rules if lang != WILDCARD)

    def matching_languages(self, language: str | None = None) -> list[str]:
        """Rule keys that apply to ``language``, base language first.

        A key applies when it equals the code ignoring case (``CS`` for ``cs``)
        or is its primary subtag (``cs`` for ``cs-CZ`` and ``cs_CZ``). All of
        them contribute, so a regional override extends the base lists.
        """

        code = _normalize_code(str(language or self.language))
        if not code or code == WILDCARD:
            return []
        primary = code.split("-", 1)[0]

        base = [k for k in self._rules if k != WILDCARD and _normalize_code(k) == primary]
        if primary == code:
            return base
        return base + [k for k in self._rules if _normalize_code(k) == code]

    def resolve(self, category: Category | str, language: str | None = None) -> tuple[str, ...]:
        category = Category(category)
        tokens = list(self._rules.get(WILDCARD, {}).get(category, ()))
        for lang in self.matching_languages(language):
            tokens.extend(self._rules[lang].get(category, ()))
        return tuple(tokens)

    def resolve_all(self, language: str | None = None) -> dict[Category, tuple[str, ...]]:
        out: dict[Category, tuple[str, ...]] = {}
        for category in Category:
            tokens = self.resolve(category, language)
            if tokens:
                out[category] = tokens
        return out
