from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Annotated, Any

from pydantic import StringConstraints, TypeAdapter, ValidationError

NBSP_ENTITY = "&nbsp;"
WILDCARD = "*"

# Whitespace a browser may break on. No-break spaces are excluded so a raw U+00A0 marker is never re-matched.
BREAKABLE_WS = r"[^\S\u00a0\u2007\u202f]"

_breakable_ws_re = re.compile(BREAKABLE_WS)
_marker_tag_re = re.compile(r"<[^>]*>")


class InvalidConfiguration(ValueError):
    pass


class Category(StrEnum):
    PREPOSITIONS_CONJUNCTIONS = "prepositions_conjunctions"
    ARTICLES = "articles"
    ABBREVIATIONS = "abbreviations"
    TITLES_BEFORE_NAME = "titles_before_name"
    TITLES_AFTER_NAME = "titles_after_name"
    UNITS = "units"
    MONTHS = "months"


Token = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]
Language = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]

_overrides_adapter = TypeAdapter(dict[Language, dict[Category, list[Token]]])

# language -> ((category, tokens), ...), hashable and read-only.
FrozenOverrides = tuple[tuple[str, tuple[tuple[Category, tuple[str, ...]], ...]], ...]


def freeze_overrides(raw: Mapping[str, Any] | None) -> FrozenOverrides:
    """Validate caller-supplied replacements and freeze them into nested tuples.

    The expected shape is ``{language-or-"*": {category: [token, ...]}}``.
    Anything else raises :class:`InvalidConfiguration`.
    """

    if raw is None:
        return ()
    if isinstance(raw, tuple):
        # Already frozen (e.g. dataclasses.replace on an existing config).
        try:
            raw = {lang: {cat: list(tokens) for cat, tokens in cats} for lang, cats in raw}
        except (TypeError, ValueError) as e:
            raise InvalidConfiguration("custom replacements must be a mapping") from e
    if not isinstance(raw, Mapping):
        raise InvalidConfiguration(f"custom replacements must be a mapping, got {type(raw).__name__}")

    stripped: dict[str, str] = {}
    for key in raw:
        if not isinstance(key, str):
            continue
        other = stripped.setdefault(key.strip(), key)
        if other != key:
            raise InvalidConfiguration(f"custom replacements keys {other!r} and {key!r} name the same language")
    try:
        parsed = _overrides_adapter.validate_python(dict(raw))
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        raise InvalidConfiguration(f"invalid custom replacements at {loc or '<root>'}: {err.get('msg')}") from e

    return tuple(
        (lang, tuple((Category(cat), tuple(tokens)) for cat, tokens in cats.items()))
        for lang, cats in parsed.items()
    )


@dataclass(frozen=True)
class NbspConfig:
    language: str = "en"
    custom_replacements: Mapping[str, Any] | FrozenOverrides = field(default=())

    # Rules
    prepositions_conjunctions: bool = True
    articles: bool = True
    abbreviations: bool = True
    titles: bool = True
    # Unit symbols are short and ambiguous; default off.
    units: bool = False
    months: bool = True
    after_numbers: bool = True
    between_numbers: bool = True

    # Highlight every inserted marker (inspection only, matching is unchanged).
    debug: bool = False
    marker: str = NBSP_ENTITY

    def __post_init__(self) -> None:
        language = str(self.language or "").strip()
        if not language:
            raise InvalidConfiguration("language must be a non-empty code")
        object.__setattr__(self, "language", language)
        object.__setattr__(self, "custom_replacements", freeze_overrides(self.custom_replacements))

        if not isinstance(self.marker, str) or not self.marker:
            raise InvalidConfiguration("marker must be a non-empty string")
        if _breakable_ws_re.search(_marker_tag_re.sub("", self.marker)):
            raise InvalidConfiguration("marker must not contain breakable whitespace")

    @property
    def nbsp(self) -> str:
        if self.debug:
            return f'<span style="background:red;">{self.marker}</span>'
        return self.marker

    def enabled_categories(self) -> tuple[Category, ...]:
        """Categories whose tokens bind the following word (the after-words pass)."""

        out: list[Category] = []
        if self.prepositions_conjunctions:
            out.append(Category.PREPOSITIONS_CONJUNCTIONS)
        if self.articles:
            out.append(Category.ARTICLES)
        if self.titles:
            out.append(Category.TITLES_BEFORE_NAME)
        if self.abbreviations:
            out.append(Category.ABBREVIATIONS)
        return tuple(out)
