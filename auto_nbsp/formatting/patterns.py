from __future__ import annotations

import re
from collections.abc import Iterable

from auto_nbsp.formatting.config import BREAKABLE_WS

_inner_ws_re = re.compile(r"\s+")


def _escape_token(token: str, joiner: str) -> str:
    parts = [re.escape(p) for p in _inner_ws_re.split(token.strip()) if p]
    return joiner.join(parts)


def build_alternation(tokens: Iterable[str], *, joiner: str | None = None) -> str:
    """Join literal tokens into one regex alternation.

    Every token is escaped, so ``.`` in ``např.`` or ``/`` in ``km/h`` is
    literal. Whitespace inside a multi-word token (``dr. h. c.``) matches a
    breakable whitespace run or ``joiner`` (normally the marker, so a token
    already bound by an earlier pass still matches).

    Order does not matter for correctness: callers anchor the alternation with
    boundary assertions, which force the engine to backtrack into a longer
    alternative (``Ing.arch.``) when a shorter prefix (``ing.``) does not fit.
    """

    inner = f"{BREAKABLE_WS}+"
    if joiner:
        inner = f"(?:{inner}|{re.escape(joiner)})"

    seen: dict[str, None] = {}
    for token in tokens:
        if not isinstance(token, str) or not token.strip():
            continue
        seen.setdefault(_escape_token(token, inner), None)

    if not seen:
        raise ValueError("cannot build a pattern from an empty token list")
    return "|".join(seen)


def build_pattern(
    tokens: Iterable[str],
    *,
    prefix: str = "",
    suffix: str = "",
    flags: int = 0,
    joiner: str | None = None,
) -> re.Pattern[str]:
    alternation = build_alternation(tokens, joiner=joiner)
    return re.compile(f"{prefix}(?:{alternation}){suffix}", flags)
