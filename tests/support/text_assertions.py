from __future__ import annotations

from auto_nbsp.formatting.engine import NbspEngine
from auto_nbsp.formatting.markup import protected_spans


def tags_of(text: str) -> list[str]:
    return [text[s:e] for s, e in protected_spans(text)]


def assert_tags_unchanged(before: str, after: str) -> None:
    if tags_of(before) != tags_of(after):
        raise AssertionError(f"markup changed:\n  before={tags_of(before)!r}\n  after={tags_of(after)!r}")


def assert_idempotent(engine: NbspEngine, text: str) -> None:
    once = engine.replace(text)
    twice = engine.replace(once)
    if once != twice:
        raise AssertionError(f"second pass changed the text:\n  once={once!r}\n  twice={twice!r}")
