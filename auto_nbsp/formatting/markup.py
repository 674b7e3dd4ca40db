from __future__ import annotations

import re
from bisect import bisect_right

# Neither the unquoted runs nor quoted values may contain '<', so a tag attempt
# never scans past the next '<'. Quoted values may contain '>'.
_tag_re = re.compile(r"""<[A-Za-z/!?][^<>"']*(?:(?:"[^"<]*"|'[^'<]*')[^<>"']*)*>""")
_raw_open_re = re.compile(r"<(script|style)\b", re.IGNORECASE)
_raw_close_re = {
    name: re.compile(rf"</{name}\s*>", re.IGNORECASE) for name in ("script", "style")
}


def protected_spans(text: str) -> list[tuple[int, int]]:
    """Return sorted ``(start, end)`` spans that are markup, not text.

    Covers comments, whole ``<script>``/``<style>`` elements and ordinary
    tags. A ``<`` that does not open a tag (``a < b``) stays text, and so does
    an unterminated tag or a quoted attribute value holding ``<``. This is a
    segmentation, not an HTML parser.

    Runs in time linear in ``len(text)``: every closing delimiter is searched
    for at most once after it is known to be missing.
    """

    if "<" not in text:
        return []

    spans: list[tuple[int, int]] = []
    unclosed: set[str] = set()
    pos = text.find("<")
    while pos != -1:
        end = _span_end(text, pos, unclosed)
        if end is None:
            pos = text.find("<", pos + 1)
            continue
        spans.append((pos, end))
        pos = text.find("<", end)
    return spans


def _span_end(text: str, pos: int, unclosed: set[str]) -> int | None:
    if text.startswith("<!--", pos) and "comment" not in unclosed:
        close = text.find("-->", pos + 4)
        if close != -1:
            return close + 3
        unclosed.add("comment")

    tag = _tag_re.match(text, pos)
    if tag is None:
        return None

    raw = _raw_open_re.match(text, pos)
    if raw is not None:
        name = raw.group(1).lower()
        if name not in unclosed:
            close = _raw_close_re[name].search(text, tag.end())
            if close is not None:
                return close.end()
            unclosed.add(name)
    return tag.end()


def in_spans(spans: list[tuple[int, int]], starts: list[int], pos: int) -> bool:
    i = bisect_right(starts, pos) - 1
    return i >= 0 and pos < spans[i][1]
