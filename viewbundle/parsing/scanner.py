"""Event-driven scanner for tag markup.

The scanner walks a document once and reports start tags, end tags and text
through callbacks. Tags selected by ``raw_tags`` have their body reported as a
single raw text event instead of being scanned for nested markup.
"""

from __future__ import annotations

import re
from typing import Callable

StartHandler = Callable[[str, str, "dict[str, str]"], None]
TextHandler = Callable[[str, bool], None]
EndHandler = Callable[[str, str], None]
EndMatcher = Callable[[str], re.Pattern[str]]

_TAG_NAME = r"[^\s=/!>]+"
_ATTR_VALUE = r"""(?:"(?:\\.|[^"])*"|'(?:\\.|[^'])*'|[^>\s]+)"""

START_TAG = re.compile(
    rf"<({_TAG_NAME})((?:\s+[^\s=/>]+(?:\s*=\s*{_ATTR_VALUE})?)*)\s*(/?)\s*>"
)
END_TAG = re.compile(rf"</({_TAG_NAME})[^>]*>")
ATTRIBUTE = re.compile(
    r"""([^\s=/>]+)(?:\s*=\s*(?:"((?:\\.|[^"])*)"|'((?:\\.|[^'])*)'|([^>\s]+)))?"""
)
COMMENT = re.compile(r"<!--.*?-->", re.S)
DECLARATION = re.compile(r"<![^>]*>")


def parse_attributes(raw: str) -> dict[str, str]:
    """Parse the attribute section of a start tag.

    Valueless attributes map to the empty string.
    """
    attrs: dict[str, str] = {}
    for match in ATTRIBUTE.finditer(raw):
        name, double, single, bare = match.groups()
        value = next((v for v in (double, single, bare) if v is not None), "")
        attrs[name] = value
    return attrs


def default_match_end(tag_name: str) -> re.Pattern[str]:
    return re.compile(rf"</{re.escape(tag_name)}", re.I)


def scan(
    text: str,
    *,
    raw_tags: re.Pattern[str] | Callable[[str], bool],
    on_start: StartHandler,
    on_text: TextHandler,
    on_end: EndHandler | None = None,
    match_end: EndMatcher | None = None,
) -> None:
    """Scan ``text`` and report markup events to the handlers.

    Args:
        text: Markup to scan
        raw_tags: Pattern or predicate selecting tags whose body is raw text
        on_start: Called with ``(tag, name, attrs)`` for every start tag
        on_text: Called with ``(text, is_raw)`` for text and raw bodies
        on_end: Called with ``(tag, name)`` for every end tag
        match_end: Returns the pattern that ends the raw body of a tag
    """
    is_raw = raw_tags.search if isinstance(raw_tags, re.Pattern) else raw_tags
    find_end = match_end or default_match_end
    pos = 0
    length = len(text)

    while pos < length:
        if text.startswith("<", pos):
            if text.startswith("<!--", pos):
                comment = COMMENT.match(text, pos)
                pos = comment.end() if comment else length
                continue

            if text.startswith("<!", pos):
                declaration = DECLARATION.match(text, pos)
                if declaration:
                    pos = declaration.end()
                    continue

            end = END_TAG.match(text, pos)
            if end:
                pos = end.end()
                if on_end is not None:
                    on_end(end.group(0), end.group(1))
                continue

            start = START_TAG.match(text, pos)
            if start:
                pos = start.end()
                tag_name = start.group(1)
                on_start(start.group(0), tag_name, parse_attributes(start.group(2)))
                if is_raw(tag_name):
                    body_end = find_end(tag_name).search(text, pos)
                    stop = body_end.start() if body_end else length
                    on_text(text[pos:stop], True)
                    pos = stop
                continue

        # Plain text runs up to the next "<" that is not at the current position
        next_lt = text.find("<", pos + 1)
        stop = length if next_lt < 0 else next_lt
        on_text(text[pos:stop], False)
        pos = stop
