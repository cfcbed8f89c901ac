"""Markup helpers shared by the excerpt and argument renderers.

The only tags the line balancer knows about are ``<span ...>`` and
``</span>``; everything else on a line is passed through untouched.
"""

from __future__ import annotations

import codecs
import html
import re

from .exceptions import UnknownCharsetError

OPEN_SPAN = "<span"
CLOSE_SPAN = "</span>"

_SPAN_TAG_RE = re.compile(r"<span\b[^>]*>|</span>")
_TAG_RE = re.compile(r"<[^>]*>|<[^>]*$")
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def check_charset(charset: str) -> str:
    """Return the canonical codec name for ``charset``.

    Raises:
        UnknownCharsetError: If Python has no text codec for it. Binary
            transforms such as ``rot13`` or ``zlib`` are rejected too.
    """
    try:
        name = codecs.lookup(charset).name
        "".encode(charset)
        b"".decode(charset)
    except LookupError as exc:
        raise UnknownCharsetError(charset) from exc
    return name


def escape(value: object, charset: str = "UTF-8") -> str:
    """Escape ``value`` for an HTML text node or double-quoted attribute.

    Single quotes are left alone. Characters the charset cannot represent
    become numeric character references and lone surrogates become U+FFFD.
    """
    text = _SURROGATE_RE.sub("\ufffd", str(value))
    escaped = html.escape(text, quote=False).replace('"', "&quot;")
    return escaped.encode(charset, "xmlcharrefreplace").decode(charset)


def strip_tags(markup: str) -> str:
    """Remove every tag from ``markup``, including a trailing unclosed one."""
    return _TAG_RE.sub("", markup)


def balance_spans(line: str) -> str:
    """Make the spans of a single excerpt line balanced on their own.

    The line is scanned tag by tag while tracking how many spans opened on
    this line are still open. A closing tag met with nothing open belongs to
    a span from a previous line and is dropped; spans left open at the end
    are closed.

    Only span nesting is repaired. When several nested spans cross the same
    line break, the outer ones are not reopened on the next line.
    """
    parts = []
    depth = 0
    pos = 0
    for match in _SPAN_TAG_RE.finditer(line):
        parts.append(line[pos:match.start()])
        pos = match.end()
        tag = match.group()
        if tag == CLOSE_SPAN:
            if depth == 0:
                continue
            depth -= 1
        else:
            depth += 1
        parts.append(tag)
    parts.append(line[pos:])
    parts.append(CLOSE_SPAN * depth)
    return "".join(parts).strip()


def is_balanced(markup: str) -> bool:
    """Return True if every span in ``markup`` is closed in order."""
    depth = 0
    for match in _SPAN_TAG_RE.finditer(markup):
        if match.group() == CLOSE_SPAN:
            depth -= 1
            if depth < 0:
                return False
        else:
            depth += 1
    return depth == 0
