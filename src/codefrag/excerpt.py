"""Source excerpts built from highlighted code.

A highlighter hands back one blob for the whole file, in which a styling
span may start on one line and end several lines later. This module cuts
that blob into lines whose markup is well formed on its own, keeping only
the lines around the one of interest.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from .highlighter import LINE_BREAK, Highlighter, PygmentsHighlighter
from .markup import balance_spans

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_LINES = 3

_WRAPPER_RE = re.compile(r"^<code.*?>\s*<span.*?>(.*)</span>\s*</code>", re.DOTALL)


@dataclass(frozen=True)
class LineFragment:
    """One line of an excerpt.

    Attributes:
        number: 1-indexed line number in the source file.
        selected: Whether this is the line the excerpt is centred on.
        markup: HTML for the line, with balanced spans.
    """

    number: int
    selected: bool
    markup: str


def unwrap(blob: str) -> str:
    """Strip the ``<code><span>`` container around a whole highlighted file.

    Blobs of any other shape are returned unchanged.
    """
    return _WRAPPER_RE.sub(r"\1", blob, count=1)


def split_multiline_spans(blob: str, line_break: str = LINE_BREAK) -> str:
    """Close and reopen tag-free spans around every line break they contain."""
    if line_break.startswith("<"):
        body = rf"(?:[^<]|{re.escape(line_break)})*"
    else:
        body = r"[^<]*"
    pattern = re.compile(rf"<span ([^>]+)>({body})</span>")

    def _split(match: re.Match) -> str:
        attrs, content = match.group(1), match.group(2)
        if line_break not in content:
            return match.group(0)
        content = content.replace(line_break, f"</span>{line_break}<span {attrs}>")
        return f"<span {attrs}>{content}</span>"

    return pattern.sub(_split, blob)


def reflow(
    blob: str,
    selected_line: int,
    context_radius: int = DEFAULT_CONTEXT_LINES,
    *,
    line_break: str = LINE_BREAK,
) -> list[LineFragment]:
    """Cut a highlighted blob into balanced lines around ``selected_line``.

    Args:
        blob: Highlighted source, lines separated by ``line_break``.
        selected_line: 1-indexed line to centre the excerpt on.
        context_radius: Lines to keep on each side; negative keeps them all.
        line_break: In-band line separator used by the highlighter.

    Returns:
        Fragments in ascending line order. Empty when ``selected_line`` lies
        past the end of the blob.
    """
    code = split_multiline_spans(unwrap(blob), line_break)
    lines = code.split(line_break)

    if context_radius < 0:
        context_radius = len(lines)

    first = max(selected_line - context_radius, 1)
    last = min(selected_line + context_radius, len(lines))
    return [
        LineFragment(
            number=number,
            selected=number == selected_line,
            markup=balance_spans(lines[number - 1]),
        )
        for number in range(first, last + 1)
    ]


def is_readable_file(path: str) -> bool:
    """Return True when ``path`` is a regular file this process can read."""
    return os.path.isfile(path) and os.access(path, os.R_OK)


def excerpt_file(
    path: str,
    selected_line: int,
    context_radius: int = DEFAULT_CONTEXT_LINES,
    *,
    highlighter: Optional[Highlighter] = None,
    line_break: str = LINE_BREAK,
) -> Optional[list[LineFragment]]:
    """Highlight a source file and reflow it around ``selected_line``.

    Returns:
        The fragments, or None when ``path`` is not a readable regular file.
    """
    if not is_readable_file(path):
        logger.debug("No excerpt for %s: not a readable file", path)
        return None

    if highlighter is None:
        highlighter = PygmentsHighlighter(line_break=line_break)

    try:
        blob = highlighter.highlight_file(path)
    except OSError as exc:
        logger.debug("No excerpt for %s: %s", path, exc)
        return None

    return reflow(blob, selected_line, context_radius, line_break=line_break)


def render_fragments(fragments: Sequence[LineFragment], start: Optional[int] = None) -> str:
    """Render fragments as an ordered list starting at their first line."""
    if start is None:
        start = fragments[0].number if fragments else 1
    items = []
    for fragment in fragments:
        css = ' class="selected"' if fragment.selected else ""
        items.append(
            f'<li{css}><a class="anchor" id="line{fragment.number}"></a>'
            f"<code>{fragment.markup}</code></li>"
        )
    return f'<ol start="{start}">' + "\n".join(items) + "</ol>"


def file_excerpt_html(
    path: str,
    selected_line: int,
    context_radius: int = DEFAULT_CONTEXT_LINES,
    *,
    highlighter: Optional[Highlighter] = None,
    line_break: str = LINE_BREAK,
) -> Optional[str]:
    """Return the excerpt of ``path`` as an HTML list, or None."""
    fragments = excerpt_file(
        path,
        selected_line,
        context_radius,
        highlighter=highlighter,
        line_break=line_break,
    )
    if fragments is None:
        return None
    if context_radius < 0:
        start = 1
    else:
        start = max(selected_line - context_radius, 1)
    return render_fragments(fragments, start)
