"""Syntax highlighting of source files into a single HTML blob.

The blob uses an in-band marker instead of line feeds and is wrapped in a
``<code><span>`` container, which is the shape the excerpt reflow expects.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

LINE_BREAK = "<br />"


def check_style(style: str) -> None:
    """Raise ClassNotFound (a ValueError) if Pygments has no such style."""
    get_style_by_name(style)


class Highlighter(Protocol):
    """Anything that turns a source file into a highlighted blob."""

    def highlight_file(self, path: str) -> str:
        ...


class PygmentsHighlighter:
    """Highlighter backed by Pygments with inline styles.

    Attributes:
        style: Name of the Pygments style.
        line_break: Marker written between lines.
    """

    def __init__(self, style: str = "default", line_break: str = LINE_BREAK) -> None:
        check_style(style)
        self.style = style
        self.line_break = line_break

    def highlight_file(self, path: str) -> str:
        """Highlight the file at ``path``.

        Raises:
            OSError: If the file cannot be read.
        """
        source = Path(path).read_text(encoding="utf-8", errors="replace")
        return self.highlight_source(source, filename=path)

    def highlight_source(self, source: str, filename: str = "") -> str:
        try:
            lexer = get_lexer_for_filename(filename, source, stripnl=False)
        except ClassNotFound:
            logger.debug("No lexer for %s, highlighting as plain text", filename)
            lexer = TextLexer(stripnl=False)

        formatter = HtmlFormatter(nowrap=True, noclasses=True, style=self.style)
        body = highlight(source, lexer, formatter)

        # Pygments always terminates the output with a line feed
        if body.endswith("\n"):
            body = body[:-1]
        body = body.replace("\n", self.line_break)
        return f'<code><span style="color: #000000">{body}</span></code>'
