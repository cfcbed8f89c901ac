"""Links from rendered paths to an editor or source browser."""

from __future__ import annotations

import re
from typing import Optional, Protocol

_PLACEHOLDER_RE = re.compile(r"%[fl]")


class FileLinkFormatter(Protocol):
    """Turns a file/line pair into a URL, or None when there is no link."""

    def format(self, path: str, line: int) -> Optional[str]:
        ...


class TemplateFileLinkFormatter:
    """Link formatter driven by a template such as ``vscode://file/%f:%l``.

    ``%f`` is replaced by the file path and ``%l`` by the line number.
    """

    def __init__(self, template: str) -> None:
        self.template = template

    def format(self, path: str, line: int) -> Optional[str]:
        if not self.template:
            return None
        # single pass, so a path containing "%l" is left alone
        return _PLACEHOLDER_RE.sub(
            lambda match: path if match.group() == "%f" else str(line),
            self.template,
        )

    def __repr__(self) -> str:
        return f"TemplateFileLinkFormatter({self.template!r})"
