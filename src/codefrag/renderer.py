"""Rendering façade used by error pages and the profiler.

:class:`CodeRenderer` binds the charset, project directory, highlighter and
link formatter once and exposes every code-related rendering operation as a
method returning an HTML fragment.
"""

from __future__ import annotations

import html
import re
from typing import Any, Mapping, Optional, Sequence

from .arguments import DEFAULT_MAX_DEPTH, abbr, format_html
from .excerpt import DEFAULT_CONTEXT_LINES, file_excerpt_html
from .highlighter import Highlighter, PygmentsHighlighter
from .links import FileLinkFormatter, TemplateFileLinkFormatter
from .markup import check_charset, escape, strip_tags
from .values import Argument, from_pairs

_FILE_MENTION_RE = re.compile(
    r"in (\"|&quot;)?(.+?)(?(1)\1)(?: +(?:on|at))? +line (\d+)", re.DOTALL
)
_ANONYMOUS_FUNCTIONS = ("<lambda>", "Closure")


class CodeRenderer:
    """Renders code excerpts, argument dumps and file references as HTML.

    Attributes:
        charset: Charset used for every escaping call.
        project_dir: Normalised project directory with a trailing slash, or
            None.
        highlighter: Highlighter used for excerpts.
        file_link_formatter: Source of editor links, or None.
        max_depth: Nesting limit for argument dumps.
        context_lines: Default excerpt radius.
    """

    def __init__(
        self,
        file_link_formatter: Optional[FileLinkFormatter | str] = None,
        project_dir: Optional[str] = None,
        charset: str = "UTF-8",
        highlighter: Optional[Highlighter] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        context_lines: int = DEFAULT_CONTEXT_LINES,
    ) -> None:
        """Initialize the renderer.

        Args:
            file_link_formatter: A formatter, or a ``%f``/``%l`` template.
            project_dir: Directory that paths are shown relative to.
            charset: Charset for escaping.
            highlighter: Highlighter for excerpts (default: Pygments).
            max_depth: Nesting limit for argument dumps.
            context_lines: Default excerpt radius.

        Raises:
            UnknownCharsetError: If ``charset`` is not a known codec.
        """
        check_charset(charset)
        if isinstance(file_link_formatter, str):
            file_link_formatter = TemplateFileLinkFormatter(file_link_formatter)
        self.file_link_formatter = file_link_formatter
        self.project_dir = (
            project_dir.replace("\\", "/").rstrip("/") + "/" if project_dir else None
        )
        self.charset = charset
        self.highlighter = highlighter if highlighter is not None else PygmentsHighlighter()
        self.max_depth = max_depth
        self.context_lines = context_lines

    def abbr_class(self, name: str) -> str:
        return abbr(name, self.charset)

    def abbr_method(self, name: str) -> str:
        """Abbreviate ``Class::method``, ``Class.method`` or a function name."""
        if "::" in name:
            class_name, method = name.split("::", 1)
            return f"{self.abbr_class(class_name)}::{escape(method, self.charset)}()"
        if name in _ANONYMOUS_FUNCTIONS:
            return f'<abbr title="{escape(name, self.charset)}">{escape(name, self.charset)}</abbr>'
        if "." in name:
            class_name, method = name.rsplit(".", 1)
            return f"{self.abbr_class(class_name)}.{escape(method, self.charset)}()"
        return f'<abbr title="{escape(name, self.charset)}">{escape(name, self.charset)}</abbr>()'

    def format_args(self, args: Any) -> str:
        """Render an argument dump, typed or in the loose ``(kind, value)`` form."""
        return format_html(
            self._typed(args), charset=self.charset, max_depth=self.max_depth
        )

    def format_args_as_text(self, args: Any) -> str:
        return strip_tags(self.format_args(args))

    def file_excerpt(
        self, path: str, line: int, context: Optional[int] = None
    ) -> Optional[str]:
        """Return an HTML excerpt of ``path`` around ``line``.

        Args:
            path: Source file path.
            line: Selected line number.
            context: Lines shown around it, or -1 for the whole file.
                Defaults to ``context_lines``.

        Returns:
            The excerpt, or None when the file cannot be read.
        """
        if context is None:
            context = self.context_lines
        return file_excerpt_html(path, line, context, highlighter=self.highlighter)

    def get_file_link(self, path: str, line: int) -> Optional[str]:
        if self.file_link_formatter is None:
            return None
        return self.file_link_formatter.format(path, line) or None

    def get_file_relative(self, path: str) -> Optional[str]:
        """Return ``path`` relative to the project directory, or None."""
        path = path.replace("\\", "/")
        if self.project_dir is not None and path.startswith(self.project_dir):
            return path[len(self.project_dir):].lstrip("/")
        return None

    def format_file(self, path: str, line: int, text: Optional[str] = None) -> str:
        """Render a file reference, linked when a file link is available.

        Args:
            path: Absolute file path.
            line: Line number; omitted from the text when not positive.
            text: HTML to show instead of the path.
        """
        path = path.strip()

        if text is None:
            text = escape(path, self.charset)
            relative = self.get_file_relative(path)
            if relative is not None:
                top, _, rest = relative.partition("/")
                text = (
                    f'<abbr title="{escape(self.project_dir + top, self.charset)}">'
                    f"{escape(top, self.charset)}</abbr>/{escape(rest, self.charset)}"
                )

        if line > 0:
            text += f" at line {line}"

        link = self.get_file_link(path, line)
        if link is not None:
            return (
                f'<a href="{escape(link, self.charset)}" title="Click to open this file"'
                f' class="file_link">{text}</a>'
            )
        return text

    def format_file_from_text(self, text: str) -> str:
        """Link every ``in "file" on line N`` mention found in ``text``."""
        return _FILE_MENTION_RE.sub(
            lambda match: "in " + self.format_file(
                html.unescape(match.group(2)), int(match.group(3))
            ),
            text,
        )

    def format_log_message(self, message: str, context: Mapping[str, Any]) -> str:
        """Interpolate ``{key}`` placeholders from scalar context values and escape."""
        if context and "{" in message:
            replacements = {
                f"{{{key}}}": str(value)
                for key, value in context.items()
                if isinstance(value, (str, int, float, bool))
            }
            if replacements:
                pattern = re.compile("|".join(map(re.escape, replacements)))
                message = pattern.sub(lambda match: replacements[match.group()], message)
        return escape(message, self.charset)

    def _typed(self, args: Any) -> list[Argument]:
        if isinstance(args, Sequence) and all(
            isinstance(item, Argument) for item in args
        ):
            return list(args)
        return from_pairs(args)

    def __repr__(self) -> str:
        return (
            f"CodeRenderer(project_dir={self.project_dir!r}, charset={self.charset!r}, "
            f"file_link_formatter={self.file_link_formatter!r})"
        )

