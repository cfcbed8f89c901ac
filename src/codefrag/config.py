"""Settings for codefrag, resolved from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from .arguments import DEFAULT_MAX_DEPTH
from .exceptions import UnknownCharsetError
from .excerpt import DEFAULT_CONTEXT_LINES
from .highlighter import PygmentsHighlighter, check_style
from .markup import check_charset
from .renderer import CodeRenderer

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CHARSET = "UTF-8"
DEFAULT_STYLE = "default"


@dataclass
class Settings:
    """Rendering settings.

    Attributes:
        charset: Charset used for HTML escaping.
        file_link_format: ``%f``/``%l`` template for editor links, or None.
        project_dir: Directory paths are shown relative to, or None.
        context_lines: Default excerpt radius; negative shows the whole file.
        max_depth: Nesting limit for argument dumps.
        style: Pygments style name for excerpts.
    """

    charset: str = DEFAULT_CHARSET
    file_link_format: Optional[str] = None
    project_dir: Optional[str] = None
    context_lines: int = DEFAULT_CONTEXT_LINES
    max_depth: int = DEFAULT_MAX_DEPTH
    style: str = DEFAULT_STYLE

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``CODEFRAG_*`` environment variables.

        Invalid values are logged and replaced by their defaults.
        """
        return cls(
            charset=_resolve("CODEFRAG_CHARSET", DEFAULT_CHARSET, _parse_charset),
            file_link_format=os.getenv("CODEFRAG_FILE_LINK_FORMAT") or None,
            project_dir=os.getenv("CODEFRAG_PROJECT_DIR") or None,
            context_lines=_resolve("CODEFRAG_CONTEXT_LINES", DEFAULT_CONTEXT_LINES, int),
            max_depth=_resolve("CODEFRAG_MAX_DEPTH", DEFAULT_MAX_DEPTH, _parse_depth),
            style=_resolve("CODEFRAG_STYLE", DEFAULT_STYLE, _parse_style),
        )

    def build_renderer(self) -> CodeRenderer:
        return CodeRenderer(
            file_link_formatter=self.file_link_format,
            project_dir=self.project_dir,
            charset=self.charset,
            highlighter=PygmentsHighlighter(style=self.style),
            max_depth=self.max_depth,
            context_lines=self.context_lines,
        )


def _resolve(name: str, default: T, parse: Callable[[str], T]) -> T:
    env_value = os.getenv(name)
    if env_value is None or env_value == "":
        return default
    try:
        return parse(env_value)
    except (ValueError, UnknownCharsetError):
        logger.warning("Ignoring invalid %s=%r; using default %r", name, env_value, default)
        return default


def _parse_charset(value: str) -> str:
    check_charset(value)
    return value


def _parse_style(value: str) -> str:
    check_style(value)
    return value


def _parse_depth(value: str) -> int:
    depth = int(value)
    if depth < 0:
        raise ValueError
    return depth
