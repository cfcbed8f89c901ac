"""codefrag.

Safe HTML fragments for debug displays: highlighted source excerpts and
stack-frame argument dumps.
"""

__version__ = "0.1.0"
__all__ = [
    "Argument",
    "ArrayValue",
    "BooleanValue",
    "CodeFragError",
    "CodeRenderer",
    "InvalidArgumentsError",
    "LineFragment",
    "NullValue",
    "ObjectValue",
    "PygmentsHighlighter",
    "ResourceValue",
    "ScalarValue",
    "Settings",
    "TemplateFileLinkFormatter",
    "UnknownCharsetError",
    "describe",
    "describe_frame",
    "excerpt_file",
    "format_html",
    "format_text",
    "from_pairs",
    "reflow",
]

from .arguments import format_html, format_text
from .config import Settings
from .exceptions import CodeFragError, InvalidArgumentsError, UnknownCharsetError
from .excerpt import LineFragment, excerpt_file, reflow
from .highlighter import PygmentsHighlighter
from .links import TemplateFileLinkFormatter
from .renderer import CodeRenderer
from .values import (
    Argument,
    ArrayValue,
    BooleanValue,
    NullValue,
    ObjectValue,
    ResourceValue,
    ScalarValue,
    describe,
    describe_frame,
    from_pairs,
)
