"""HTML rendering of stack-frame argument dumps."""

from __future__ import annotations

import re

from .markup import escape, strip_tags
from .values import (
    ArgumentTuple,
    ArgumentValue,
    ArrayValue,
    BooleanValue,
    NullValue,
    ObjectValue,
    ResourceValue,
    ScalarValue,
)

DEFAULT_MAX_DEPTH = 10
ENTRY_SEPARATOR = ", "
TOO_DEEP_HTML = "<em>array</em>(...)"

_NAME_SEPARATOR_RE = re.compile(r"::|\.|\\")


def short_name(qualified: str) -> str:
    """Return the last segment of a ``::``, ``.`` or ``\\`` separated name."""
    return _NAME_SEPARATOR_RE.split(qualified)[-1]


def abbr(qualified: str, charset: str = "UTF-8") -> str:
    """Render a short name with the full name as its tooltip."""
    return (
        f'<abbr title="{escape(qualified, charset)}">'
        f"{escape(short_name(qualified), charset)}</abbr>"
    )


def export(value: object) -> str:
    """Return the one-line source representation of a scalar."""
    return repr(value).replace("\r", "").replace("\n", "")


def format_html(
    args: ArgumentTuple,
    *,
    charset: str = "UTF-8",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Render an argument dump as an HTML fragment.

    Entries keep their input order. Keyed entries render as
    ``'key' => value``, positional ones as the bare value.

    Args:
        args: The typed arguments.
        charset: Charset used for every escaping call.
        max_depth: Array nesting level past which the contents are replaced
            by a placeholder.

    Returns:
        The HTML, ready to embed without further escaping.
    """
    return _format_entries(args, charset, max_depth, 0)


def format_text(
    args: ArgumentTuple,
    *,
    charset: str = "UTF-8",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Render an argument dump as plain text (the HTML form without tags)."""
    return strip_tags(format_html(args, charset=charset, max_depth=max_depth))


def _format_entries(
    args: ArgumentTuple, charset: str, max_depth: int, depth: int
) -> str:
    result = []
    for argument in args:
        formatted = _format_value(argument.value, charset, max_depth, depth)
        if argument.is_keyed:
            formatted = f"'{escape(argument.key, charset)}' => {formatted}"
        result.append(formatted)
    return ENTRY_SEPARATOR.join(result)


def _format_value(
    value: ArgumentValue, charset: str, max_depth: int, depth: int
) -> str:
    if isinstance(value, ObjectValue):
        return f"<em>object</em>({abbr(value.type_name, charset)})"
    if isinstance(value, ArrayValue):
        if isinstance(value.items, str):
            return f"<em>array</em>({value.items})"
        if depth >= max_depth:
            return TOO_DEEP_HTML
        inner = _format_entries(value.items, charset, max_depth, depth + 1)
        return f"<em>array</em>({inner})"
    if isinstance(value, NullValue):
        return "<em>null</em>"
    if isinstance(value, BooleanValue):
        return "<em>true</em>" if value.value else "<em>false</em>"
    if isinstance(value, ResourceValue):
        return "<em>resource</em>"
    if isinstance(value, ScalarValue):
        return escape(export(value.value), charset)
    return escape(export(value), charset)
