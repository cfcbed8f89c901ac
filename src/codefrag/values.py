"""Typed description of stack-frame arguments.

An argument dump is an ordered sequence of :class:`Argument` entries. Each
entry carries one of a closed set of value variants, so the formatter can
handle every kind explicitly instead of switching on loose strings.
"""

from __future__ import annotations

import inspect
import io
import socket
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from types import FrameType
from typing import Any, ClassVar, Union

from .exceptions import InvalidArgumentsError

DEEP_NESTED_PLACEHOLDER = "*DEEP NESTED ARRAY*"
RECURSION_PLACEHOLDER = "*RECURSION*"
DEFAULT_DESCRIBE_DEPTH = 10
DEFAULT_DESCRIBE_ITEMS = 2500


@dataclass(frozen=True)
class ObjectValue:
    """An object instance, described by its fully-qualified type name."""

    type_name: str
    kind: ClassVar[str] = "object"


@dataclass(frozen=True)
class ArrayValue:
    """A container: nested arguments, or text rendered ahead of time."""

    items: Union[Sequence["Argument"], str]
    kind: ClassVar[str] = "array"


@dataclass(frozen=True)
class NullValue:
    kind: ClassVar[str] = "null"


@dataclass(frozen=True)
class BooleanValue:
    value: bool
    kind: ClassVar[str] = "boolean"


@dataclass(frozen=True)
class ResourceValue:
    """An OS-level handle (file, socket) with no stable textual form."""

    kind: ClassVar[str] = "resource"


@dataclass(frozen=True)
class ScalarValue:
    value: Any
    kind: ClassVar[str] = "scalar"


ArgumentValue = Union[
    ObjectValue, ArrayValue, NullValue, BooleanValue, ResourceValue, ScalarValue
]


@dataclass(frozen=True)
class Argument:
    """One entry of an argument dump.

    Attributes:
        key: Position index for positional entries, name for keyed ones.
        value: The typed value.
    """

    key: Union[int, str]
    value: ArgumentValue

    @property
    def is_keyed(self) -> bool:
        return isinstance(self.key, str)


ArgumentTuple = Sequence[Argument]


def from_pairs(raw: Any) -> list[Argument]:
    """Build typed arguments from the loose ``(kind, value)`` form.

    Args:
        raw: Either a mapping of ``key -> (kind, value)`` or a sequence of
            ``(kind, value)`` pairs, which get positional keys.

    Returns:
        The typed argument list, in input order.

    Raises:
        InvalidArgumentsError: If ``raw`` or one of its entries has the
            wrong shape.
    """
    if isinstance(raw, Mapping):
        entries = list(raw.items())
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        entries = list(enumerate(raw))
    else:
        raise InvalidArgumentsError(raw, "expected a mapping or a sequence")

    arguments = []
    for key, item in entries:
        if not isinstance(key, (int, str)) or isinstance(key, bool):
            raise InvalidArgumentsError(raw, f"unsupported key {key!r}")
        if (
            not isinstance(item, Sequence)
            or isinstance(item, (str, bytes))
            or len(item) != 2
        ):
            raise InvalidArgumentsError(item, "expected a (kind, value) pair")
        kind, value = item
        arguments.append(Argument(key, _value_from_pair(kind, value)))
    return arguments


def _value_from_pair(kind: Any, value: Any) -> ArgumentValue:
    if kind == "object":
        return ObjectValue(str(value))
    if kind == "array":
        if isinstance(value, str):
            return ArrayValue(value)
        return ArrayValue(from_pairs(value))
    if kind == "null":
        return NullValue()
    if kind == "boolean":
        return BooleanValue(bool(value))
    if kind == "resource":
        return ResourceValue()
    return ScalarValue(value)


def qualified_name(obj: Any) -> str:
    obj_type = type(obj)
    module = getattr(obj_type, "__module__", None)
    qualname = getattr(obj_type, "__qualname__", obj_type.__name__)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


def describe(
    values: Union[Mapping[str, Any], Sequence[Any]],
    *,
    max_depth: int = DEFAULT_DESCRIBE_DEPTH,
    max_items: int = DEFAULT_DESCRIBE_ITEMS,
) -> list[Argument]:
    """Flatten live Python values into an argument dump.

    Mappings produce keyed entries, other sequences positional ones.
    Containers nested deeper than ``max_depth`` and containers that contain
    themselves are replaced by a placeholder; only the first ``max_items``
    entries of any container are kept.
    """
    return _describe_items(values, 0, set(), max_depth, max_items)


def _describe_items(
    values: Any,
    depth: int,
    seen: set[int],
    max_depth: int,
    max_items: int,
) -> list[Argument]:
    if isinstance(values, Mapping):
        items = list(values.items())
    else:
        items = list(enumerate(values))

    arguments = []
    for key, value in items[:max_items]:
        if not isinstance(key, (int, str)) or isinstance(key, bool):
            key = repr(key)
        arguments.append(
            Argument(key, _describe_value(value, depth, seen, max_depth, max_items))
        )
    return arguments


def _describe_value(
    value: Any,
    depth: int,
    seen: set[int],
    max_depth: int,
    max_items: int,
) -> ArgumentValue:
    if value is None:
        return NullValue()
    if isinstance(value, bool):
        return BooleanValue(value)
    if isinstance(value, (int, float, complex, str, bytes)):
        return ScalarValue(value)
    if isinstance(value, (io.IOBase, socket.socket)):
        return ResourceValue()
    if isinstance(value, (Mapping, list, tuple, Set)):
        if id(value) in seen:
            return ArrayValue(RECURSION_PLACEHOLDER)
        if depth >= max_depth:
            return ArrayValue(DEEP_NESTED_PLACEHOLDER)
        if isinstance(value, Set):
            value = list(value)
        seen.add(id(value))
        try:
            return ArrayValue(
                _describe_items(value, depth + 1, seen, max_depth, max_items)
            )
        finally:
            seen.discard(id(value))
    return ObjectValue(qualified_name(value))


def describe_frame(frame: FrameType, **kwargs: Any) -> list[Argument]:
    """Describe the named arguments a live frame was called with.

    ``*args`` and ``**kwargs`` collectors are included under their own names.
    Keyword arguments are passed on to :func:`describe`.
    """
    arg_info = inspect.getargvalues(frame)
    names = list(arg_info.args)
    if arg_info.varargs:
        names.append(arg_info.varargs)
    if arg_info.keywords:
        names.append(arg_info.keywords)
    return describe({name: arg_info.locals[name] for name in names}, **kwargs)
