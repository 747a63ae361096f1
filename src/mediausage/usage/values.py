"""
Metadata values as a tagged union.

Metadata values arrive either as plain scalars, as native nested
lists/mappings (YAML front matter), or as strings holding a serialized
composite (JSON arrays and objects in database exports). All of them are
normalized to ``Scalar | Composite`` before being flattened into a single
searchable string.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Scalar:
    """A leaf value, held as its string form."""

    text: str


@dataclass(frozen=True)
class Composite:
    """An ordered sequence of values (lists, or the values of a mapping)."""

    items: tuple[Value, ...] = ()


Value = Scalar | Composite

SEPARATOR = " "


def scalar_text(value: Any) -> str:
    """String form of a scalar: None and False are empty, True is "1"."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def is_composite(value: Any) -> bool:
    """Check whether a native value is a list-like or mapping composite."""
    return isinstance(value, (list, tuple, Mapping))


def _children(native: Any) -> Any:
    return native.values() if isinstance(native, Mapping) else native


def to_value(native: Any) -> Value:
    """Convert a native Python value into the tagged union.

    Mappings contribute their values in insertion order; keys are not
    searched. Nesting depth is bounded only by memory. A composite that
    contains itself (YAML aliases can build one) is visited once.
    """
    if not is_composite(native):
        return Scalar(scalar_text(native))

    # One (composite id, children iterator, converted items) frame per open composite
    stack: list[tuple[int, Iterator[Any], list[Value]]] = [
        (id(native), iter(_children(native)), [])
    ]
    open_ids = {id(native)}
    while True:
        _, children, items = stack[-1]
        for child in children:
            if not is_composite(child):
                items.append(Scalar(scalar_text(child)))
            elif id(child) not in open_ids:
                stack.append((id(child), iter(_children(child)), []))
                open_ids.add(id(child))
                break
        else:
            closed_id, _, _ = stack.pop()
            open_ids.discard(closed_id)
            value = Composite(tuple(items))
            if not stack:
                return value
            stack[-1][2].append(value)


def is_serialized(raw: Any) -> bool:
    """Check whether a raw metadata value looks like a serialized composite.

    Only strings whose first non-blank character opens a JSON array or
    object qualify. Detection does not validate the payload.
    """
    if not isinstance(raw, str):
        return False
    stripped = raw.strip()
    if len(stripped) < 2:
        return False
    return (stripped[0], stripped[-1]) in (("[", "]"), ("{", "}"))


def unserialize(raw: str) -> Value:
    """Decode a serialized composite.

    Raises:
        ValueError: If the payload is not valid JSON or nests deeper than
            the JSON decoder can follow.
    """
    try:
        # json.JSONDecodeError subclasses ValueError
        native = json.loads(raw)
    except RecursionError as e:
        raise ValueError("Serialized value is nested too deeply") from e
    return to_value(native)


def flatten(value: Value) -> str:
    """Flatten a value into one string, depth first.

    Every element is followed by a single separator, nested composites
    included, so ``["a", ["b"]]`` becomes ``"a b  "``.
    """
    if isinstance(value, Scalar):
        return value.text

    parts: list[str] = []
    stack: list[Iterator[Value]] = [iter(value.items)]
    while stack:
        for item in stack[-1]:
            if isinstance(item, Composite):
                stack.append(iter(item.items))
                break
            parts.append(item.text + SEPARATOR)
        else:
            stack.pop()
            if stack:
                # Closing a nested composite
                parts.append(SEPARATOR)
    return "".join(parts)
