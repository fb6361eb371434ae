"""Conversion between the two accepted tag set shapes.

OpenTelemetry wants attributes as a mapping while StatsD clients take a list
of ``"key:value"`` strings.  Callers may pass either form.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence, Union

__all__ = ["TagSet", "to_mapping", "to_sequence"]

TagSet = Union[Mapping[str, Any], Sequence[str]]


def to_mapping(tags: TagSet | None) -> dict[str, Any]:
    """Return *tags* as a mapping.

    Sequence entries are split on the first ``:``; an entry without a
    separator maps to an empty value.
    """

    if not tags:
        return {}
    if isinstance(tags, str):
        tags = [tags]
    if isinstance(tags, Mapping):
        return dict(tags)
    result: dict[str, Any] = {}
    for tag in tags:
        key, _, value = tag.partition(":")
        result[key] = value
    return result


def to_sequence(tags: TagSet | None) -> list[str]:
    """Return *tags* as ``"key:value"`` strings in iteration order."""

    if not tags:
        return []
    if isinstance(tags, str):
        return [tags]
    if isinstance(tags, Mapping):
        return [f"{key}:{value}" for key, value in tags.items()]
    return list(tags)
