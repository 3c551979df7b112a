"""Dotted field-path addressing (``"a.b.c"``) over nested mappings."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from typing import Any

PATH_SEPARATOR = "."

_MISSING = object()


@dataclass(frozen=True)
class FieldPath:
    """A field path parsed once into its segments."""

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, path: "str | Sequence[str] | FieldPath") -> "FieldPath":
        if isinstance(path, FieldPath):
            return path
        if isinstance(path, str):
            return cls(tuple(path.split(PATH_SEPARATOR)))
        return cls(tuple(path))

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(self.segments)

    @property
    def head(self) -> str:
        return self.segments[0]

    def _resolve(self, obj: Any) -> Any:
        current = obj
        for segment in self.segments:
            if not isinstance(current, Mapping) or segment not in current:
                return _MISSING
            current = current[segment]
        return current

    def exists(self, obj: Any) -> bool:
        return self._resolve(obj) is not _MISSING

    def get(self, obj: Any, default: Any = None) -> Any:
        value = self._resolve(obj)
        return default if value is _MISSING else value

    def set(self, obj: MutableMapping[str, Any], value: Any) -> None:
        """Assign ``value`` at this path, creating intermediate dicts."""
        current = obj
        for segment in self.segments[:-1]:
            child = current.get(segment)
            if not isinstance(child, MutableMapping):
                child = {}
                current[segment] = child
            current = child
        current[self.segments[-1]] = value

    def collect(self, obj: Any) -> list[Any]:
        """Collect every value at this path, descending into lists.

        A list met before the last segment fans out over its items; a list
        found at the last segment contributes its items. Missing paths
        contribute nothing.
        """
        return _collect(obj, self.segments)


def _collect(obj: Any, segments: Sequence[str]) -> list[Any]:
    if isinstance(obj, list):
        values: list[Any] = []
        for item in obj:
            values.extend(_collect(item, segments))
        return values
    if not segments:
        return [obj]
    if not isinstance(obj, Mapping) or segments[0] not in obj:
        return []
    return _collect(obj[segments[0]], segments[1:])
