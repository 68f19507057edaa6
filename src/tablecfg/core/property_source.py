"""Named, read-only property source handed to the configuration chain."""

from __future__ import annotations

from collections.abc import Mapping


class PropertySource:
    def __init__(self, name: str, source: Mapping[str, str]):
        self._name = name
        self._source = source

    @property
    def name(self) -> str:
        return self._name

    @property
    def source(self) -> Mapping[str, str]:
        return self._source

    @property
    def property_names(self) -> tuple[str, ...]:
        return tuple(self._source)

    def get_property(self, key: str, default: str | None = None) -> str | None:
        return self._source.get(key, default)

    def contains_property(self, key: str) -> bool:
        return key in self._source

    def __contains__(self, key: object) -> bool:
        return key in self._source

    def __len__(self) -> int:
        return len(self._source)

    def __repr__(self) -> str:
        return f"PropertySource(name={self._name!r}, properties={len(self._source)})"
