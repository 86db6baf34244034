# SPDX-License-Identifier: MIT
"""In-memory stand-ins for the registry and the process environment.

MemoryStore is the store used on hosts without a registry, and both
classes are convenient for tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import nullcontext
from typing import Any

from winsdk.core.errors import RecordDecodeError


class MemoryStore:
    """A KeyValueStore backed by a dict of location -> values.

    Locations are matched case-insensitively, like registry keys.
    A location mapped to an exception instance raises it from
    open_for_read, which lets callers simulate access failures.

    Example:
        store = MemoryStore({
            r"SOFTWARE\\Microsoft\\Microsoft SDKs\\Windows\\v10.0": {
                "InstallationFolder": "C:\\\\Program Files (x86)\\\\Windows Kits\\\\10\\\\",
                "ProductVersion": "10.0.19041",
            },
        })
    """

    def __init__(
        self, keys: Mapping[str, Mapping[str, object] | OSError] | None = None
    ) -> None:
        self._keys: dict[str, Mapping[str, object] | OSError] = {}
        for location, values in (keys or {}).items():
            self.set(location, values)

    def set(self, location: str, values: Mapping[str, object] | OSError) -> None:
        self._keys[location.casefold()] = values

    def remove(self, location: str) -> None:
        self._keys.pop(location.casefold(), None)

    def open_for_read(self, location: str) -> nullcontext[Mapping[str, object]]:
        entry = self._keys.get(location.casefold())
        if entry is None:
            raise FileNotFoundError(2, "The system cannot find the file specified", location)
        if isinstance(entry, OSError):
            raise entry
        return nullcontext(entry)

    def decode(self, handle: Any) -> dict[str, object]:
        if not isinstance(handle, Mapping):
            raise RecordDecodeError(f"not a key handle: {handle!r}")
        return dict(handle)

    def __repr__(self) -> str:
        return f"MemoryStore({len(self._keys)} keys)"


class MappingEnvironment:
    """An Environment backed by a plain mapping."""

    def __init__(self, variables: Mapping[str, str | bytes] | None = None) -> None:
        self._variables = dict(variables or {})

    def set(self, name: str, value: str | bytes) -> None:
        self._variables[name] = value

    def get(self, name: str) -> str | bytes | None:
        return self._variables.get(name)

    def __repr__(self) -> str:
        return f"MappingEnvironment({sorted(self._variables)!r})"
