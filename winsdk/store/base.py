# SPDX-License-Identifier: MIT
"""Protocols for the configuration sources the resolver reads from.

The resolver never touches the registry or os.environ directly. It goes
through a KeyValueStore and an Environment so either can be replaced
(e.g., by the in-memory versions in winsdk.store.memory).
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for a hierarchical store of named values (the registry)."""

    def open_for_read(self, location: str) -> AbstractContextManager[Any]:
        """Open a location for reading.

        Args:
            location: Path of the key, relative to the store's root.

        Returns:
            A context manager yielding a handle for decode().

        Raises:
            FileNotFoundError: If the location does not exist.
            OSError: If the location exists but cannot be opened.
        """
        ...

    def decode(self, handle: Any) -> dict[str, object]:
        """Read all named values stored under an open location.

        Raises:
            RecordDecodeError: If the values cannot be read.
        """
        ...


@runtime_checkable
class Environment(Protocol):
    """Protocol for environment variable lookup."""

    def get(self, name: str) -> str | bytes | None:
        """Return the raw value of a variable, or None if unset."""
        ...


class ProcessEnvironment:
    """The environment of the current process."""

    def get(self, name: str) -> str | None:
        return os.environ.get(name)

    def __repr__(self) -> str:
        return "ProcessEnvironment()"
