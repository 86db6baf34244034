# SPDX-License-Identifier: MIT
"""Configuration sources: the Windows registry and the environment."""

from __future__ import annotations

import logging
import sys

from winsdk.store.base import Environment, KeyValueStore, ProcessEnvironment
from winsdk.store.memory import MappingEnvironment, MemoryStore
from winsdk.store.registry import REGISTRY_VIEWS, RegistryStore

logger = logging.getLogger(__name__)


def default_store(view: int = 32) -> KeyValueStore:
    """Return the host's SDK registration store.

    On Windows this is the registry. Elsewhere there is nothing to query,
    so an empty MemoryStore is returned and only environment-defined
    installations can be found.

    Raises:
        ValueError: If view is not 32 or 64.
    """
    if view not in REGISTRY_VIEWS:
        msg = f"registry view must be one of {REGISTRY_VIEWS}, got {view!r}"
        raise ValueError(msg)
    if sys.platform != "win32":
        logger.debug("winsdk: not on Windows, registry lookups disabled")
        return MemoryStore()
    return RegistryStore(view=view)


__all__ = [
    "Environment",
    "KeyValueStore",
    "MappingEnvironment",
    "MemoryStore",
    "ProcessEnvironment",
    "REGISTRY_VIEWS",
    "RegistryStore",
    "default_store",
]
