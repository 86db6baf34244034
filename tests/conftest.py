# SPDX-License-Identifier: MIT
"""Shared fixtures for winsdk tests."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import nullcontext

import pytest

from winsdk.core.resolver import SdkResolver
from winsdk.store.memory import MappingEnvironment, MemoryStore


class RecordingStore(MemoryStore):
    """MemoryStore that remembers every location it was asked to open."""

    def __init__(self) -> None:
        super().__init__()
        self.opened: list[str] = []

    def open_for_read(self, location: str) -> nullcontext[Mapping[str, object]]:
        self.opened.append(location)
        return super().open_for_read(location)


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def environ() -> MappingEnvironment:
    return MappingEnvironment()


@pytest.fixture
def resolver(store: RecordingStore, environ: MappingEnvironment) -> SdkResolver:
    return SdkResolver(store, environ)
