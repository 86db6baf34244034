# SPDX-License-Identifier: MIT
"""Tests for winsdk.core.resolver."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from winsdk.core.errors import MalformedEnvironmentError, RegistryAccessError
from winsdk.core.info import SdkInfo
from winsdk.core.resolver import (
    SdkResolver,
    find_all_sdks,
    find_sdk,
    winsdk_8_1,
    winsdk_env,
)
from winsdk.core.version import SdkVersion
from winsdk.store.memory import MappingEnvironment, MemoryStore

V10 = SdkVersion.V10_0.locations[0]
V81A, V81 = SdkVersion.V8_1.locations
V70A, V70 = SdkVersion.V7_0.locations
V60A, V60 = SdkVersion.V6_0.locations


def record(version: str, name: str | None = None) -> dict[str, object]:
    values: dict[str, object] = {
        "InstallationFolder": f"C:\\SDKs\\v{version}\\",
        "ProductVersion": version,
    }
    if name is not None:
        values["ProductName"] = name
    return values


def denied(location: str) -> PermissionError:
    return PermissionError(13, "Access is denied", location)


class TestGenerationProbes:
    @pytest.mark.parametrize("selector", SdkVersion.generations())
    def test_absent_generation_is_none(self, resolver, selector):
        assert resolver.find(selector) is None

    def test_windows_10(self, resolver, store):
        store.set(V10, record("10.0.19041", "Windows SDK for Windows 10"))
        info = resolver.find(SdkVersion.V10_0)
        assert info == SdkInfo(
            Path("C:\\SDKs\\v10.0.19041\\"), "Windows SDK for Windows 10", "10.0.19041"
        )

    def test_windows_10_reads_single_key(self, resolver, store):
        resolver.find(SdkVersion.V10_0)
        assert store.opened == [V10]

    def test_suffixed_key_preferred(self, resolver, store):
        store.set(V81A, record("8.1A"))
        store.set(V81, record("8.1"))
        assert resolver.find(SdkVersion.V8_1).product_version == "8.1A"

    def test_plain_key_used_when_suffixed_absent(self, resolver, store):
        store.set(V81, record("8.1"))
        assert resolver.find(SdkVersion.V8_1).product_version == "8.1"
        assert store.opened == [V81A, V81]

    def test_suffixed_only(self, resolver, store):
        store.set(V70A, record("7.0A"))
        assert resolver.find(SdkVersion.V7_0).product_version == "7.0A"
        assert store.opened == [V70A]

    @pytest.mark.parametrize("selector", SdkVersion.generations()[1:])
    def test_every_legacy_generation_falls_back(self, resolver, store, selector):
        _, plain = selector.locations
        store.set(plain, record(str(selector)))
        assert resolver.find(selector).product_version == str(selector)

    def test_corrupt_suffixed_key_hides_plain_key(self, resolver, store):
        store.set(V81A, {"InstallationFolder": "C:\\SDKs\\v8.1A\\"})
        store.set(V81, record("8.1"))
        assert resolver.find(SdkVersion.V8_1) is None
        assert store.opened == [V81A]

    def test_corrupt_key_is_none(self, resolver, store):
        store.set(V10, {"InstallationFolder": "C:\\Windows Kits\\10\\"})
        assert resolver.find(SdkVersion.V10_0) is None

    def test_empty_key_is_none(self, resolver, store):
        store.set(V60, {})
        assert resolver.find(SdkVersion.V6_0) is None

    def test_corrupt_key_logged(self, resolver, store, caplog):
        store.set(V10, {"InstallationFolder": "C:\\Windows Kits\\10\\"})
        with caplog.at_level(logging.DEBUG, logger="winsdk"):
            resolver.find(SdkVersion.V10_0)
        assert "Ignoring" in caplog.text
        assert "ProductVersion" in caplog.text

    def test_access_error_propagates(self, resolver, store):
        store.set(V10, denied(V10))
        with pytest.raises(RegistryAccessError) as exc_info:
            resolver.find(SdkVersion.V10_0)
        assert exc_info.value.location == V10
        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert "Access is denied" in str(exc_info.value)

    def test_access_error_on_plain_key(self, resolver, store):
        store.set(V60, denied(V60))
        with pytest.raises(RegistryAccessError):
            resolver.find(SdkVersion.V6_0)


class TestEnvironmentProbe:
    def test_both_variables_set(self, resolver, environ):
        environ.set("WindowsSdkDir", "C:\\SDK\\")
        environ.set("WindowsSdkVersion", "10.0.19041.0\\")
        info = resolver.find(SdkVersion.Env)
        assert info == SdkInfo(Path("C:\\SDK\\"), None, "10.0.19041")

    def test_only_directory_set(self, resolver, environ):
        environ.set("WindowsSdkDir", "C:\\SDK\\")
        assert resolver.find(SdkVersion.Env) is None

    def test_only_version_set(self, resolver, environ):
        environ.set("WindowsSdkVersion", "10.0.19041.0\\")
        assert resolver.find(SdkVersion.Env) is None

    def test_bytes_values_decoded(self, resolver, environ):
        environ.set("WindowsSdkDir", b"C:\\SDK\\")
        environ.set("WindowsSdkVersion", b"10.0.22621.0\\")
        assert resolver.find_env().product_version == "10.0.22621"

    def test_undecodable_bytes_fatal(self, resolver, environ):
        environ.set("WindowsSdkDir", "C:\\SDK\\")
        environ.set("WindowsSdkVersion", b"10.0.\xff\xfe.0\\")
        with pytest.raises(MalformedEnvironmentError) as exc_info:
            resolver.find(SdkVersion.Env)
        assert exc_info.value.variable == "WindowsSdkVersion"

    def test_surrogate_escaped_version_fatal(self, resolver, environ):
        """os.environ represents undecodable bytes as lone surrogates."""
        environ.set("WindowsSdkDir", "C:\\SDK\\")
        environ.set("WindowsSdkVersion", "10.0.\udcff.0\\")
        with pytest.raises(MalformedEnvironmentError) as exc_info:
            resolver.find(SdkVersion.Env)
        assert exc_info.value.variable == "WindowsSdkVersion"

    def test_directory_kept_as_os_path(self, resolver, environ):
        """Only the version has to be text; the directory is a path."""
        environ.set("WindowsSdkDir", "C:\\SDK\\\udcff")
        environ.set("WindowsSdkVersion", "10.0.19041.0\\")
        info = resolver.find(SdkVersion.Env)
        assert info.installation_folder == Path("C:\\SDK\\\udcff")
        assert info.product_version == "10.0.19041"

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX filesystem encoding")
    def test_undecodable_directory_bytes_accepted(self, resolver, environ):
        environ.set("WindowsSdkDir", b"C:\\SDK\\\xff")
        environ.set("WindowsSdkVersion", "10.0.19041.0\\")
        info = resolver.find(SdkVersion.Env)
        assert info.installation_folder == Path(os.fsdecode(b"C:\\SDK\\\xff"))

    def test_environment_never_touches_store(self, resolver, store, environ):
        environ.set("WindowsSdkDir", "C:\\SDK\\")
        environ.set("WindowsSdkVersion", "10.0.19041.0\\")
        resolver.find(SdkVersion.Env)
        assert store.opened == []


class TestAnySearch:
    def test_nothing_installed(self, resolver, store):
        assert resolver.find(SdkVersion.Any) is None
        # One key for 10.0 plus two for each of the six legacy generations
        assert len(store.opened) == 13

    def test_default_selector_is_any(self, resolver, store):
        store.set(V10, record("10.0.19041"))
        assert resolver.find() == resolver.find(SdkVersion.Any)

    def test_environment_wins(self, resolver, store, environ):
        environ.set("WindowsSdkDir", "C:\\EnvSDK\\")
        environ.set("WindowsSdkVersion", "10.0.17763.0\\")
        store.set(V10, record("10.0.19041"))
        store.set(V81A, record("8.1A"))
        info = resolver.find(SdkVersion.Any)
        assert info.installation_folder == Path("C:\\EnvSDK\\")
        assert info.product_version == "10.0.17763"
        assert store.opened == []

    def test_newest_generation_wins(self, resolver, store):
        store.set(V60, record("6.0"))
        store.set(V81, record("8.1"))
        store.set(V10, record("10.0.19041"))
        assert resolver.find(SdkVersion.Any).product_version == "10.0.19041"

    def test_falls_through_to_oldest(self, resolver, store):
        store.set(V60A, record("6.0A"))
        assert resolver.find(SdkVersion.Any).product_version == "6.0A"

    def test_corrupt_key_skipped(self, resolver, store):
        store.set(V10, {"InstallationFolder": "C:\\Windows Kits\\10\\"})
        store.set(V81, record("8.1"))
        assert resolver.find(SdkVersion.Any).product_version == "8.1"

    def test_access_error_aborts_search(self, resolver, store):
        store.set(V10, denied(V10))
        store.set(V81, record("8.1"))
        with pytest.raises(RegistryAccessError):
            resolver.find(SdkVersion.Any)
        assert store.opened == [V10]

    def test_malformed_environment_aborts_search(self, resolver, store, environ):
        environ.set("WindowsSdkDir", "C:\\SDK\\")
        environ.set("WindowsSdkVersion", b"10.0.\xff.0\\")
        store.set(V10, record("10.0.19041"))
        with pytest.raises(MalformedEnvironmentError):
            resolver.find(SdkVersion.Any)

    def test_repeatable(self, resolver, store):
        store.set(V10, {"ProductVersion": "10.0"})
        store.set(V70, record("7.0", "Windows SDK 7.0"))
        first = resolver.find(SdkVersion.Any)
        second = resolver.find(SdkVersion.Any)
        assert first == second
        assert first is not second

    def test_sees_store_changes_between_calls(self, resolver, store):
        assert resolver.find(SdkVersion.Any) is None
        store.set(V10, record("10.0.19041"))
        assert resolver.find(SdkVersion.Any).product_version == "10.0.19041"
        store.remove(V10)
        assert resolver.find(SdkVersion.Any) is None


class TestFindAll:
    def test_lists_in_search_order(self, resolver, store, environ):
        environ.set("WindowsSdkDir", "C:\\SDK\\")
        environ.set("WindowsSdkVersion", "10.0.19041.0\\")
        store.set(V70A, record("7.0A"))
        store.set(V10, record("10.0.19041"))
        found = list(resolver.find_all())
        assert [selector for selector, _ in found] == [
            SdkVersion.Env,
            SdkVersion.V10_0,
            SdkVersion.V7_0,
        ]
        assert found[2][1].product_version == "7.0A"

    def test_empty(self, resolver):
        assert list(resolver.find_all()) == []

    def test_access_error_propagates(self, resolver, store):
        store.set(V81A, denied(V81A))
        with pytest.raises(RegistryAccessError):
            list(resolver.find_all())


class TestDefaults:
    def test_default_collaborators(self):
        with patch("winsdk.store.default_store", return_value=MemoryStore()):
            resolver = SdkResolver()
        assert isinstance(resolver.store, MemoryStore)
        assert resolver.environ.get("WINSDK_SURELY_UNSET_VARIABLE") is None

    def test_find_sdk_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("WindowsSdkDir", "C:\\SDK\\")
        monkeypatch.setenv("WindowsSdkVersion", "10.0.19041.0\\")
        with patch("winsdk.store.default_store", return_value=MemoryStore()):
            assert find_sdk().product_version == "10.0.19041"
            assert winsdk_env().installation_folder == Path("C:\\SDK\\")

    def test_generation_helper(self, monkeypatch):
        store = MemoryStore({V81: record("8.1")})
        monkeypatch.delenv("WindowsSdkDir", raising=False)
        with patch("winsdk.store.default_store", return_value=store):
            assert winsdk_8_1().product_version == "8.1"

    def test_find_all_sdks(self, monkeypatch):
        monkeypatch.delenv("WindowsSdkDir", raising=False)
        store = MemoryStore({V10: record("10.0.19041"), V60: record("6.0")})
        with patch("winsdk.store.default_store", return_value=store):
            found = find_all_sdks()
        assert [selector for selector, _ in found] == [
            SdkVersion.V10_0,
            SdkVersion.V6_0,
        ]

    def test_repr(self):
        resolver = SdkResolver(MemoryStore(), MappingEnvironment())
        assert "MemoryStore" in repr(resolver)
