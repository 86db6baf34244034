# SPDX-License-Identifier: MIT
"""Windows SDK resolution.

The resolver turns an SdkVersion selector into an SdkInfo by probing,
in order, the environment and the registry keys that SDK installers
write. It holds no state of its own: every call re-reads its two
collaborators, a KeyValueStore and an Environment.

Search order for SdkVersion.Any:
    1. Environment-defined installation (WindowsSdkDir/WindowsSdkVersion)
    2. Windows 10 SDK
    3. Windows 8.1, 8.0, 7.1, 7.0, 6.1 and 6.0 SDKs

Absent keys and keys whose values do not form an SDK record count as
"not installed". Any other registry failure aborts the search.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from typing import TYPE_CHECKING

from winsdk.core.errors import (
    MalformedEnvironmentError,
    RecordDecodeError,
    RegistryAccessError,
)
from winsdk.core.info import SdkInfo
from winsdk.core.version import SdkVersion

if TYPE_CHECKING:
    from winsdk.store.base import Environment, KeyValueStore

logger = logging.getLogger(__name__)

SDK_DIR_VAR = "WindowsSdkDir"
SDK_VERSION_VAR = "WindowsSdkVersion"


class SdkResolver:
    """Locate Windows SDK installations.

    Example:
        resolver = SdkResolver()
        info = resolver.find(SdkVersion.Any)
        if info is not None:
            print(info.installation_folder, info.product_version)

    Args:
        store: Registry to query. Defaults to the host registry
            (an empty store on non-Windows hosts).
        environ: Environment to read. Defaults to os.environ.
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        environ: Environment | None = None,
    ) -> None:
        if store is None:
            from winsdk.store import default_store

            store = default_store()
        if environ is None:
            from winsdk.store.base import ProcessEnvironment

            environ = ProcessEnvironment()
        self._store = store
        self._environ = environ

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def environ(self) -> Environment:
        return self._environ

    def find(self, selector: SdkVersion = SdkVersion.Any) -> SdkInfo | None:
        """Find the SDK installation matching a selector.

        Args:
            selector: Which installation to look for.

        Returns:
            The installation, or None if it is not present.

        Raises:
            RegistryAccessError: If a registry key exists but cannot be read.
            MalformedEnvironmentError: If WindowsSdkVersion holds invalid
                text.
        """
        if selector is SdkVersion.Any:
            return self._find_any()
        if selector is SdkVersion.Env:
            return self.find_env()
        return self._find_generation(selector)

    def find_all(self) -> Iterator[tuple[SdkVersion, SdkInfo]]:
        """Yield every installation that resolves, in Any search order."""
        for selector in SdkVersion.search_order():
            info = self.find(selector)
            if info is not None:
                yield selector, info

    def find_env(self) -> SdkInfo | None:
        """Find the installation defined by the Visual Studio environment.

        Both WindowsSdkDir and WindowsSdkVersion must be set. The directory
        is taken as an OS path; the version must be valid text.
        """
        install_dir = self._environ.get(SDK_DIR_VAR)
        version = self._environ.get(SDK_VERSION_VAR)
        if install_dir is None or version is None:
            logger.debug("%s/%s not set", SDK_DIR_VAR, SDK_VERSION_VAR)
            return None
        info = SdkInfo.from_environment(
            os.fsdecode(install_dir), _as_text(SDK_VERSION_VAR, version)
        )
        logger.debug("Environment defines %s", info)
        return info

    def _find_any(self) -> SdkInfo | None:
        for selector in SdkVersion.search_order():
            info = self.find(selector)
            if info is not None:
                logger.info("Found Windows SDK %s: %s", selector, info)
                return info
        logger.info("No Windows SDK found")
        return None

    def _find_generation(self, selector: SdkVersion) -> SdkInfo | None:
        locations = selector.locations
        if len(locations) == 1:
            return self._probe(locations[0])
        suffixed, plain = locations
        return self._probe_pair(suffixed, plain)

    def _probe_pair(self, preferred: str, fallback: str) -> SdkInfo | None:
        """Probe preferred, falling back only if it does not exist at all.

        A preferred key that exists but fails to decode still wins and
        yields None.
        """
        try:
            return self._read(preferred)
        except FileNotFoundError:
            logger.debug("HKLM\\%s not found", preferred)
        return self._probe(fallback)

    def _probe(self, location: str) -> SdkInfo | None:
        try:
            return self._read(location)
        except FileNotFoundError:
            logger.debug("HKLM\\%s not found", location)
            return None

    def _read(self, location: str) -> SdkInfo | None:
        """Open and decode one key.

        Raises:
            FileNotFoundError: If the key does not exist.
            RegistryAccessError: If the key cannot be opened.
        """
        try:
            handle = self._store.open_for_read(location)
        except FileNotFoundError:
            raise
        except OSError as e:
            raise RegistryAccessError(location, e) from e
        with handle as key:
            try:
                info = SdkInfo.from_record(self._store.decode(key))
            except RecordDecodeError as e:
                # Left behind by an incomplete uninstall, most likely.
                logger.debug("Ignoring HKLM\\%s: %s", location, e.message)
                return None
        logger.debug("HKLM\\%s registers %s", location, info)
        return info

    def __repr__(self) -> str:
        return f"SdkResolver(store={self._store!r}, environ={self._environ!r})"


def _as_text(name: str, value: str | bytes) -> str:
    """Return an environment value as text, refusing undecodable values."""
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedEnvironmentError(name) from None
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # os.environ smuggles undecodable bytes through as lone surrogates.
        raise MalformedEnvironmentError(name) from None
    return value


def find_sdk(version: SdkVersion = SdkVersion.Any) -> SdkInfo | None:
    """Find a Windows SDK on this host.

    Convenience wrapper around SdkResolver with the host registry and
    process environment.
    """
    return SdkResolver().find(version)


def find_all_sdks() -> list[tuple[SdkVersion, SdkInfo]]:
    """List every Windows SDK installation registered on this host."""
    return list(SdkResolver().find_all())


def winsdk_any() -> SdkInfo | None:
    """Find any Windows SDK, preferring the environment then newer SDKs."""
    return find_sdk(SdkVersion.Any)


def winsdk_env() -> SdkInfo | None:
    """Find the Windows SDK defined by environment variables."""
    return find_sdk(SdkVersion.Env)


def winsdk_10() -> SdkInfo | None:
    """Find the Windows 10 SDK."""
    return find_sdk(SdkVersion.V10_0)


def winsdk_8_1() -> SdkInfo | None:
    """Find the Windows 8.1 SDK."""
    return find_sdk(SdkVersion.V8_1)


def winsdk_8_0() -> SdkInfo | None:
    return find_sdk(SdkVersion.V8_0)


def winsdk_7_1() -> SdkInfo | None:
    return find_sdk(SdkVersion.V7_1)


def winsdk_7_0() -> SdkInfo | None:
    return find_sdk(SdkVersion.V7_0)


def winsdk_6_1() -> SdkInfo | None:
    return find_sdk(SdkVersion.V6_1)


def winsdk_6_0() -> SdkInfo | None:
    return find_sdk(SdkVersion.V6_0)
