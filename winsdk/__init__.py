# SPDX-License-Identifier: MIT
"""
winsdk: Locate installed Windows SDKs.

Build tools use winsdk to find the Windows SDK headers and libraries
without asking the user for a path. Installations are looked up in the
environment set by the Visual Studio developer prompt and in the
registry keys written by the SDK installers.

Usage:
    from winsdk import SdkVersion, find_sdk

    info = find_sdk()                    # any SDK, newest first
    info = find_sdk(SdkVersion.V8_1)     # a specific generation
    if info is not None:
        print(info.installation_folder)
"""

from __future__ import annotations

from winsdk.core.errors import (
    MalformedEnvironmentError,
    RecordDecodeError,
    RegistryAccessError,
    WinSdkError,
)
from winsdk.core.info import SdkInfo
from winsdk.core.resolver import (
    SdkResolver,
    find_all_sdks,
    find_sdk,
    winsdk_6_0,
    winsdk_6_1,
    winsdk_7_0,
    winsdk_7_1,
    winsdk_8_0,
    winsdk_8_1,
    winsdk_10,
    winsdk_any,
    winsdk_env,
)
from winsdk.core.version import SdkVersion

__version__ = "0.1.0"

# Public API exports
__all__ = [
    # Version
    "__version__",
    # Model
    "SdkInfo",
    "SdkVersion",
    # Resolution
    "SdkResolver",
    "find_sdk",
    "find_all_sdks",
    "winsdk_any",
    "winsdk_env",
    "winsdk_10",
    "winsdk_8_1",
    "winsdk_8_0",
    "winsdk_7_1",
    "winsdk_7_0",
    "winsdk_6_1",
    "winsdk_6_0",
    # Errors
    "WinSdkError",
    "RecordDecodeError",
    "RegistryAccessError",
    "MalformedEnvironmentError",
]
