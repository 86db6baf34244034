# SPDX-License-Identifier: MIT
"""Windows SDK version selectors.

An SdkVersion names what the resolver should look for: a specific SDK
generation, the environment-defined installation, or any of them.
"""

from __future__ import annotations

from enum import Enum

SDK_ROOT_KEY = r"SOFTWARE\Microsoft\Microsoft SDKs\Windows"


def _key(suffix: str) -> str:
    return f"{SDK_ROOT_KEY}\\{suffix}"


class SdkVersion(Enum):
    """Selector for a Windows SDK generation.

    Generation members map to the registry locations that register them.
    Legacy generations (8.1 and older) have two: an A-suffixed key that is
    checked first and the plain key.
    """

    Any = "any"
    Env = "env"
    V10_0 = "10.0"
    V8_1 = "8.1"
    V8_0 = "8.0"
    V7_1 = "7.1"
    V7_0 = "7.0"
    V6_1 = "6.1"
    V6_0 = "6.0"

    @property
    def locations(self) -> tuple[str, ...]:
        """Registry locations for this generation, in lookup order.

        Empty for Any and Env, which are not backed by a single key.
        """
        return _LOCATIONS.get(self, ())

    @property
    def is_generation(self) -> bool:
        return bool(self.locations)

    @classmethod
    def generations(cls) -> tuple[SdkVersion, ...]:
        """All SDK generations, newest first."""
        return tuple(member for member in cls if member.is_generation)

    @classmethod
    def search_order(cls) -> tuple[SdkVersion, ...]:
        """Selectors tried by an Any search, in priority order."""
        return (cls.Env, *cls.generations())

    @classmethod
    def parse(cls, text: str) -> SdkVersion:
        """Parse a user-supplied selector.

        Accepts "any", "env", a generation such as "8.1", a bare major
        version such as "10", and an optional leading "v" ("v7.0").

        Raises:
            ValueError: If the text names no known selector.
        """
        value = text.strip().lower()
        if value.startswith("v") and value[1:2].isdigit():
            value = value[1:]
        if value.isdigit():
            value = f"{value}.0"
        for member in cls:
            if member.value == value:
                return member
        choices = ", ".join(member.value for member in cls)
        msg = f"unknown Windows SDK version {text!r} (expected one of: {choices})"
        raise ValueError(msg)

    def __str__(self) -> str:
        return self.value


_LOCATIONS: dict[SdkVersion, tuple[str, ...]] = {
    SdkVersion.V10_0: (_key("v10.0"),),
    SdkVersion.V8_1: (_key("v8.1A"), _key("v8.1")),
    SdkVersion.V8_0: (_key("v8.0A"), _key("v8.0")),
    SdkVersion.V7_1: (_key("v7.1A"), _key("v7.1")),
    SdkVersion.V7_0: (_key("v7.0a"), _key("v7.0")),
    SdkVersion.V6_1: (_key("v6.1a"), _key("v6.1")),
    SdkVersion.V6_0: (_key("v6.0a"), _key("v6.0")),
}
