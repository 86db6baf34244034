# SPDX-License-Identifier: MIT
"""Windows SDK installation records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from winsdk.core.errors import RecordDecodeError

# Registry value names of an SDK record.
INSTALLATION_FOLDER = "InstallationFolder"
PRODUCT_NAME = "ProductName"
PRODUCT_VERSION = "ProductVersion"

# WindowsSdkVersion is set as e.g. "10.0.19041.0\"; the version is the part
# before the first ".0\".
_ENV_VERSION_TERMINATOR = ".0\\"


@dataclass(frozen=True)
class SdkInfo:
    """Information about a Windows SDK installation.

    Attributes:
        installation_folder: Where the SDK is installed.
        product_name: Human-readable name, or None when unknown (always
            None for environment-defined installations).
        product_version: The SDK version string.
    """

    installation_folder: Path
    product_name: str | None
    product_version: str

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> SdkInfo:
        """Build an SdkInfo from the values stored under an SDK registry key.

        Value names are matched case-insensitively.

        Raises:
            RecordDecodeError: If a required value is missing or a value
                is not a string.
        """
        values = {name.casefold(): value for name, value in record.items()}
        folder = _required_string(values, INSTALLATION_FOLDER)
        version = _required_string(values, PRODUCT_VERSION)
        return cls(
            installation_folder=Path(folder),
            product_name=_optional_string(values, PRODUCT_NAME),
            product_version=version,
        )

    @classmethod
    def from_environment(cls, install_dir: str, version: str) -> SdkInfo:
        """Build an SdkInfo from WindowsSdkDir and WindowsSdkVersion values."""
        return cls(
            installation_folder=Path(install_dir),
            product_name=None,
            product_version=version.split(_ENV_VERSION_TERMINATOR, 1)[0],
        )

    def to_dict(self) -> dict[str, str | None]:
        """Return the record keyed by its registry value names."""
        return {
            INSTALLATION_FOLDER: str(self.installation_folder),
            PRODUCT_NAME: self.product_name,
            PRODUCT_VERSION: self.product_version,
        }

    def __str__(self) -> str:
        name = self.product_name or "Windows SDK"
        return f"{name} {self.product_version} ({self.installation_folder})"


def _required_string(values: Mapping[str, object], name: str) -> str:
    value = _optional_string(values, name)
    if value is None:
        raise RecordDecodeError(f"missing value {name}")
    return value


def _optional_string(values: Mapping[str, object], name: str) -> str | None:
    value = values.get(name.casefold())
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"value {name} is a {type(value).__name__}, expected a string"
        raise RecordDecodeError(msg)
    return value
