# SPDX-License-Identifier: MIT
"""Windows registry access (Windows only).

SDK installers register themselves under HKEY_LOCAL_MACHINE. Keys are
read through the 32-bit registry view by default, which is where both
32- and 64-bit SDK installers write them.
"""

from __future__ import annotations

import logging
from types import ModuleType
from typing import Any

from winsdk.core.errors import RecordDecodeError

logger = logging.getLogger(__name__)

REGISTRY_VIEWS = (32, 64)


def _import_winreg() -> ModuleType:
    import winreg

    return winreg


class RegistryStore:
    """Read-only access to HKEY_LOCAL_MACHINE.

    Example:
        store = RegistryStore()
        with store.open_for_read(r"SOFTWARE\\Microsoft\\Microsoft SDKs\\Windows\\v10.0") as key:
            values = store.decode(key)
    """

    def __init__(self, view: int = 32) -> None:
        if view not in REGISTRY_VIEWS:
            msg = f"registry view must be one of {REGISTRY_VIEWS}, got {view!r}"
            raise ValueError(msg)
        self._view = view

    @property
    def view(self) -> int:
        return self._view

    def _access(self, winreg: ModuleType) -> int:
        if self._view == 32:
            view_flag = winreg.KEY_WOW64_32KEY
        else:
            view_flag = winreg.KEY_WOW64_64KEY
        return winreg.KEY_QUERY_VALUE | view_flag

    def open_for_read(self, location: str) -> Any:
        """Open a key under HKEY_LOCAL_MACHINE.

        The returned PyHKEY is itself a context manager that closes the key.

        Raises:
            FileNotFoundError: If the key does not exist.
            OSError: For any other failure, e.g. access denied.
        """
        winreg = _import_winreg()
        logger.debug("Opening HKLM\\%s (%d-bit view)", location, self._view)
        return winreg.OpenKeyEx(
            winreg.HKEY_LOCAL_MACHINE, location, 0, self._access(winreg)
        )

    def decode(self, handle: Any) -> dict[str, object]:
        """Read every value stored directly under an open key.

        String values (REG_SZ, REG_EXPAND_SZ) are returned unexpanded.

        Raises:
            RecordDecodeError: If the key's values cannot be enumerated.
        """
        winreg = _import_winreg()
        values: dict[str, object] = {}
        try:
            _, value_count, _ = winreg.QueryInfoKey(handle)
            for index in range(value_count):
                name, data, _ = winreg.EnumValue(handle, index)
                values[name] = data
        except OSError as e:
            raise RecordDecodeError(f"cannot read values: {e}") from e
        return values

    def __repr__(self) -> str:
        return f"RegistryStore(view={self._view})"
