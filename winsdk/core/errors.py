# SPDX-License-Identifier: MIT
"""Custom exceptions for winsdk.

All winsdk exceptions inherit from WinSdkError. Absent registry
locations are reported with the builtin FileNotFoundError and never
leave the resolver.
"""

from __future__ import annotations


class WinSdkError(Exception):
    """Base class for all winsdk exceptions.

    Attributes:
        message: The error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RecordDecodeError(WinSdkError):
    """A registry location exists but its values do not form an SDK record.

    The resolver treats this as "not installed": the key was most
    likely left behind by an incomplete uninstall.

    Attributes:
        location: The registry location that failed to decode, if known.
    """

    def __init__(self, message: str, location: str | None = None) -> None:
        self.location = location
        if location:
            message = f"{location}: {message}"
        super().__init__(message)


class RegistryAccessError(WinSdkError):
    """Reading a registry location failed for a reason other than absence.

    The underlying OSError is chained as ``__cause__``.

    Attributes:
        location: The registry location being opened.
        error: The underlying OSError.
    """

    def __init__(self, location: str, error: OSError) -> None:
        self.location = location
        self.error = error
        reason = error.strerror or str(error)
        super().__init__(f"cannot read registry key {location}: {reason}")


class MalformedEnvironmentError(WinSdkError):
    """An SDK environment variable is set but is not valid text.

    Attributes:
        variable: Name of the offending environment variable.
    """

    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"environment variable {variable} is not valid text")
