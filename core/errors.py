"""Error taxonomy for diskfit.

Every fatal condition the tool can hit derives from ``FitError``. The CLI
catches ``FitError`` once, prints its message as a single line and exits
non-zero; nothing is retried.

- ``ConfigurationError``: bad size syntax, non-positive capacity, bad config
- ``InputError``: unreadable paths, oversized or unsupported entries
- ``CapacityError``: more disks than the four-digit id space can address
- ``MaterializeError``: directory creation or hard-link failures
"""

from __future__ import annotations


class FitError(Exception):
    """Base class for all diskfit failures."""


class ConfigurationError(FitError):
    pass


class InvalidFormat(ConfigurationError):
    """Size text does not start with a number."""

    def __init__(self, text: str) -> None:
        super().__init__("invalid input.")
        self.text = text


class UnknownUnit(ConfigurationError):
    """Size suffix is longer than one char or not one of t/g/m/k/b."""

    def __init__(self, unit: str) -> None:
        super().__init__(f"unknown unit: '{unit}'")
        self.unit = unit


class InvalidCapacity(ConfigurationError):
    def __init__(self, capacity: int) -> None:
        super().__init__("disk size is too small.")
        self.capacity = capacity


class ConfigError(ConfigurationError):
    """Config file could not be parsed or validated."""


class InputError(FitError):
    pass


class UnreadablePath(InputError):
    pass


class OversizedFile(InputError):
    def __init__(self, name: str, size_text: str) -> None:
        super().__init__(f"can never fit '{name}' ({size_text}).")
        self.name = name


class UnsupportedEntry(InputError):
    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}': not a regular file.")
        self.name = name


class NoFilesFound(InputError):
    def __init__(self) -> None:
        super().__init__("no files found.")


class CapacityError(FitError):
    pass


class TooManyDisks(CapacityError):
    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"fitting takes too many disks. (> {limit})")
        self.count = count
        self.limit = limit


class DiskIdTooLarge(CapacityError):
    def __init__(self, disk_id: int) -> None:
        super().__init__(f"disk id {disk_id} too big for format.")
        self.disk_id = disk_id


class MaterializeError(FitError):
    pass


class NotADirectory(MaterializeError):
    def __init__(self, path: str) -> None:
        super().__init__(f"'{path}' is not a directory.")
        self.path = path


class LinkFailed(MaterializeError):
    def __init__(self, src: str, dst: str, reason: str) -> None:
        super().__init__(f"can't link '{src}' to '{dst}': {reason}")
        self.src = src
        self.dst = dst


__all__ = [
    "FitError",
    "ConfigurationError",
    "InvalidFormat",
    "UnknownUnit",
    "InvalidCapacity",
    "ConfigError",
    "InputError",
    "UnreadablePath",
    "OversizedFile",
    "UnsupportedEntry",
    "NoFilesFound",
    "CapacityError",
    "TooManyDisks",
    "DiskIdTooLarge",
    "MaterializeError",
    "NotADirectory",
    "LinkFailed",
]
