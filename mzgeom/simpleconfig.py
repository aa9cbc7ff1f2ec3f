"""A minimal ``key = value`` configuration file reader."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Callable, Mapping, TypeVar

from .strutils import combine_dir, directory_of, lower, split, trimws

T = TypeVar("T")

_WHITESPACE = " \t\n\v\f\r"


class ConfigError(Exception):
    """Raised when a configuration cannot be read or a value is invalid."""


@dataclass
class _Entry:
    value: str
    used: bool = False


class SimpleConfig:
    """Key/value settings read from files, tracking which keys were read."""

    def __init__(self, filename: str | None = None) -> None:
        self.lookup: dict[str, _Entry] = {}
        if filename is not None:
            self.parse(filename)

    def parse(self, filename: str) -> None:
        """Read assignments from a file, following ``include`` lines."""
        try:
            with open(filename, encoding="utf-8") as stream:
                text = stream.read()
        except OSError as exc:
            raise ConfigError(f"error opening config {filename}") from exc

        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        for raw in lines:
            line = raw.split("#", 1)[0]
            if len(line) > 9 and line.startswith("include "):
                included = trimws(line[8:])
                self.parse(combine_dir(directory_of(filename), included))
                continue
            pair = split(line, "=")
            if pair is None:
                if trimws(line):
                    raise ConfigError(f"error parsing line {line}")
                continue
            key, value = pair
            self.lookup[key] = _Entry(value)

    def parse_comma_separated(self, data: str, require_existing: bool) -> None:
        """Apply assignments of the form ``a=1,b=2``."""
        segments = data.split(",")
        if segments[-1] == "":
            segments.pop()
        for assignment in segments:
            pair = split(assignment, "=")
            if pair is None:
                raise ConfigError(
                    f"error parsing comma separated assignment {assignment}"
                )
            key, value = pair
            entry = self.lookup.get(key)
            if entry is None:
                if require_existing:
                    raise ConfigError(
                        f"setting unknown key '{key}' from comma separated assignment"
                    )
                self.lookup[key] = _Entry(value)
            else:
                entry.value = value

    def get(self, key: str) -> str:
        """Return the raw string for ``key`` and mark it as read."""
        entry = self.lookup.get(key)
        if entry is None:
            raise ConfigError(f"config key not found: {key}")
        entry.used = True
        return entry.value

    def get_as(self, key: str, kind: Callable[[str], T]) -> T:
        """Return the value for ``key`` converted by ``kind``.

        The whole value must be consumed by the conversion.
        """
        sval = self.get(key)
        error = ConfigError(f"error parsing value for {key}")
        if kind is str:
            if not sval or any(ch in _WHITESPACE for ch in sval):
                raise error
            return sval  # type: ignore[return-value]
        if kind is bool:
            if sval == "1":
                return True  # type: ignore[return-value]
            if sval == "0":
                return False  # type: ignore[return-value]
            raise error
        try:
            return kind(sval)
        except (TypeError, ValueError) as exc:
            raise error from exc

    def get_bool(self, key: str) -> bool:
        """Return a boolean written as true/false or 1/0 (any case)."""
        sval = lower(self.get(key))
        if sval in ("true", "1"):
            return True
        if sval in ("false", "0"):
            return False
        raise ConfigError(f"error parsing boolean value for {key}")

    def get_enum(self, key: str, values: Mapping[str, Any]) -> Any:
        """Return the mapped value for the string stored at ``key``."""
        sval = self.get(key)
        try:
            return values[sval]
        except KeyError:
            raise ConfigError(f"invalid value for {key}: {sval}") from None

    def check_used(self, abort_if_unused: bool) -> list[str]:
        """Report keys that were set but never read and return them sorted.

        Raises ConfigError if any exist and ``abort_if_unused`` is true.
        """
        unused = sorted(key for key, entry in self.lookup.items() if not entry.used)
        for key in unused:
            print(
                f"*** CONFIG ITEM {key} WAS SET BUT NEVER READ! ***", file=sys.stderr
            )
        if unused and abort_if_unused:
            raise ConfigError("unused config items: " + ", ".join(unused))
        return unused