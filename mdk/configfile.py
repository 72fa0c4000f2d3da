"""Sectioned key=value configuration files.

Lines starting with ``#``, ``//`` or ``\\\\`` are comments and become the
description of the next section or entry. A section is written as
``[name]`` ... ``[/name]`` with one ``key=value`` entry per line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import IO

from .utils import trim_string, trim_string_left, trim_string_right

_EOL = "\r\n"
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_LINE = re.compile(r"[^\n]*\n|[^\n]+")


def _format_description(description: str | None, prefix: str) -> str:
    if not description:
        return ""
    lines = description.split("\n")
    if description.endswith("\n"):
        lines.pop()
    return "".join(f"{prefix}{line}{_EOL}" for line in lines)


def _strip_blanks(text: str) -> str:
    return trim_string_left(trim_string_right(text, " \t"), " \t")


@dataclass
class ConfigItem:
    """One configuration value with its description and position."""

    value: str = ""
    description: str = ""
    index: int = -1
    valid: bool = False

    def __str__(self) -> str:
        return self.value

    def is_null(self) -> bool:
        """True if the item has never been given a value."""
        return not self.valid

    def set(self, value) -> "ConfigItem":
        """Store a string, integer or float value."""
        if isinstance(value, float):
            self.value = trim_string_right("%f" % value, "0")
        elif isinstance(value, int):
            self.value = "%d" % value
        else:
            self.value = str(value)
        self.valid = True
        return self

    def as_int(self) -> int:
        """Leading integer of the value, 0 if there is none."""
        match = _INT_PREFIX.match(self.value)
        return int(match.group(1)) if match else 0

    def as_float(self) -> float:
        """Leading floating-point number of the value, 0.0 if there is none."""
        match = _FLOAT_PREFIX.match(self.value)
        return float(match.group(1)) if match else 0.0

    def set_description(self, description: str | None) -> None:
        """Set the comment written above the entry; lines split on ``\\n``."""
        self.description = _format_description(description, "\t//")


class ConfigSection:
    """A named group of configuration items."""

    def __init__(self, name: str | None = "", index: int = -1) -> None:
        self.name = name or ""
        self.index = index if index >= 0 else -1
        self.description = ""
        self.items: dict[str, ConfigItem] = {}

    def _copy(self) -> "ConfigSection":
        clone = ConfigSection(self.name, self.index)
        clone.description = self.description
        clone.items = {
            key: ConfigItem(i.value, i.description, i.index, i.valid)
            for key, i in self.items.items()
        }
        return clone

    def __getitem__(self, key: str) -> ConfigItem:
        if not key:
            raise ValueError("configuration key must not be empty")
        item = self.items.get(key)
        if item is None:
            item = ConfigItem(index=len(self.items))
            self.items[key] = item
        return item

    def __setitem__(self, key: str, value) -> None:
        self[key].set(value)

    def set_description(self, description: str | None) -> None:
        """Set the comment written above the section; lines split on ``\\n``."""
        self.description = _format_description(description, "//")

    def save(self, stream: IO[str]) -> None:
        """Write the section, its entries in creation order, and its end tag."""
        stream.write(self.description)
        stream.write(f"[{self.name}]{_EOL}")
        by_index = {item.index: (key, item) for key, item in self.items.items()}
        for position in range(len(self.items)):
            entry = by_index.get(position)
            if entry is None:
                continue
            key, item = entry
            stream.write(item.description)
            stream.write(f"\t{key}={item.value}")
            stream.write(_EOL * 2)
        stream.write(f"[/{self.name}]{_EOL * 3}")


class ConfigFile:
    """A configuration file made of sections."""

    def __init__(self, filename: str | None = None) -> None:
        self._filename = ""
        self._sections: dict[str, ConfigSection] = {}
        if filename is not None:
            self.read_config(filename)

    def __getitem__(self, name: str) -> ConfigSection:
        if not name:
            raise ValueError("section name must not be empty")
        section = self._sections.get(name)
        if section is None:
            section = ConfigSection(name, len(self._sections))
            self._sections[name] = section
        return section

    def read_config(self, filename: str) -> None:
        """Load a file; a file can be loaded only once per object."""
        if self._filename:
            raise RuntimeError("configuration has already been read")
        if not filename:
            raise ValueError("file name must not be empty")
        self._filename = str(filename)
        try:
            self._read_file()
        except OSError:
            self._filename = ""
            raise

    def _read_file(self) -> None:
        with open(self._filename, "r", encoding="utf-8",
                  errors="surrogateescape", newline="") as handle:
            text = handle.read()

        description = ""
        section = ConfigSection()
        for raw in _LINE.findall(text):
            compact = trim_string(raw, "\t \r\n")
            if not compact:
                continue
            if compact.startswith(("#", "//", "\\\\")):
                description += raw
                continue

            line = trim_string(raw, "\r\n")
            if not line:
                continue

            if line[0] == "[" and line[-1] == "]" and len(line) > 1:
                if line[1] == "/":
                    self._sections.setdefault(section.name, section._copy())
                    continue
                section.name = _strip_blanks(line[1:-1])
                section.index = len(self._sections)
                section.items = {}
                section.description = description
                description = ""
                continue

            pos = line.find("=")
            if pos == -1 or pos >= len(line) - 1:
                continue
            key = _strip_blanks(line[:pos])
            value = _strip_blanks(line[pos + 1:])
            item = ConfigItem(value, description, len(section.items), True)
            section.items.setdefault(key, item)
            description = ""

    def save(self) -> None:
        """Write all sections back to the file they were read from."""
        if not self._filename:
            raise ValueError("no configuration file has been read")
        with open(self._filename, "w", encoding="utf-8",
                  errors="surrogateescape", newline="") as handle:
            by_index = {s.index: s for s in self._sections.values()}
            for position in range(len(self._sections)):
                section = by_index.get(position)
                if section is not None:
                    section.save(handle)