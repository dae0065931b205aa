"""Dependency tracking: every file a compilation read, in read order."""
from __future__ import annotations

import re

# Whitespace not preceded by a backslash; `\ ` is a space inside a path.
_SEPARATOR = re.compile(r"(?<!\\)\s+")


class DependencyTracker:
    """Accumulates dependency paths for one compilation attempt.

    The main source file (if any) goes first, then each include as it is
    resolved. Paths are never de-duplicated: a header included twice is
    recorded twice.
    """

    def __init__(self, main_path: str | None = None) -> None:
        self._paths: list[str] = []
        if main_path is not None:
            self._paths.append(main_path)

    def record(self, path: str) -> None:
        self._paths.append(path)

    def record_depfile(self, text: str, *, skip: str | None = None) -> None:
        """Record the prerequisites listed in a compiler-written Make depfile.

        `skip` names the compiled input itself, which the tracker either
        already holds as the main path or must not list at all.
        """
        for path in parse_depfile(text):
            if path != skip:
                self.record(path)

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(self._paths)

    def __len__(self) -> int:
        return len(self._paths)


def parse_depfile(text: str) -> list[str]:
    """Prerequisites of a single-rule Make depfile, in listed order.

    Line continuations are joined and `\\ ` unescapes to a space.
    """
    joined = text.replace("\\\r\n", " ").replace("\\\n", " ")
    # The target may carry a drive letter (C:\...), so split on ": ".
    _, sep, prerequisites = joined.partition(": ")
    if not sep:
        _, sep, prerequisites = joined.rpartition(":")
    if not sep:
        return []
    return [
        part.replace("\\ ", " ")
        for part in _SEPARATOR.split(prerequisites.strip())
        if part
    ]
