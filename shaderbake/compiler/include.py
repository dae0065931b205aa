"""Include resolution.

Two include kinds exist. A relative include (`#include "x.h"`) is looked up
next to the file that contains it, so it only works when that file lives on
disk. A standard include (`#include <x.h>`) scans the search path in order
and the first directory holding the file wins.

Every include that resolves is recorded with the DependencyTracker before its
content is handed back, so the host build system learns about it. Backends
that run a real preprocessor report their reads through a depfile instead
and only use the resolver for its search path and error reporting.
"""
from __future__ import annotations

import enum
import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from shaderbake.compiler.dependency import DependencyTracker
from shaderbake.errors import IncludeResolutionError


class IncludeKind(enum.Enum):
    RELATIVE = "relative"
    STANDARD = "standard"


@dataclass(frozen=True, slots=True)
class ResolvedInclude:
    path: str
    content: str


class IncludeResolver:
    """Resolves include requests against an origin file or the search path."""

    def __init__(self, search_path: Sequence[Path], tracker: DependencyTracker) -> None:
        self.search_path = tuple(search_path)
        self.tracker = tracker

    def resolve(self, name: str, kind: IncludeKind, origin: str | None) -> ResolvedInclude:
        """Locate and read an include requested from `origin`.

        Args:
            name: The include as written between quotes or angle brackets.
            kind: Relative or standard lookup.
            origin: Path of the file doing the including, None for inline
                source.

        Raises:
            IncludeResolutionError: If the file cannot be found or read.
        """
        match kind:
            case IncludeKind.RELATIVE:
                path = self._relative(name, origin)
            case IncludeKind.STANDARD:
                path = self._standard(name)

        resolved = str(path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            raise IncludeResolutionError(
                f'cannot read from "{resolved}": {reason}', include=name, kind=kind.value
            ) from e
        self.tracker.record(resolved)
        return ResolvedInclude(path=resolved, content=content)

    def _relative(self, name: str, origin: str | None) -> Path:
        if origin is None:
            raise IncludeResolutionError(
                f'cannot include "{name}": the shader source is not living in a '
                "filesystem, but attempts to include a relative path",
                include=name,
                kind=IncludeKind.RELATIVE.value,
            )
        return Path(origin).parent / name

    def _standard(self, name: str) -> Path:
        for directory in self.search_path:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        raise self.not_found(name, IncludeKind.STANDARD)

    def not_found(self, name: str, kind: IncludeKind) -> IncludeResolutionError:
        """The error for an include no search path entry holds."""
        searched = ", ".join(f'"{d}"' for d in self.search_path) or "(none)"
        return IncludeResolutionError(
            f'cannot find "{name}" in include directories: {searched}',
            include=name,
            kind=kind.value,
        )

    def check_inline(self, source: str) -> None:
        """Reject a relative include in inline source up front.

        Inline source has no directory for a backend preprocessor to search.

        Raises:
            IncludeResolutionError: On the first quote-style include.
        """
        for name, kind in scan_includes(source):
            if kind is IncludeKind.RELATIVE:
                _ = self._relative(name, None)


_INCLUDE_LINE = re.compile(
    r'^[ \t]*#[ \t]*include[ \t]*(?:"(?P<rel>[^"]+)"|<(?P<std>[^>]+)>)',
    re.MULTILINE,
)


def scan_includes(source: str) -> list[tuple[str, IncludeKind]]:
    """Every `#include` line of `source`, in order, conditionals ignored."""
    found: list[tuple[str, IncludeKind]] = []
    for m in _INCLUDE_LINE.finditer(source):
        if m.group("rel") is not None:
            found.append((m.group("rel"), IncludeKind.RELATIVE))
        else:
            found.append((m.group("std"), IncludeKind.STANDARD))
    return found
