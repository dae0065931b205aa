"""Build environment: the root directory a build resolves paths against.

Referenced shader paths and relative include directories are interpreted
relative to this root, and the root itself is the first include directory
searched, ahead of every `I` directory. It is passed explicitly to every
compilation instead of being read from ambient process state; `from_environ`
is the one place the process environment is consulted.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from shaderbake.errors import MissingBuildEnvironmentError

BASE_DIR_VAR = "SHADERBAKE_BASE_DIR"


@dataclass(frozen=True, slots=True)
class BuildEnvironment:
    """The build root for a set of compilations."""

    base_dir: Path

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "BuildEnvironment":
        """Read the build root from `SHADERBAKE_BASE_DIR`.

        Raises:
            MissingBuildEnvironmentError: If the variable is unset or empty.
        """
        env = os.environ if environ is None else environ
        value = env.get(BASE_DIR_VAR)
        if not value:
            raise MissingBuildEnvironmentError(
                f"{BASE_DIR_VAR} is not set; shaderbake needs a build root to "
                "resolve shader paths (pass --base-dir or set the variable)"
            )
        return cls(base_dir=Path(value))

    def resolve(self, path: str | Path) -> Path:
        """Interpret `path` relative to the build root (absolute paths pass)."""
        return self.base_dir / path

    def search_path(self, include_dirs: tuple[str, ...]) -> tuple[Path, ...]:
        """Directories scanned for standard includes, in priority order.

        The build root comes first, then each include directory as listed.
        """
        return (self.base_dir,) + tuple(self.resolve(d) for d in include_dirs)
