"""The result of one successful compilation."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CompilationFeedback:
    """SPIR-V words plus every file path the compilation read.

    `dependency_paths` lists the main source file first (file-based requests
    only), then each include in the order it was resolved.
    """

    words: tuple[int, ...]
    dependency_paths: tuple[str, ...]
