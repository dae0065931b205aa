"""Backend dispatch: try candidate compilers in priority order.

Each backend either declines (it does not handle the source language) or
makes a full attempt. The dispatcher moves on after *any* failed attempt,
not only after a language mismatch, so a genuine source error in one backend
still lets the next one try. The first success wins.

When every attempt fails, the last attempt's error is raised. Diagnostics
from the earlier attempts are attached to it as exception notes rather than
dropped, since the earliest backend often produced the most useful message.
"""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from shaderbake.compiler.dependency import DependencyTracker
from shaderbake.compiler.feedback import CompilationFeedback
from shaderbake.compiler.include import IncludeResolver
from shaderbake.config import CompilationConfig
from shaderbake.console import logger
from shaderbake.errors import ShaderBakeError, UnsupportedLanguageError

if TYPE_CHECKING:
    from shaderbake.backend import Backend


class Dispatcher:
    """Runs a request through the first backend that succeeds."""

    def __init__(self, backends: Sequence["Backend"]) -> None:
        self.backends = list(backends)

    def candidates(self, config: CompilationConfig) -> list["Backend"]:
        """Backends that accept the config's language, in priority order.

        Raises:
            UnsupportedLanguageError: If no backend accepts it.
        """
        found = [b for b in self.backends if b.accepts(config)]
        if not found:
            names = ", ".join(b.name for b in self.backends) or "none"
            raise UnsupportedLanguageError(
                f"no available backend compiles {config.source_language.value} "
                f"(available backends: {names})"
            )
        return found

    def dispatch(
        self,
        source: str,
        origin: str | None,
        config: CompilationConfig,
        search_path: Sequence[Path],
    ) -> CompilationFeedback:
        """Compile with the first candidate backend that succeeds.

        Every attempt starts a fresh dependency list seeded with `origin`, so
        includes read by a failed attempt never reach the result.
        """
        _ = config.target  # raises UnsupportedTargetError before any backend runs
        failures: list[tuple[str, ShaderBakeError]] = []
        for backend in self.candidates(config):
            tracker = DependencyTracker(origin)
            resolver = IncludeResolver(search_path, tracker)
            try:
                words = backend.compile(source, origin, config, resolver)
            except ShaderBakeError as e:
                logger.warning(f"backend {backend.name} failed: {e}")
                failures.append((backend.name, e))
                continue
            if failures:
                logger.info(f"backend {backend.name} succeeded after fallback")
            return CompilationFeedback(words=words, dependency_paths=tracker.paths)

        _, last = failures[-1]
        for name, earlier in failures[:-1]:
            last.add_note(f"earlier attempt [{name}]: {earlier}")
        raise last
