"""Compiler: directive parsing, backend dispatch and include tracking.

A request is a shader source (inline text or a file under the build root)
plus a directive list. Compilation runs in three stages:
1. Parse: directives → frozen CompilationConfig
2. Resolve: settle the source language if the directives left it open
3. Dispatch: hand the request to the first backend that succeeds, collecting
   every file read along the way

Nothing is cached; each call compiles from scratch and the dependency list
lets the host build system decide when to call again.
"""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from shaderbake.compiler.dependency import DependencyTracker
from shaderbake.compiler.dispatch import Dispatcher
from shaderbake.compiler.feedback import CompilationFeedback
from shaderbake.compiler.include import (
    IncludeKind,
    IncludeResolver,
    ResolvedInclude,
)
from shaderbake.compiler.plan import Planner
from shaderbake.config import BuildEnvironment, CompilationConfig, SourceLanguage
from shaderbake.directive import DirectiveInput, DirectiveParser
from shaderbake.errors import SourceReadError

if TYPE_CHECKING:
    from shaderbake.backend import Backend

__all__ = [
    "CompilationFeedback",
    "Compiler",
    "DependencyTracker",
    "Dispatcher",
    "IncludeKind",
    "IncludeResolver",
    "Planner",
    "ResolvedInclude",
]


class Compiler:
    """Runs the full compilation pipeline for one build root.

    Holds no per-request state, so one instance can compile any number of
    shaders.
    """

    parser: DirectiveParser
    dispatcher: Dispatcher
    planner: Planner

    def __init__(
        self,
        environment: BuildEnvironment,
        backends: Sequence["Backend"] | None = None,
    ) -> None:
        """Set up the pipeline.

        Args:
            environment: Build root for source paths and include search.
            backends: Candidate backends in priority order. Defaults to every
                installed backend.
        """
        if backends is None:
            from shaderbake.backend import available_backends

            backends = available_backends()
        self.environment = environment
        self.parser = DirectiveParser()
        self.dispatcher = Dispatcher(backends)
        self.planner = Planner()

    def compile_inline(self, source: str, directives: DirectiveInput = "") -> CompilationFeedback:
        """Compile literal source text. The dependency list stays empty
        unless the source includes files from the search path."""
        config = self.parser.parse(directives)
        return self.compile(source, None, config)

    def compile_file(self, path: str | Path, directives: DirectiveInput = "") -> CompilationFeedback:
        """Compile a shader file; `path` is relative to the build root.

        Raises:
            SourceReadError: If the file cannot be read.
        """
        config = self.parser.parse(directives)
        full = self.environment.resolve(path)
        try:
            source = full.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f'cannot read shader source "{full}": {e}') from e
        return self.compile(source, str(full), config)

    def compile(
        self, source: str, origin: str | None, config: CompilationConfig
    ) -> CompilationFeedback:
        """Compile an already parsed request."""
        config = self.resolve_language(config, origin)
        search_path = self.environment.search_path(config.include_dirs)
        return self.dispatcher.dispatch(source, origin, config, search_path)

    def resolve_language(
        self, config: CompilationConfig, origin: str | None
    ) -> CompilationConfig:
        """Pin down the source language before dispatch.

        An explicit language directive wins. Otherwise the origin's suffix
        decides, and failing that GLSL is assumed when a GLSL backend is
        available, WGSL when not.
        """
        if config.source_language is not SourceLanguage.UNKNOWN:
            return config
        if origin is not None:
            guessed = SourceLanguage.from_suffix(origin)
            if guessed is not SourceLanguage.UNKNOWN:
                return config.with_language(guessed)
        glsl = config.with_language(SourceLanguage.GLSL)
        if any(b.accepts(glsl) for b in self.dispatcher.backends):
            return glsl
        return config.with_language(SourceLanguage.WGSL)
