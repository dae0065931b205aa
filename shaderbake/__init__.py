"""shaderbake: compile shaders to embeddable SPIR-V at build time.

shaderbake turns shader source (GLSL, HLSL, WGSL or SPIR-V assembly) into
SPIR-V words during a build step, so the host program can embed them as
constants. A compilation request is a source plus a directive list:

    from shaderbake import compile_file

    feedback = compile_file("shaders/blit.frag", 'frag, vulkan1_1, I "include"')
    feedback.words             # SPIR-V, starting with 0x07230203
    feedback.dependency_paths  # every file read, for the build system

Core pieces:
- directive: the compact configuration language (`hlsl, vert, D FOO="1"`)
- compiler: backend dispatch with include resolution and dependency tracking
- backend: adapters over naga, glslc and spirv-as
- output: Python/C/raw artifacts plus Make depfiles
"""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from shaderbake.compiler import CompilationFeedback, Compiler
from shaderbake.config import BuildEnvironment
from shaderbake.directive import DirectiveInput

if TYPE_CHECKING:
    from shaderbake.backend import Backend

__all__ = [
    "BuildEnvironment",
    "CompilationFeedback",
    "Compiler",
    "compile_file",
    "compile_inline",
]


def _compiler(
    environment: BuildEnvironment | None, backends: Sequence["Backend"] | None
) -> Compiler:
    return Compiler(environment or BuildEnvironment.from_environ(), backends)


def compile_inline(
    source: str,
    directives: DirectiveInput = "",
    *,
    environment: BuildEnvironment | None = None,
    backends: Sequence["Backend"] | None = None,
) -> CompilationFeedback:
    """Compile literal shader source.

    Without an explicit environment the build root is read from
    `SHADERBAKE_BASE_DIR`.
    """
    return _compiler(environment, backends).compile_inline(source, directives)


def compile_file(
    path: str | Path,
    directives: DirectiveInput = "",
    *,
    environment: BuildEnvironment | None = None,
    backends: Sequence["Backend"] | None = None,
) -> CompilationFeedback:
    """Compile a shader file given relative to the build root."""
    return _compiler(environment, backends).compile_file(path, directives)
