"""GLSL/HLSL backend driving shaderc's `glslc`."""
from __future__ import annotations

import re
import tempfile
from collections.abc import Sequence
from pathlib import Path, PurePath

from typing_extensions import override

from shaderbake.backend.base import Backend
from shaderbake.compiler.include import IncludeKind, IncludeResolver, scan_includes
from shaderbake.config import (
    STAGE_KEYWORDS,
    CompilationConfig,
    Optimization,
    ShaderStage,
    SourceLanguage,
    Target,
)
from shaderbake.errors import BackendCompilationError, UnsupportedTargetError

_TARGET_ENVS: dict[Target, str] = {
    Target.VULKAN1_0: "vulkan1.0",
    Target.VULKAN1_1: "vulkan1.1",
    Target.VULKAN1_2: "vulkan1.2",
    Target.OPENGL4_5: "opengl4.5",
}

_OPTIMIZATION_FLAGS: dict[Optimization, str] = {
    Optimization.NONE: "-O0",
    Optimization.MIN_SIZE: "-Os",
    Optimization.MAX_PERFORMANCE: "-O",
}

# glslang: "'#include' : Cannot find or open include file. for header name: x.h"
_MISSING_INCLUDE = re.compile(
    r"Cannot find or open include file\.?\s*for header name:\s*(?P<name>\S+)"
)


class ShadercBackend(Backend):
    """Compiles GLSL and HLSL with `glslc`.

    glslc runs its own preprocessor over the origin file, so conditional
    includes and include guards behave as in any C-style build. Inline source
    is written to a temporary file first. The files glslc read come back in a
    Make depfile and are recorded with the resolver's tracker. Warnings fail
    the build (`-Werror`).
    """

    name = "shaderc"
    program = "glslc"
    env_var = "GLSLC"
    languages = frozenset({SourceLanguage.GLSL, SourceLanguage.HLSL})

    @override
    def compile(
        self,
        source: str,
        origin: str | None,
        config: CompilationConfig,
        resolver: IncludeResolver,
    ) -> tuple[int, ...]:
        if origin is None:
            resolver.check_inline(source)
        args = self.arguments(config, origin, resolver.search_path)
        with tempfile.TemporaryDirectory(prefix="shaderbake-glslc-") as tmp:
            work = Path(tmp)
            if origin is None:
                suffix = "hlsl" if config.source_language is SourceLanguage.HLSL else "glsl"
                src_path = work / f"inline.{suffix}"
                src_path.write_text(source, encoding="utf-8")
            else:
                src_path = Path(origin)
            out_path = work / "output.spv"
            dep_path = work / "output.spv.d"
            try:
                self.run([*args, "-MD", "-MF", str(dep_path), "-o", str(out_path), str(src_path)])
            except BackendCompilationError as e:
                m = _MISSING_INCLUDE.search(e.diagnostic)
                if m is None:
                    raise
                name = m.group("name").strip("'\"<>")
                raise resolver.not_found(name, _include_kind(name, source)) from e
            if dep_path.is_file():
                resolver.tracker.record_depfile(
                    dep_path.read_text(encoding="utf-8"), skip=str(src_path)
                )
            return self.read_output(out_path)

    def arguments(
        self,
        config: CompilationConfig,
        origin: str | None = None,
        search_path: Sequence[Path] = (),
    ) -> list[str]:
        """Build the glslc flags (without the executable and the file arguments).

        When no stage directive was given, a stage suffix on `origin` (e.g.
        `.frag`) supplies it.
        """
        target = config.target
        env = _TARGET_ENVS.get(target)
        if env is None:
            raise UnsupportedTargetError(
                f"glslc cannot target {target.describe()}"
            )
        language = "hlsl" if config.source_language is SourceLanguage.HLSL else "glsl"
        args = [
            "-x", language,
            f"--target-env={env}",
            _OPTIMIZATION_FLAGS[config.optimization],
            f"-fentry-point={config.entry_point}",
            "-Werror",
        ]
        stage = config.stage
        if stage is ShaderStage.UNKNOWN and origin is not None:
            stage = STAGE_KEYWORDS.get(PurePath(origin).suffix[1:].lower(), stage)
        if stage is not ShaderStage.UNKNOWN:
            args.append(f"-fshader-stage={stage.value}")
        for name, value in config.defines:
            args.append(f"-D{name}" if value is None else f"-D{name}={value}")
        if config.debug_info:
            args.append("-g")
        if config.auto_bind_uniforms:
            args.append("-fauto-bind-uniforms")
        for directory in search_path:
            args += ["-I", str(directory)]
        return args


def _include_kind(name: str, source: str) -> IncludeKind:
    for found, kind in scan_includes(source):
        if found == name:
            return kind
    return IncludeKind.STANDARD
