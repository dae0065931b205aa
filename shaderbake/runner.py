"""Build runner: compile every shader in a manifest and write its artifacts.

This is the code-generation half of a two-phase build. The host build system
runs it before compiling its own sources, includes the generated artifacts,
and reads the depfiles to know when to run it again.
"""
from __future__ import annotations

from pathlib import Path

from shaderbake.compiler import CompilationFeedback, Compiler
from shaderbake.config import BuildEnvironment
from shaderbake.config.manifest import Manifest, ShaderEntry
from shaderbake.console import logger
from shaderbake.output import OutputAssembler, OutputFormat


class BuildRunner:
    """Compiles a manifest's shaders one after another.

    The first failure aborts the build; artifacts already written stay on
    disk and are simply overwritten by the next successful run.
    """

    def __init__(
        self,
        manifest: Manifest,
        environment: BuildEnvironment,
        *,
        out_dir: Path | None = None,
        fmt: OutputFormat | None = None,
        compiler: Compiler | None = None,
    ) -> None:
        self.manifest = manifest
        self.environment = environment
        self.out_dir = out_dir or environment.resolve(manifest.defaults.out_dir)
        self.fmt = fmt
        self.compiler = compiler or Compiler(environment)
        self.assembler = OutputAssembler(self.out_dir)

    def run(self) -> dict[str, Path]:
        """Compile and write every shader; return all written paths by name."""
        shaders = self.manifest.shaders
        logger.header("Build", f"{len(shaders)} shaders")
        logger.path(str(self.out_dir), label="output")

        artifacts: dict[str, Path] = {}
        for i, shader in enumerate(shaders, start=1):
            logger.step(i, len(shaders), shader.name)
            feedback = self.compile_entry(shader)
            fmt = self.fmt or shader.format or self.manifest.defaults.format
            artifacts.update(self.assembler.write(shader.name, feedback, fmt))
        return artifacts

    def compile_entry(self, shader: ShaderEntry) -> CompilationFeedback:
        directives = shader.directive_list(self.manifest.defaults)
        if shader.inline is not None:
            return self.compiler.compile_inline(shader.inline, directives)
        if shader.source is None:
            raise ValueError(f"shader {shader.name!r} has neither source nor inline text")
        return self.compiler.compile_file(shader.source, directives)
