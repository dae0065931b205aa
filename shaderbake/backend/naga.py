"""WGSL backend driving the `naga` command-line translator."""
from __future__ import annotations

import tempfile
from pathlib import Path

from typing_extensions import override

from shaderbake.backend.base import Backend
from shaderbake.compiler.include import IncludeResolver
from shaderbake.config import CompilationConfig, SourceLanguage


class NagaBackend(Backend):
    """Parses, validates and translates WGSL with `naga`.

    WGSL has no include mechanism, so the resolver is never consulted. naga
    writes every entry point of the module; `entry_point` and `stage` are not
    forwarded. Unless `no_y_flip` was given, naga flips the Y axis to map
    WebGPU's NDC onto Vulkan's.
    """

    name = "naga"
    program = "naga"
    env_var = "NAGA"
    languages = frozenset({SourceLanguage.WGSL})

    @override
    def compile(
        self,
        source: str,
        origin: str | None,
        config: CompilationConfig,
        resolver: IncludeResolver,
    ) -> tuple[int, ...]:
        args = self.arguments(config)
        with tempfile.TemporaryDirectory(prefix="shaderbake-naga-") as tmp:
            src_path = Path(tmp) / "input.wgsl"
            out_path = Path(tmp) / "output.spv"
            src_path.write_text(source, encoding="utf-8")
            self.run([*args, str(src_path), str(out_path)])
            return self.read_output(out_path)

    def arguments(self, config: CompilationConfig) -> list[str]:
        """naga flags for the config (input and output paths excluded)."""
        args = ["--spv-version", config.target.spirv_version.label]
        if not config.flip_vertical_coordinate:
            args.append("--keep-coordinate-space")
        if config.debug_info:
            args.append("-g")
        return args
