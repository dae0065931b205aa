"""SPIR-V assembly backend driving SPIRV-Tools' `spirv-as`."""
from __future__ import annotations

import tempfile
from pathlib import Path

from typing_extensions import override

from shaderbake.backend.base import Backend
from shaderbake.compiler.include import IncludeResolver
from shaderbake.config import CompilationConfig, SourceLanguage


class SpvasmBackend(Backend):
    """Assembles textual SPIR-V; the header version follows the target."""

    name = "spirv-as"
    program = "spirv-as"
    env_var = "SPIRV_AS"
    languages = frozenset({SourceLanguage.SPIRV_ASSEMBLY})

    @override
    def compile(
        self,
        source: str,
        origin: str | None,
        config: CompilationConfig,
        resolver: IncludeResolver,
    ) -> tuple[int, ...]:
        args = self.arguments(config)
        with tempfile.TemporaryDirectory(prefix="shaderbake-spvasm-") as tmp:
            src_path = Path(tmp) / "input.spvasm"
            out_path = Path(tmp) / "output.spv"
            src_path.write_text(source, encoding="utf-8")
            self.run([*args, "-o", str(out_path), str(src_path)])
            return self.read_output(out_path)

    def arguments(self, config: CompilationConfig) -> list[str]:
        return ["--target-env", f"spv{config.target.spirv_version.label}"]
