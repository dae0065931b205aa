"""CompilationConfig: the canonical description of one compilation request.

The directive parser starts from the defaults below and derives a new,
frozen config for every directive it consumes. Backends only ever read it.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from shaderbake.config.language import Optimization, ShaderStage, SourceLanguage
from shaderbake.config.target import SpirvVersion, Target, TargetEnv

Define = tuple[str, str | None]


class CompilationConfig(BaseModel):
    """Everything a backend needs to know besides the source text."""

    model_config = ConfigDict(frozen=True)

    source_language: SourceLanguage = SourceLanguage.UNKNOWN
    stage: ShaderStage = ShaderStage.UNKNOWN
    include_dirs: tuple[str, ...] = ()
    defines: tuple[Define, ...] = ()
    target_env: TargetEnv = TargetEnv.VULKAN
    spirv_version: SpirvVersion = SpirvVersion.V1_0
    entry_point: str = "main"
    optimization: Optimization = Optimization.NONE
    debug_info: bool = True
    auto_bind_uniforms: bool = False
    # Only honoured when compiling WGSL.
    flip_vertical_coordinate: bool = True

    @property
    def target(self) -> Target:
        """The validated (environment, SPIR-V version) table entry.

        Raises:
            UnsupportedTargetError: If the pair is not a valid target.
        """
        return Target.lookup(self.target_env, self.spirv_version)

    def with_target(self, target: Target) -> "CompilationConfig":
        return self.model_copy(
            update={"target_env": target.env, "spirv_version": target.spirv_version}
        )

    def with_language(self, language: SourceLanguage) -> "CompilationConfig":
        return self.model_copy(update={"source_language": language})
