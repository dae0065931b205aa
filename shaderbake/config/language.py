"""Source languages and shader stages a request can name."""
from __future__ import annotations

import enum
from pathlib import PurePath


class SourceLanguage(enum.Enum):
    """Textual shader language of a request.

    UNKNOWN means the directives did not say; the compiler resolves it before
    dispatch.
    """

    UNKNOWN = "unknown"
    GLSL = "glsl"
    HLSL = "hlsl"
    WGSL = "wgsl"
    SPIRV_ASSEMBLY = "spvasm"

    @classmethod
    def from_suffix(cls, path: str | PurePath) -> "SourceLanguage":
        """Guess the language from a file suffix, UNKNOWN if it gives no hint."""
        suffix = PurePath(path).suffix.lower()
        match suffix:
            case ".wgsl":
                return cls.WGSL
            case ".hlsl" | ".fx":
                return cls.HLSL
            case ".spvasm":
                return cls.SPIRV_ASSEMBLY
            case ".glsl":
                return cls.GLSL
            case _ if suffix[1:] in STAGE_KEYWORDS:
                return cls.GLSL
            case _:
                return cls.UNKNOWN


class ShaderStage(enum.Enum):
    """Pipeline stage the shader is compiled for.

    Values are the directive keywords that select them.
    """

    UNKNOWN = "unknown"

    VERTEX = "vert"
    TESS_CONTROL = "tesc"
    TESS_EVAL = "tese"
    GEOMETRY = "geom"
    FRAGMENT = "frag"
    COMPUTE = "comp"
    # Mesh pipeline
    MESH = "mesh"
    TASK = "task"
    # Ray-tracing pipeline
    RAY_GEN = "rgen"
    INTERSECTION = "rint"
    ANY_HIT = "rahit"
    CLOSEST_HIT = "rchit"
    MISS = "rmiss"
    CALLABLE = "rcall"


STAGE_KEYWORDS: dict[str, ShaderStage] = {
    stage.value: stage for stage in ShaderStage if stage is not ShaderStage.UNKNOWN
}


class Optimization(enum.Enum):
    """How hard the backend should optimize the emitted SPIR-V."""

    NONE = "none"
    MIN_SIZE = "min_size"
    MAX_PERFORMANCE = "max_perf"
