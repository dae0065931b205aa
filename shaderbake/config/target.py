"""Target environments and the table of valid (environment, SPIR-V) pairs.

The environment and SPIR-V version are not independent: each environment
keyword pins both. Rather than accept the full cross product and let a
backend reject nonsense later, valid combinations are enumerated here and
everything else is refused up front.
"""
from __future__ import annotations

import enum

from shaderbake.errors import UnsupportedTargetError


class TargetEnv(enum.Enum):
    """Client API the SPIR-V is consumed by."""

    VULKAN = "vulkan"
    OPENGL = "opengl"
    WEBGPU = "webgpu"


class SpirvVersion(enum.Enum):
    """SPIR-V language version, as (major, minor)."""

    V1_0 = (1, 0)
    V1_1 = (1, 1)
    V1_2 = (1, 2)
    V1_3 = (1, 3)
    V1_4 = (1, 4)
    V1_5 = (1, 5)
    V1_6 = (1, 6)

    @property
    def label(self) -> str:
        """Dotted form, e.g. "1.3"."""
        major, minor = self.value
        return f"{major}.{minor}"


class Target(enum.Enum):
    """The valid (environment, SPIR-V version) tuples."""

    VULKAN1_0 = (TargetEnv.VULKAN, SpirvVersion.V1_0)
    VULKAN1_1 = (TargetEnv.VULKAN, SpirvVersion.V1_3)
    VULKAN1_2 = (TargetEnv.VULKAN, SpirvVersion.V1_5)
    OPENGL4_5 = (TargetEnv.OPENGL, SpirvVersion.V1_0)
    WEBGPU = (TargetEnv.WEBGPU, SpirvVersion.V1_0)

    @property
    def env(self) -> TargetEnv:
        return self.value[0]

    @property
    def spirv_version(self) -> SpirvVersion:
        return self.value[1]

    @classmethod
    def lookup(cls, env: TargetEnv, version: SpirvVersion) -> "Target":
        """Find the table entry for a pair, or raise UnsupportedTargetError."""
        try:
            return cls((env, version))
        except ValueError:
            raise UnsupportedTargetError(
                f"unsupported target: {env.value} with SPIR-V {version.label}; "
                f"valid targets are {', '.join(t.describe() for t in cls)}"
            ) from None

    def describe(self) -> str:
        return f"{self.env.value}/SPIR-V {self.spirv_version.label}"


# Directive keyword -> target. `vulkan` and `opengl` are shorthand aliases.
TARGET_KEYWORDS: dict[str, Target] = {
    "vulkan": Target.VULKAN1_0,
    "vulkan1_0": Target.VULKAN1_0,
    "vulkan1_1": Target.VULKAN1_1,
    "vulkan1_2": Target.VULKAN1_2,
    "opengl": Target.OPENGL4_5,
    "opengl4_5": Target.OPENGL4_5,
    "webgpu": Target.WEBGPU,
}
