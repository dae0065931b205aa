"""Compiler backends: thin adapters over external shader compilers.

Backends are tried in a fixed priority order: the WGSL translator first,
then the general-purpose GLSL/HLSL compiler, then the SPIR-V assembler. Only
backends whose executable can be found take part.
"""
from __future__ import annotations

from shaderbake.backend.base import Backend, find_tool
from shaderbake.backend.naga import NagaBackend
from shaderbake.backend.shaderc import ShadercBackend
from shaderbake.backend.spvasm import SpvasmBackend

__all__ = [
    "Backend",
    "NagaBackend",
    "ShadercBackend",
    "SpvasmBackend",
    "available_backends",
    "default_backends",
    "find_tool",
]


def default_backends() -> list[Backend]:
    """Every known backend, in priority order."""
    return [NagaBackend(), ShadercBackend(), SpvasmBackend()]


def available_backends() -> list[Backend]:
    """The known backends whose executables are installed."""
    return [b for b in default_backends() if b.available]
