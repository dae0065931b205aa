"""Artifact output: generated sources, raw binaries and depfiles."""
from __future__ import annotations

from shaderbake.output.assembler import OutputAssembler, OutputFormat, symbol_name

__all__ = ["OutputAssembler", "OutputFormat", "symbol_name"]
