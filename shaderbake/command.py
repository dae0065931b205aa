"""Typed CLI command payloads.

Each command type represents a distinct user intent. The CLI parses arguments
into these typed objects, which are then dispatched to the appropriate handler.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from shaderbake.config import BuildEnvironment
from shaderbake.config.manifest import Manifest
from shaderbake.output import OutputFormat


@dataclass(frozen=True, slots=True)
class BuildCommand:
    """Request to compile every shader listed in a manifest."""

    manifest: Manifest
    environment: BuildEnvironment
    out_dir: Path | None
    format: OutputFormat | None


@dataclass(frozen=True, slots=True)
class CompileCommand:
    """Request to compile a single shader given on the command line."""

    source: str
    inline: bool
    directives: str
    name: str
    environment: BuildEnvironment
    output: Path
    format: OutputFormat
    depfile: Path | None


@dataclass(frozen=True, slots=True)
class CheckCommand:
    """Request to parse a manifest's directives without compiling.

    Useful for validating directive lists on machines without the backends.
    """

    manifest: Manifest
    print_plan: bool


Command = BuildCommand | CompileCommand | CheckCommand
