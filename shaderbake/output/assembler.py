"""Output assembly: turn compilation feedback into build artifacts.

Every compiled shader produces two files:
- the artifact itself, holding the SPIR-V words exactly as the backend
  emitted them: a Python module, a C header, or the raw binary
- a Make-format depfile listing every file the compilation read, so the host
  build system re-runs the step when any of them changes
"""
from __future__ import annotations

import enum
import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from shaderbake.compiler.feedback import CompilationFeedback
from shaderbake.spirv import words_to_bytes

WORDS_PER_LINE = 8


class OutputFormat(str, enum.Enum):
    """Artifact kinds the assembler can write."""

    PYTHON = "python"
    C = "c"
    SPV = "spv"

    @property
    def suffix(self) -> str:
        match self:
            case OutputFormat.PYTHON:
                return ".py"
            case OutputFormat.C:
                return ".h"
            case OutputFormat.SPV:
                return ".spv"


def symbol_name(name: str) -> str:
    """Turn an arbitrary name into a C/Python identifier."""
    symbol = re.sub(r"[^A-Za-z0-9_]", "_", name)
    if not symbol or symbol[0].isdigit():
        symbol = f"_{symbol}"
    return symbol


def _word_rows(words: Sequence[int]) -> Iterable[str]:
    for i in range(0, len(words), WORDS_PER_LINE):
        yield ", ".join(f"0x{w:08x}" for w in words[i : i + WORDS_PER_LINE])


def _make_escape(path: str) -> str:
    return path.replace("\\", "/").replace("$", "$$").replace("#", "\\#").replace(" ", "\\ ")


class OutputAssembler:
    """Writes shader artifacts and their depfiles into one directory."""

    def __init__(self, output_dir: str | Path) -> None:
        """Set up the assembler with an output directory."""
        self.output_dir = Path(output_dir)

    # ─────────────────────────────────────────────────────────────────────
    # Rendering
    # ─────────────────────────────────────────────────────────────────────

    def render_python(self, name: str, feedback: CompilationFeedback) -> str:
        """A module exposing `WORDS` and `DEPENDENCIES` tuples."""
        lines = [
            "# Generated by shaderbake. Do not edit.",
            f'"""SPIR-V words for shader {name!r}."""',
            "",
            "WORDS = (",
        ]
        lines.extend(f"    {row}," for row in _word_rows(feedback.words))
        lines.append(")")
        lines.append("")
        lines.append("DEPENDENCIES = (")
        lines.extend(f"    {path!r}," for path in feedback.dependency_paths)
        lines.append(")")
        return "\n".join(lines) + "\n"

    def render_c(self, name: str, feedback: CompilationFeedback) -> str:
        """A header with a `static const uint32_t` array and its length."""
        symbol = symbol_name(name)
        guard = f"SHADERBAKE_{symbol.upper()}_H"
        lines = [
            "/* Generated by shaderbake. Do not edit.",
            " *",
            " * Dependencies:",
        ]
        lines.extend(f" *   {p.replace('*/', '* /')}" for p in feedback.dependency_paths)
        lines += [
            " */",
            f"#ifndef {guard}",
            f"#define {guard}",
            "",
            "#include <stddef.h>",
            "#include <stdint.h>",
            "",
            f"static const uint32_t {symbol}[] = {{",
        ]
        lines.extend(f"    {row}," for row in _word_rows(feedback.words))
        lines += [
            "};",
            f"static const size_t {symbol}_len = {len(feedback.words)};",
            "",
            f"#endif /* {guard} */",
        ]
        return "\n".join(lines) + "\n"

    def render_depfile(self, target: Path, feedback: CompilationFeedback) -> str:
        """A Make rule `target: deps...`; no prerequisites for inline source."""
        parts = [f"{_make_escape(str(target))}:"]
        parts.extend(_make_escape(p) for p in feedback.dependency_paths)
        return " \\\n  ".join(parts) + "\n"

    # ─────────────────────────────────────────────────────────────────────
    # Writing
    # ─────────────────────────────────────────────────────────────────────

    def artifact_path(self, name: str, fmt: OutputFormat) -> Path:
        return self.output_dir / f"{name}{fmt.suffix}"

    def write(
        self,
        name: str,
        feedback: CompilationFeedback,
        fmt: OutputFormat = OutputFormat.PYTHON,
        *,
        artifact: Path | None = None,
        depfile: Path | None = None,
    ) -> dict[str, Path]:
        """Write the artifact and its depfile; return their paths by file name.

        Args:
            name: Shader name; also the C symbol and default file stem.
            feedback: Result of the compilation.
            fmt: Artifact kind.
            artifact: Override for the artifact path.
            depfile: Override for the depfile path (default: artifact + ".d").
        """
        artifact = artifact or self.artifact_path(name, fmt)
        depfile = depfile or artifact.with_name(artifact.name + ".d")
        artifact.parent.mkdir(parents=True, exist_ok=True)
        depfile.parent.mkdir(parents=True, exist_ok=True)

        match fmt:
            case OutputFormat.PYTHON:
                artifact.write_text(self.render_python(name, feedback), encoding="utf-8")
            case OutputFormat.C:
                artifact.write_text(self.render_c(name, feedback), encoding="utf-8")
            case OutputFormat.SPV:
                artifact.write_bytes(words_to_bytes(feedback.words))
        depfile.write_text(self.render_depfile(artifact, feedback), encoding="utf-8")

        return {artifact.name: artifact, depfile.name: depfile}
