"""Backend contract and the subprocess plumbing shared by every backend.

A backend wraps one external compiler executable. It declares which source
languages it understands; the dispatcher never hands it anything else.
"""
from __future__ import annotations

import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from shaderbake.compiler.include import IncludeResolver
from shaderbake.config import CompilationConfig, SourceLanguage
from shaderbake.errors import BackendCompilationError
from shaderbake.spirv import words_from_bytes


def find_tool(program: str, env_var: str, explicit: str | None = None) -> str | None:
    """Locate an executable: explicit path, then `env_var`, then PATH."""
    if explicit:
        return explicit
    env_path = os.environ.get(env_var)
    if env_path:
        return env_path
    return shutil.which(program)


class Backend(ABC):
    """One external shader compiler."""

    name: str
    program: str
    env_var: str
    languages: frozenset[SourceLanguage]

    def __init__(self, executable: str | None = None) -> None:
        self.executable = find_tool(self.program, self.env_var, executable)

    @property
    def available(self) -> bool:
        return self.executable is not None

    def accepts(self, config: CompilationConfig) -> bool:
        """Whether this backend handles the config's source language."""
        return config.source_language in self.languages

    @abstractmethod
    def compile(
        self,
        source: str,
        origin: str | None,
        config: CompilationConfig,
        resolver: IncludeResolver,
    ) -> tuple[int, ...]:
        """Compile `source` to SPIR-V words.

        Args:
            source: Shader source text.
            origin: Path the source was read from, None for inline source.
            config: The parsed request.
            resolver: Include callback; records every include it resolves.

        Raises:
            BackendCompilationError: On any diagnostic, warnings included.
        """

    # ─────────────────────────────────────────────────────────────────────
    # Subprocess helpers
    # ─────────────────────────────────────────────────────────────────────

    def run(self, args: Sequence[str]) -> bytes:
        """Run the executable and return its stdout.

        A non-zero exit, a failure to start, or any warning on stderr is
        reported as BackendCompilationError.
        """
        if self.executable is None:
            raise BackendCompilationError(
                f"{self.program} executable not found (set {self.env_var} or add it to PATH)",
                backend=self.name,
            )
        cmd = [self.executable, *args]
        try:
            proc = subprocess.run(cmd, capture_output=True, check=False)
        except OSError as e:
            raise BackendCompilationError(
                f"cannot run {self.executable}: {e}", backend=self.name
            ) from e
        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        if proc.returncode != 0:
            raise BackendCompilationError(
                stderr or f"{self.program} exited with status {proc.returncode}",
                backend=self.name,
            )
        if "warning" in stderr.lower():
            raise BackendCompilationError(stderr, backend=self.name)
        return proc.stdout

    def decode(self, data: bytes) -> tuple[int, ...]:
        try:
            return words_from_bytes(data)
        except ValueError as e:
            raise BackendCompilationError(
                f"{self.program} produced an invalid module: {e}", backend=self.name
            ) from e

    def read_output(self, path: Path) -> tuple[int, ...]:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise BackendCompilationError(
                f"{self.program} did not write {path}: {e}", backend=self.name
            ) from e
        return self.decode(data)
