"""Error kinds raised while building and compiling a shader request.

Every error is fatal to the single request that raised it. Configuration
mistakes (bad directives, unsupported language or target) derive from
ValueError; failures that happen while touching the filesystem or running a
backend derive from RuntimeError. All of them share ShaderBakeError so the
CLI can report them uniformly.
"""
from __future__ import annotations


class ShaderBakeError(Exception):
    """Base class for every error raised by shaderbake."""


class DirectiveSyntaxError(ShaderBakeError, ValueError):
    """A directive is malformed or unknown."""

    def __init__(self, message: str, *, token: str, index: int, offset: int) -> None:
        self.token = token
        self.index = index
        self.offset = offset
        super().__init__(
            f"{message}: {token!r} (directive token #{index}, offset {offset})"
        )


class ManifestVariableError(ShaderBakeError, ValueError):
    """A manifest `${var}` placeholder cannot be substituted.

    The message starts with the key path of the offending value, e.g.
    `shaders[2].directives`.
    """


class UnsupportedLanguageError(ShaderBakeError, ValueError):
    """No available backend handles the requested source language."""


class UnsupportedTargetError(ShaderBakeError, ValueError):
    """Environment/version combination is not in the valid target table,
    or the backend at hand cannot emit it."""


class IncludeResolutionError(ShaderBakeError, RuntimeError):
    """An include could not be located or read.

    `kind` is "relative" or "standard"; `include` is the name as written in
    the shader source.
    """

    def __init__(self, message: str, *, include: str, kind: str) -> None:
        self.include = include
        self.kind = kind
        super().__init__(message)


class BackendCompilationError(ShaderBakeError, RuntimeError):
    """A backend reported a diagnostic; warnings count as errors."""

    def __init__(self, message: str, *, backend: str) -> None:
        self.backend = backend
        self.diagnostic = message
        super().__init__(f"[{backend}] {message}")


class MissingBuildEnvironmentError(ShaderBakeError, RuntimeError):
    """The build root directory could not be determined."""


class SourceReadError(ShaderBakeError, RuntimeError):
    """The main shader source file could not be read."""
