"""
Unit tests for backend dispatch.
"""
from __future__ import annotations

import tempfile
import unittest
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from shaderbake.backend import Backend
from shaderbake.compiler.dispatch import Dispatcher
from shaderbake.compiler.include import IncludeKind, IncludeResolver
from shaderbake.config import CompilationConfig, SourceLanguage, SpirvVersion
from shaderbake.errors import (
    BackendCompilationError,
    IncludeResolutionError,
    UnsupportedLanguageError,
    UnsupportedTargetError,
)
from shaderbake.spirv import SPIRV_MAGIC

CompileFn = Callable[[str, str | None, CompilationConfig, IncludeResolver], tuple[int, ...]]


class FakeBackend(Backend):
    """Backend whose compile step is a plain function."""

    program = "fake"
    env_var = "SHADERBAKE_FAKE"

    def __init__(
        self,
        name: str,
        fn: CompileFn,
        languages: frozenset[SourceLanguage] = frozenset({SourceLanguage.GLSL}),
    ) -> None:
        super().__init__(executable="fake")
        self.name = name
        self.fn = fn
        self.languages = languages
        self.calls = 0

    def compile(self, source, origin, config, resolver):  # type: ignore[override]
        self.calls += 1
        return self.fn(source, origin, config, resolver)


def succeed(*_: object) -> tuple[int, ...]:
    return (SPIRV_MAGIC, 0x00010000, 0, 1, 0)


def fail(message: str) -> CompileFn:
    def _fn(*_: object) -> tuple[int, ...]:
        raise BackendCompilationError(message, backend="fake")

    return _fn


GLSL = CompilationConfig(source_language=SourceLanguage.GLSL)


@patch("shaderbake.compiler.dispatch.logger")
class TestDispatcher(unittest.TestCase):
    """Tests for Dispatcher.dispatch."""

    def test_first_success_wins(self, _logger) -> None:
        first = FakeBackend("first", succeed)
        second = FakeBackend("second", succeed)
        feedback = Dispatcher([first, second]).dispatch("src", None, GLSL, [])
        self.assertEqual(feedback.words[0], SPIRV_MAGIC)
        self.assertEqual(first.calls, 1)
        self.assertEqual(second.calls, 0)

    def test_falls_back_after_failure(self, logger) -> None:
        """A real compile error in one backend still lets the next try."""
        first = FakeBackend("first", fail("syntax error"))
        second = FakeBackend("second", succeed)
        feedback = Dispatcher([first, second]).dispatch("src", None, GLSL, [])
        self.assertEqual(feedback.words, succeed())
        self.assertEqual(second.calls, 1)
        logger.warning.assert_called_once()

    def test_all_fail_raises_last_with_notes(self, _logger) -> None:
        first = FakeBackend("first", fail("first diagnostic"))
        second = FakeBackend("second", fail("second diagnostic"))
        with self.assertRaises(BackendCompilationError) as ctx:
            Dispatcher([first, second]).dispatch("src", None, GLSL, [])
        self.assertIn("second diagnostic", str(ctx.exception))
        notes = getattr(ctx.exception, "__notes__", [])
        self.assertEqual(len(notes), 1)
        self.assertIn("first diagnostic", notes[0])

    def test_include_failure_keeps_its_type(self, _logger) -> None:
        def needs_include(source, origin, config, resolver):
            resolver.resolve("missing.h", IncludeKind.STANDARD, origin)
            return succeed()

        backend = FakeBackend("only", needs_include)
        with self.assertRaises(IncludeResolutionError):
            Dispatcher([backend]).dispatch("src", None, GLSL, [])

    def test_each_attempt_gets_a_fresh_dependency_list(self, _logger) -> None:
        """Includes read by a failed attempt do not leak into the result."""
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        root = Path(tmp.name)
        (root / "x.h").write_text("", encoding="utf-8")

        def include_then_fail(source, origin, config, resolver):
            resolver.resolve("x.h", IncludeKind.STANDARD, origin)
            raise BackendCompilationError("boom", backend="first")

        first = FakeBackend("first", include_then_fail)
        second = FakeBackend("second", succeed)
        feedback = Dispatcher([first, second]).dispatch("src", "main.frag", GLSL, [root])
        self.assertEqual(feedback.dependency_paths, ("main.frag",))

    def test_skips_backends_for_other_languages(self, _logger) -> None:
        wgsl = FakeBackend("wgsl", fail("unreachable"), frozenset({SourceLanguage.WGSL}))
        glsl = FakeBackend("glsl", succeed)
        Dispatcher([wgsl, glsl]).dispatch("src", None, GLSL, [])
        self.assertEqual(wgsl.calls, 0)

    def test_no_backend_for_language(self, _logger) -> None:
        backend = FakeBackend("glsl", succeed)
        config = CompilationConfig(source_language=SourceLanguage.WGSL)
        with self.assertRaises(UnsupportedLanguageError):
            Dispatcher([backend]).dispatch("src", None, config, [])
        with self.assertRaises(UnsupportedLanguageError):
            Dispatcher([]).dispatch("src", None, GLSL, [])

    def test_invalid_target_fails_before_any_backend(self, _logger) -> None:
        backend = FakeBackend("glsl", succeed)
        config = GLSL.model_copy(update={"spirv_version": SpirvVersion.V1_6})
        with self.assertRaises(UnsupportedTargetError):
            Dispatcher([backend]).dispatch("src", None, config, [])
        self.assertEqual(backend.calls, 0)


if __name__ == "__main__":
    unittest.main()
