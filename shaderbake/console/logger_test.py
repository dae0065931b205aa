"""
Unit tests for the console logger module.
"""
from __future__ import annotations

import io
import re
import unittest

from rich.console import Console

from shaderbake.console.logger import SHADERBAKE_THEME, Logger, get_logger


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    ansi_escape = re.compile(r'\x1b\[[0-9;]*m')
    return ansi_escape.sub('', text)


class LoggerTestCase(unittest.TestCase):
    """Captures a Logger's console output."""

    def setUp(self) -> None:
        """Set up test fixtures with a captured console."""
        self.output = io.StringIO()
        self.logger = Logger()
        self.logger.console = Console(
            file=self.output, force_terminal=True, theme=SHADERBAKE_THEME, width=120
        )

    def text(self) -> str:
        return strip_ansi(self.output.getvalue())


class TestLoggerBasicMethods(LoggerTestCase):
    """Tests for basic logging methods."""

    def test_log_prints_message(self) -> None:
        """log() prints the message to console."""
        self.logger.log("Hello, world!")
        self.assertIn("Hello, world!", self.text())

    def test_info_includes_icon(self) -> None:
        self.logger.info("Compiling 3 shaders")
        self.assertIn("ℹ", self.text())
        self.assertIn("Compiling 3 shaders", self.text())

    def test_success_includes_checkmark(self) -> None:
        self.logger.success("Build complete")
        self.assertIn("✓", self.text())

    def test_warning_includes_icon(self) -> None:
        self.logger.warning("backend naga failed")
        self.assertIn("⚠", self.text())
        self.assertIn("backend naga failed", self.text())

    def test_error_includes_icon(self) -> None:
        self.logger.error("cannot find \"x.h\"")
        self.assertIn("✗", self.text())

    def test_diagnostics_are_not_markup(self) -> None:
        """Square brackets in compiler output are printed literally."""
        self.logger.error("[shaderc] inline.glsl:1: error: [bold]")
        self.assertIn("[shaderc] inline.glsl:1: error: [bold]", self.text())


class TestLoggerStructuredOutput(LoggerTestCase):
    """Tests for structured output methods."""

    def test_header_with_subtitle(self) -> None:
        self.logger.header("Build", "3 shaders")
        self.assertIn("Build", self.text())
        self.assertIn("3 shaders", self.text())

    def test_step_with_total(self) -> None:
        """step() shows current/total format."""
        self.logger.step(3, 10, "blit_frag")
        self.assertIn("[3/10] blit_frag", self.text())

    def test_step_without_total(self) -> None:
        self.logger.step(5, message="blit_vert")
        self.assertIn("[5] blit_vert", self.text())

    def test_path_with_label(self) -> None:
        self.logger.path("/out/blit.py", "artifact")
        self.assertIn("artifact:", self.text())
        self.assertIn("/out/blit.py", self.text())

    def test_artifacts_summary(self) -> None:
        self.logger.artifacts_summary({
            "blit.py": "/out/blit.py",
            "blit.py.d": "/out/blit.py.d",
        })
        output = self.text()
        self.assertIn("Generated 2 artifacts", output)
        self.assertIn("blit.py.d", output)


class TestLoggerSingleton(unittest.TestCase):
    """Tests for singleton pattern."""

    def test_get_logger_returns_same_instance(self) -> None:
        self.assertIsInstance(get_logger(), Logger)
        self.assertIs(get_logger(), get_logger())


if __name__ == "__main__":
    unittest.main()
