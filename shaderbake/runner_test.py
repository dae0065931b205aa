"""
Unit tests for the manifest build runner.
"""
from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from shaderbake.compiler import CompilationFeedback
from shaderbake.config import BuildEnvironment
from shaderbake.config.manifest import Manifest, ShaderEntry
from shaderbake.output import OutputFormat
from shaderbake.runner import BuildRunner
from shaderbake.spirv import SPIRV_MAGIC

FEEDBACK = CompilationFeedback(words=(SPIRV_MAGIC, 0x00010000, 0, 1, 0), dependency_paths=())


def manifest() -> Manifest:
    return Manifest.model_validate(
        {
            "version": 1,
            "defaults": {"directives": "vulkan1_1", "out_dir": "gen"},
            "shaders": [
                {"name": "blit_vert", "source": "shaders/blit.vert", "directives": "vert"},
                {"name": "blit_frag", "inline": "void main() {}", "format": "c"},
            ],
        }
    )


@patch("shaderbake.runner.logger")
class TestBuildRunner(unittest.TestCase):
    """Tests for BuildRunner.run."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.env = BuildEnvironment(base_dir=self.root)
        self.compiler = MagicMock()
        self.compiler.compile_file.return_value = FEEDBACK
        self.compiler.compile_inline.return_value = FEEDBACK

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_run_compiles_every_shader(self, _logger) -> None:
        runner = BuildRunner(manifest(), self.env, compiler=self.compiler)
        artifacts = runner.run()

        self.compiler.compile_file.assert_called_once_with(
            "shaders/blit.vert", ["vulkan1_1", "vert"]
        )
        self.compiler.compile_inline.assert_called_once_with("void main() {}", ["vulkan1_1"])
        self.assertEqual(
            set(artifacts), {"blit_vert.py", "blit_vert.py.d", "blit_frag.h", "blit_frag.h.d"}
        )
        self.assertEqual(artifacts["blit_vert.py"].parent, self.root / "gen")

    def test_format_override(self, _logger) -> None:
        runner = BuildRunner(
            manifest(),
            self.env,
            out_dir=self.root / "other",
            fmt=OutputFormat.SPV,
            compiler=self.compiler,
        )
        artifacts = runner.run()
        self.assertIn("blit_frag.spv", artifacts)
        self.assertTrue((self.root / "other" / "blit_vert.spv").is_file())

    def test_first_failure_aborts(self, _logger) -> None:
        self.compiler.compile_file.side_effect = RuntimeError("boom")
        runner = BuildRunner(manifest(), self.env, compiler=self.compiler)
        with self.assertRaises(RuntimeError):
            runner.run()
        self.compiler.compile_inline.assert_not_called()

    def test_entry_without_any_source(self, _logger) -> None:
        """An entry built around the validator is rejected, not compiled."""
        entry = ShaderEntry.model_construct(name="ghost", source=None, inline=None, directives="")
        runner = BuildRunner(manifest(), self.env, compiler=self.compiler)
        with self.assertRaises(ValueError) as ctx:
            runner.compile_entry(entry)
        self.assertIn("ghost", str(ctx.exception))
        self.compiler.compile_file.assert_not_called()


if __name__ == "__main__":
    unittest.main()
