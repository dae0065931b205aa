"""
parser_test provides tests for directive list parsing.
"""
from __future__ import annotations

import unittest

from shaderbake.config import (
    CompilationConfig,
    Optimization,
    ShaderStage,
    SourceLanguage,
    Target,
)
from shaderbake.directive import DirectiveParser, parse_directives, tokenize
from shaderbake.errors import DirectiveSyntaxError


class TestDirectiveParser(unittest.TestCase):
    """Tests for DirectiveParser.parse."""

    def test_empty_directives_give_defaults(self) -> None:
        """An empty list leaves every field at its default."""
        self.assertEqual(parse_directives(""), CompilationConfig())
        self.assertEqual(parse_directives([]), CompilationConfig())

    def test_full_directive_list(self) -> None:
        """Language, stage, includes and defines all land in the config."""
        cfg = parse_directives('hlsl, vert, I "a", I "b", D FOO="1", D BAR')
        self.assertEqual(cfg.source_language, SourceLanguage.HLSL)
        self.assertEqual(cfg.stage, ShaderStage.VERTEX)
        self.assertEqual(cfg.include_dirs, ("a", "b"))
        self.assertEqual(cfg.defines, (("FOO", "1"), ("BAR", None)))

    def test_hlsl_raises_optimization(self) -> None:
        """hlsl implies max_perf."""
        cfg = parse_directives("hlsl")
        self.assertEqual(cfg.optimization, Optimization.MAX_PERFORMANCE)

    def test_later_optimization_overrides_hlsl(self) -> None:
        """Scalar fields are last-wins, including the one hlsl sets."""
        self.assertEqual(
            parse_directives("hlsl, min_size").optimization, Optimization.MIN_SIZE
        )
        self.assertEqual(
            parse_directives("min_size, hlsl").optimization,
            Optimization.MAX_PERFORMANCE,
        )

    def test_last_stage_wins(self) -> None:
        self.assertEqual(parse_directives("vert, frag").stage, ShaderStage.FRAGMENT)

    def test_last_target_wins(self) -> None:
        cfg = parse_directives("vulkan1_2, opengl4_5")
        self.assertEqual(cfg.target, Target.OPENGL4_5)

    def test_target_sets_env_and_version(self) -> None:
        """vulkan1_1 pins SPIR-V 1.3."""
        cfg = parse_directives("vulkan1_1")
        self.assertEqual(cfg.target, Target.VULKAN1_1)
        self.assertEqual(cfg.spirv_version.label, "1.3")

    def test_flags(self) -> None:
        cfg = parse_directives("no_debug, auto_bind, no_y_flip")
        self.assertFalse(cfg.debug_info)
        self.assertTrue(cfg.auto_bind_uniforms)
        self.assertFalse(cfg.flip_vertical_coordinate)

    def test_defaults_without_flags(self) -> None:
        cfg = parse_directives("frag")
        self.assertTrue(cfg.debug_info)
        self.assertFalse(cfg.auto_bind_uniforms)
        self.assertTrue(cfg.flip_vertical_coordinate)
        self.assertEqual(cfg.entry_point, "main")

    def test_entry_point(self) -> None:
        self.assertEqual(parse_directives('entry="vs_main"').entry_point, "vs_main")
        self.assertEqual(parse_directives("entry=ps_main").entry_point, "ps_main")

    def test_last_entry_point_wins(self) -> None:
        self.assertEqual(parse_directives('entry="a", entry="b"').entry_point, "b")

    def test_entry_requires_equals(self) -> None:
        with self.assertRaises(DirectiveSyntaxError):
            parse_directives("entry vs_main")

    def test_define_with_number_value(self) -> None:
        self.assertEqual(parse_directives("D COUNT=2").defines, (("COUNT", "2"),))

    def test_include_dir_escapes(self) -> None:
        cfg = parse_directives(r'I "a\"b"')
        self.assertEqual(cfg.include_dirs, ('a"b',))

    def test_include_requires_string(self) -> None:
        with self.assertRaises(DirectiveSyntaxError) as ctx:
            parse_directives("I include")
        self.assertIn("include directory string", str(ctx.exception))

    def test_define_requires_name(self) -> None:
        with self.assertRaises(DirectiveSyntaxError):
            parse_directives("D")

    def test_unknown_keyword_names_token(self) -> None:
        """An unknown keyword fails and the error points at it."""
        with self.assertRaises(DirectiveSyntaxError) as ctx:
            parse_directives("vert, foo_bar")
        err = ctx.exception
        self.assertEqual(err.token, "foo_bar")
        self.assertEqual(err.index, 2)
        self.assertEqual(err.offset, 6)
        self.assertIn("foo_bar", str(err))
        self.assertIn("unsupported compilation parameter", str(err))

    def test_missing_separator(self) -> None:
        with self.assertRaises(DirectiveSyntaxError) as ctx:
            parse_directives("vert frag")
        self.assertEqual(ctx.exception.token, "frag")

    def test_leading_separator_allowed(self) -> None:
        """Directives follow the source expression, so a leading comma is fine."""
        self.assertEqual(parse_directives(", frag").stage, ShaderStage.FRAGMENT)

    def test_string_list_input(self) -> None:
        cfg = parse_directives(["hlsl", 'I "inc"'])
        self.assertEqual(cfg.source_language, SourceLanguage.HLSL)
        self.assertEqual(cfg.include_dirs, ("inc",))

    def test_token_input(self) -> None:
        cfg = parse_directives(list(tokenize("comp, wgsl")))
        self.assertEqual(cfg.stage, ShaderStage.COMPUTE)
        self.assertEqual(cfg.source_language, SourceLanguage.WGSL)

    def test_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            parse_directives("nope")

    def test_custom_defaults(self) -> None:
        """Parsing starts from the parser's defaults."""
        parser = DirectiveParser(CompilationConfig(entry_point="start"))
        self.assertEqual(parser.parse("frag").entry_point, "start")

    def test_configs_are_frozen(self) -> None:
        cfg = parse_directives("frag")
        with self.assertRaises(Exception):
            cfg.stage = ShaderStage.VERTEX  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
