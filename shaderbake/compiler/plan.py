"""Plan printer: human-readable view of parsed requests.

After parsing, you may want to check what a directive list actually
resolved to (which target, which include order, whether `hlsl` bumped the
optimization level). The planner renders configs as plain text lines.
"""
from __future__ import annotations

from collections.abc import Iterable

from shaderbake.config import CompilationConfig


class Planner:
    """Renders parsed compilation configs for debugging."""

    def format(self, name: str, config: CompilationConfig) -> str:
        """Render one named request."""
        return "\n".join(self.format_config(name, config))

    def format_config(self, name: str, config: CompilationConfig) -> Iterable[str]:
        yield f"- shader={name}"
        yield f"  language={config.source_language.value} stage={config.stage.value}"
        yield f"  target={config.target.describe()}"
        yield f"  entry={config.entry_point} optimization={config.optimization.value}"
        yield (
            f"  debug={config.debug_info} auto_bind={config.auto_bind_uniforms} "
            f"y_flip={config.flip_vertical_coordinate}"
        )
        for i, directory in enumerate(config.include_dirs):
            yield f"  include_dirs[{i}]={directory}"
        for i, (macro, value) in enumerate(config.defines):
            yield f"  defines[{i}]={macro}" + ("" if value is None else f"={value}")
