"""Manifest: the input file of the `shaderbake build` step.

A manifest lists every shader a build step compiles, each with its source
(a path under the build root, or inline text) and its directive list. It is
loaded from YAML or JSON and supports variable substitution, which keeps
shared include directories and defines in one place:

    version: 1
    vars:
      common: 'I "shaders/include", D QUALITY="2"'
    defaults:
      format: python
      directives: vulkan1_1
    shaders:
      - name: blit_vert
        source: shaders/blit.vert
        directives: "vert, ${common}"
      - name: blit_frag
        inline: |
          #version 450
          ...
        directives: [frag, auto_bind]
"""
from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, model_validator

from shaderbake.config import Identifier, PositiveInt
from shaderbake.config.resolve import ManifestVars
from shaderbake.output import OutputFormat


def _directive_list(directives: str | list[str]) -> list[str]:
    if isinstance(directives, str):
        return [directives] if directives.strip() else []
    return list(directives)


class ManifestDefaults(BaseModel):
    """Settings shared by every shader in the manifest."""

    format: OutputFormat = OutputFormat.PYTHON
    out_dir: str = "generated"
    directives: str | list[str] = ""


class ShaderEntry(BaseModel):
    """One shader to compile; exactly one of `source` and `inline` is set."""

    name: Identifier
    source: str | None = None
    inline: str | None = None
    directives: str | list[str] = ""
    format: OutputFormat | None = None

    @model_validator(mode="after")
    def _one_source(self) -> "ShaderEntry":
        if (self.source is None) == (self.inline is None):
            raise ValueError(
                f"shader {self.name!r} must set exactly one of 'source' or 'inline'"
            )
        return self

    def directive_list(self, defaults: ManifestDefaults) -> list[str]:
        """Manifest-wide directives first, so the shader's own ones win."""
        return _directive_list(defaults.directives) + _directive_list(self.directives)


class Manifest(BaseModel):
    """The complete build step specification loaded from YAML or JSON."""

    version: PositiveInt
    defaults: ManifestDefaults = ManifestDefaults()
    shaders: list[ShaderEntry]

    @model_validator(mode="after")
    def _unique_names(self) -> "Manifest":
        seen: set[str] = set()
        for shader in self.shaders:
            if shader.name in seen:
                raise ValueError(f"duplicate shader name {shader.name!r}")
            seen.add(shader.name)
        return self

    @classmethod
    def from_path(cls, path: Path) -> "Manifest":
        """Load and validate a manifest from a JSON or YAML file.

        Supports variable substitution via a `vars` section at the top level.
        Variables can be referenced as `${var_name}` throughout the manifest.

        Raises:
            ManifestVariableError: If a placeholder cannot be substituted.
            ValueError: On an unsupported suffix or a malformed payload.
        """
        text = path.read_text(encoding="utf-8")
        match path.suffix.lower():
            case ".json":
                payload = json.loads(text)
            case ".yml" | ".yaml":
                payload = yaml.safe_load(text)
            case s:
                raise ValueError(f"Unsupported format '{s}'")

        if payload is None:
            raise ValueError("Manifest payload is empty.")
        if not isinstance(payload, dict):
            raise ValueError(f"Manifest payload must be a dict, got {type(payload)!r}")

        vars_payload = payload.pop("vars", None)
        if vars_payload is not None:
            if not isinstance(vars_payload, dict):
                raise ValueError(
                    f"Manifest vars must be a dict, got {type(vars_payload)!r}"
                )
            payload = ManifestVars(vars_payload).substitute(payload)

        return cls.model_validate(payload)
