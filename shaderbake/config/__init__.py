"""Configuration system: what a compilation request and a build look like.

A single compilation is described by a CompilationConfig, built by the
directive parser. A whole build step is described by a manifest loaded from
YAML or JSON and validated into Pydantic models. The build root is carried
separately in a BuildEnvironment.
"""
from __future__ import annotations

import enum
import re
from typing import Annotated, TypeVar

from pydantic import AfterValidator

from shaderbake.config.compilation import CompilationConfig, Define
from shaderbake.config.environment import BASE_DIR_VAR, BuildEnvironment
from shaderbake.config.language import (
    STAGE_KEYWORDS,
    Optimization,
    ShaderStage,
    SourceLanguage,
)
from shaderbake.config.target import TARGET_KEYWORDS, SpirvVersion, Target, TargetEnv

T = TypeVar("T")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ValidationType(enum.Enum):
    """Types of value validation we support."""

    SHOULD_BE_POSITIVE = "should_be_positive"
    SHOULD_BE_IDENTIFIER = "should_be_identifier"


def check(value: T, validation_type: ValidationType) -> T:
    """Validate a value against a constraint, raising ValueError on failure."""
    match validation_type:
        case ValidationType.SHOULD_BE_POSITIVE:
            if value <= 0:  # type: ignore[operator]
                raise ValueError(
                    f"Validation failed: {validation_type.name}: {value!r} <= 0"
                )
            return value
        case ValidationType.SHOULD_BE_IDENTIFIER:
            if not isinstance(value, str) or not _IDENTIFIER.match(value):
                raise ValueError(
                    f"Validation failed: {validation_type.name}: "
                    f"{value!r} is not a valid identifier"
                )
            return value
        case _:
            raise ValueError(
                f"Validation failed: unknown validation type {validation_type}"
            )


# Validated primitives for the manifest models
PositiveInt = Annotated[
    int,
    AfterValidator(lambda v: check(v, ValidationType.SHOULD_BE_POSITIVE)),
]
Identifier = Annotated[
    str,
    AfterValidator(lambda v: check(v, ValidationType.SHOULD_BE_IDENTIFIER)),
]

__all__ = [
    "BASE_DIR_VAR",
    "STAGE_KEYWORDS",
    "TARGET_KEYWORDS",
    "BuildEnvironment",
    "CompilationConfig",
    "Define",
    "Identifier",
    "Optimization",
    "PositiveInt",
    "ShaderStage",
    "SourceLanguage",
    "SpirvVersion",
    "Target",
    "TargetEnv",
    "ValidationType",
    "check",
]
