"""Rich, structured console output for shaderbake.

A build step should say what it compiled, where the artifacts went, and,
when something breaks, exactly which directive, include or backend is to
blame. This module provides consistent terminal output using Rich, with
semantic log levels and structured data display.

Usage:
    from shaderbake.console import logger

    logger.info("Compiling 3 shaders...")
    logger.success("Build complete")
    logger.warning("backend naga failed, trying next")
    logger.error("cannot find \"x.h\" in include directories")

    # Structured output
    logger.header("Build", "shaders.yml")
    logger.step(1, 3, "blit_frag")
    logger.path("out/blit_frag.py", label="artifact")
"""
from shaderbake.console.logger import Logger, get_logger

# Module-level singleton for convenient import
logger = get_logger()

__all__ = ["Logger", "get_logger", "logger"]
