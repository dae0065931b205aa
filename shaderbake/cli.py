"""Command-line interface for shaderbake.

shaderbake is the code-generation step of a two-phase build: it runs before
the host program is compiled and leaves behind generated sources holding
SPIR-V, plus depfiles telling the build system when to run it again.

Commands:
- build: Compile every shader in a manifest
- compile: Compile one shader given on the command line
- check: Parse a manifest's directives without compiling
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from shaderbake.command import BuildCommand, CheckCommand, Command, CompileCommand
from shaderbake.config import BuildEnvironment
from shaderbake.config.manifest import Manifest
from shaderbake.console import logger
from shaderbake.errors import ShaderBakeError
from shaderbake.output import OutputFormat, symbol_name


class _Args(argparse.Namespace):
    """Typed namespace for CLI arguments."""

    command: str | None = None
    base_dir: Path | None = None
    format: str | None = None

    # build / check
    manifest: Path | None = None
    out_dir: Path | None = None
    print_plan: bool = False

    # compile
    source: str | None = None
    inline: bool = False
    directives: str = ""
    name: str | None = None
    output: Path | None = None
    depfile: Path | None = None


class CLI(argparse.ArgumentParser):
    """Subcommand-based command-line interface."""

    def __init__(self) -> None:
        """Set up CLI with subcommands."""
        super().__init__(
            prog="shaderbake",
            description="shaderbake - compile shaders to embeddable SPIR-V at build time.",
        )

        _ = self.add_argument(
            "--version",
            action="version",
            version="%(prog)s 0.1.0",
            help="Show the version and exit.",
        )

        subparsers = self.add_subparsers(
            dest="command",
            parser_class=argparse.ArgumentParser,
        )

        formats = [f.value for f in OutputFormat]

        # Build command
        build_parser = subparsers.add_parser(
            "build",
            help="Compile every shader in a manifest and write artifacts + depfiles.",
        )
        _ = build_parser.add_argument(
            "manifest",
            type=Path,
            help="Manifest path (.json, .yml, or .yaml).",
        )
        _ = build_parser.add_argument(
            "--out-dir",
            type=Path,
            default=None,
            help="Artifact directory. Defaults to the manifest's defaults.out_dir under the base dir.",
        )
        _ = build_parser.add_argument(
            "--format",
            choices=formats,
            default=None,
            help="Artifact format for every shader, overriding the manifest.",
        )
        self._add_base_dir(build_parser)

        # Compile command
        compile_parser = subparsers.add_parser(
            "compile",
            help="Compile a single shader.",
        )
        _ = compile_parser.add_argument(
            "source",
            type=str,
            help="Shader path relative to the base dir, or the source text with --inline.",
        )
        _ = compile_parser.add_argument(
            "--inline",
            action="store_true",
            default=False,
            help="Treat SOURCE as shader source text instead of a path.",
        )
        _ = compile_parser.add_argument(
            "-d",
            "--directives",
            type=str,
            default="",
            help='Directive list, e.g. \'hlsl, vert, I "include", D FOO="1"\'.',
        )
        _ = compile_parser.add_argument(
            "--name",
            type=str,
            default=None,
            help="Shader name used for symbols and file names. Defaults to the source file stem.",
        )
        _ = compile_parser.add_argument(
            "-o",
            "--output",
            type=Path,
            default=None,
            help="Artifact path. Defaults to NAME plus the format's suffix.",
        )
        _ = compile_parser.add_argument(
            "--format",
            choices=formats,
            default=OutputFormat.PYTHON.value,
            help="Artifact format.",
        )
        _ = compile_parser.add_argument(
            "--depfile",
            type=Path,
            default=None,
            help="Depfile path. Defaults to the artifact path plus '.d'.",
        )
        self._add_base_dir(compile_parser)

        # Check command
        check_parser = subparsers.add_parser(
            "check",
            help="Parse every directive list in a manifest without compiling.",
        )
        _ = check_parser.add_argument(
            "manifest",
            type=Path,
            help="Manifest path (.json, .yml, or .yaml).",
        )
        _ = check_parser.add_argument(
            "--print-plan",
            action="store_true",
            default=False,
            dest="print_plan",
            help="Print the resolved configuration of every shader.",
        )

    @staticmethod
    def _add_base_dir(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--base-dir",
            type=Path,
            default=None,
            help="Build root. Defaults to $SHADERBAKE_BASE_DIR.",
        )

    def _environment(self, base_dir: Path | None) -> BuildEnvironment:
        if base_dir is not None:
            return BuildEnvironment(base_dir=base_dir)
        return BuildEnvironment.from_environ()

    def parse_command(self, argv: list[str] | None = None) -> Command:
        """Parse CLI arguments into a typed command payload."""
        args = self.parse_args(argv, namespace=_Args())

        match args.command:
            case "build":
                if args.manifest is None:
                    raise ValueError("build requires a manifest path.")
                return BuildCommand(
                    manifest=Manifest.from_path(args.manifest),
                    environment=self._environment(args.base_dir),
                    out_dir=args.out_dir,
                    format=OutputFormat(args.format) if args.format else None,
                )
            case "compile":
                if args.source is None:
                    raise ValueError("compile requires a shader source.")
                fmt = OutputFormat(args.format or OutputFormat.PYTHON.value)
                if args.name:
                    name = args.name
                elif args.inline:
                    name = "shader"
                else:
                    name = symbol_name(Path(args.source).stem)
                return CompileCommand(
                    source=args.source,
                    inline=args.inline,
                    directives=args.directives,
                    name=name,
                    environment=self._environment(args.base_dir),
                    output=args.output or Path(f"{name}{fmt.suffix}"),
                    format=fmt,
                    depfile=args.depfile,
                )
            case "check":
                if args.manifest is None:
                    raise ValueError("check requires a manifest path.")
                return CheckCommand(
                    manifest=Manifest.from_path(args.manifest),
                    print_plan=bool(args.print_plan),
                )
            case None:
                self.print_help(sys.stderr)
                self.exit(2)
            case _:
                raise ValueError(f"Invalid command: {args.command}")


def run_command(command: Command) -> None:
    """Execute a parsed command."""
    match command:
        case BuildCommand() as cmd:
            from shaderbake.runner import BuildRunner

            runner = BuildRunner(
                cmd.manifest, cmd.environment, out_dir=cmd.out_dir, fmt=cmd.format
            )
            artifacts = runner.run()
            logger.artifacts_summary(artifacts)

        case CompileCommand() as cmd:
            from shaderbake.compiler import Compiler
            from shaderbake.output import OutputAssembler

            compiler = Compiler(cmd.environment)
            if cmd.inline:
                feedback = compiler.compile_inline(cmd.source, cmd.directives)
            else:
                feedback = compiler.compile_file(cmd.source, cmd.directives)
            written = OutputAssembler(cmd.output.parent).write(
                cmd.name, feedback, cmd.format, artifact=cmd.output, depfile=cmd.depfile
            )
            logger.success(f"Compiled {cmd.name} ({len(feedback.words)} words)")
            for label, path in written.items():
                logger.path(str(path), label=label)

        case CheckCommand() as cmd:
            from shaderbake.directive import DirectiveParser
            from shaderbake.compiler.plan import Planner

            parser = DirectiveParser()
            planner = Planner()
            for shader in cmd.manifest.shaders:
                config = parser.parse(shader.directive_list(cmd.manifest.defaults))
                _ = config.target
                if cmd.print_plan:
                    logger.log(planner.format(shader.name, config))
            logger.success(f"{len(cmd.manifest.shaders)} shader directive lists parsed")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns exit code (0 for success, non-zero for failure).
    """
    cli = CLI()

    try:
        run_command(cli.parse_command(argv))
        return 0
    except ShaderBakeError as e:
        logger.error(str(e))
        for note in getattr(e, "__notes__", ()):
            logger.log(f"  {note}")
        return 1
    except (ValueError, OSError) as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
