"""Rich-based logger with shaderbake theming.

Build tools are read in a hurry, usually after something went wrong. This
logger keeps the output scannable with:
- Semantic colors (cyan=info, green=success, amber=warning, red=error)
- Structured output (section headers, step counters)
- Path highlighting for sources, includes and artifacts

Messages are escaped before printing: compiler diagnostics are full of
square brackets that Rich would otherwise read as markup.
"""
from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.text import Text
from rich.theme import Theme


SHADERBAKE_THEME = Theme(
    {
        "info": "bold #7dcfff",
        "success": "bold #9ece6a",
        "warning": "bold #e0af68",
        "error": "bold #f7768e",
        "highlight": "bold #bb9af7",
        "muted": "dim #565f89",
        "metric": "#7aa2f7",
        "path": "italic #73daca",
        "step": "#ff9e64",
    }
)


class Logger:
    """Unified logging interface with rich console output.

    Writes to stderr so generated artifacts can go to stdout.
    """

    def __init__(self) -> None:
        """Initialize with the shaderbake theme."""
        self.console = Console(theme=SHADERBAKE_THEME, stderr=True)

    # ─────────────────────────────────────────────────────────────────────
    # Basic Logging
    # ─────────────────────────────────────────────────────────────────────

    def log(self, message: str) -> None:
        """Log a generic message."""
        self.console.print(escape(message))

    def info(self, message: str) -> None:
        """Log an informational message (cyan ℹ)."""
        self.console.print(f"[info]ℹ[/info] {escape(message)}")

    def success(self, message: str) -> None:
        """Log a success message (green ✓)."""
        self.console.print(f"[success]✓[/success] {escape(message)}")

    def warning(self, message: str) -> None:
        """Log a warning message (amber ⚠)."""
        self.console.print(f"[warning]⚠[/warning] {escape(message)}")

    def error(self, message: str) -> None:
        """Log an error message (red ✗)."""
        self.console.print(f"[error]✗[/error] {escape(message)}")

    # ─────────────────────────────────────────────────────────────────────
    # Structured Output
    # ─────────────────────────────────────────────────────────────────────

    def header(self, title: str, subtitle: str | None = None) -> None:
        """Print a prominent section header."""
        header_text = Text()
        header_text.append("━" * 3 + " ", style="muted")
        header_text.append(title, style="highlight")
        if subtitle:
            header_text.append(f" • {subtitle}", style="muted")
        header_text.append(" " + "━" * 40, style="muted")
        self.console.print()
        self.console.print(header_text)
        self.console.print()

    def step(self, current: int, total: int | None = None, message: str = "") -> None:
        """Display a step indicator for multi-shader builds."""
        if total:
            prefix = f"[step]\\[{current}/{total}][/step]"
        else:
            prefix = f"[step]\\[{current}][/step]"
        self.console.print(f"{prefix} {escape(message)}")

    def path(self, filepath: str, label: str = "") -> None:
        """Display a file path with optional label."""
        if label:
            self.console.print(
                f"  [muted]{escape(label)}:[/muted] [path]{escape(filepath)}[/path]"
            )
        else:
            self.console.print(f"  [path]{escape(filepath)}[/path]")

    def artifacts_summary(self, artifacts: dict[str, Any]) -> None:
        """Display a summary of generated artifacts."""
        self.console.print()
        self.success(f"Generated {len(artifacts)} artifacts:")
        for name, path in artifacts.items():
            self.console.print(
                f"    [muted]•[/muted] {escape(name)}: [path]{escape(str(path))}[/path]"
            )


# ─────────────────────────────────────────────────────────────────────────────
# Module-Level Singleton
# ─────────────────────────────────────────────────────────────────────────────

_logger: Logger | None = None


def get_logger() -> Logger:
    """Get or create the singleton Logger instance.

    Using a singleton ensures consistent theming and avoids creating
    multiple Console instances.
    """
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger
