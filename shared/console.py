"""
ELFScope Console Interface
===========================

Rich-powered presentation layer: section rules, severity-coloured
messages, key/value panels and tables with consistent styling.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import IO, Any, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

_SCOPE_THEME = Theme(
    {
        "scope.section": "bold bright_magenta",
        "scope.success": "bold green",
        "scope.warning": "bold yellow",
        "scope.error": "bold red",
        "scope.info": "bold bright_blue",
        "scope.dim": "dim white",
        "scope.key": "bold bright_cyan",
    }
)


class ScopeConsole:
    """Unified console for ELFScope output.

    Usage::

        con = ScopeConsole()
        con.section("ELF Header")
        con.key_values([("Class", "ELF64"), ("Machine", "AMD x86-64")])
        con.error("not an ELF file: README.md")

    Args:
        quiet: Suppress all output.
        file: Stream to write to; ``None`` follows ``sys.stdout``.
        width: Fixed render width; ``None`` lets Rich detect it.
    """

    def __init__(
        self,
        *,
        quiet: bool = False,
        file: Optional[IO[str]] = None,
        width: Optional[int] = None,
    ) -> None:
        self._console = Console(
            theme=_SCOPE_THEME,
            quiet=quiet,
            file=file,
            width=width,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Headings and messages
    # ------------------------------------------------------------------ #

    def section(self, title: str) -> None:
        self._console.rule(f"  {escape(title)}  ", style="scope.section", characters="─")

    def success(self, message: str) -> None:
        self._console.print(f"[scope.success][✔][/scope.success] {escape(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[scope.warning][⚠] WARNING:[/scope.warning] {escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[scope.error][✘] ERROR:[/scope.error] {escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[scope.info][ℹ][/scope.info] {escape(message)}")

    # ------------------------------------------------------------------ #
    #  Structured output
    # ------------------------------------------------------------------ #

    def key_values(self, pairs: Sequence[tuple[str, Any]], *, key_width: int = 36) -> None:
        """Print ``key: value`` lines with aligned values."""
        tbl = Table.grid(padding=(0, 2))
        tbl.add_column(style="scope.key", min_width=key_width, no_wrap=True)
        tbl.add_column(overflow="fold")
        for key, value in pairs:
            tbl.add_row(f"{escape(key)}:", escape(str(value)))
        self._console.print(tbl)

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        justify: Sequence[str] | None = None,
    ) -> None:
        """Render a Rich table; every cell is stringified and escaped.

        Args:
            title: Table title.
            columns: Column header labels.
            rows: Row tuples.
            caption: Optional footer caption.
            justify: Optional per-column justification (``"right"``...).
        """
        tbl = Table(
            title=escape(title),
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            align = justify[idx] if justify and idx < len(justify) else "left"
            tbl.add_column(col_name, justify=align, overflow="fold")
        for row in rows:
            tbl.add_row(*(escape(str(cell)) for cell in row))
        self._console.print(tbl)

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self._console.print()
