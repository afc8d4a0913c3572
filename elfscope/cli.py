"""
ELFScope CLI
=============

Click-based command line with readelf-style display selectors.

Usage::

    # File header, program headers and section headers
    elfscope -e /bin/ls

    # Dynamic symbols and notes of several files
    elfscope --dyn-syms -n /bin/ls /usr/lib/libc.so.6

    # Everything, as JSON on stdout
    elfscope --json /bin/ls

    # Everything, JSON report written to a file
    elfscope -a --output report.json /bin/ls

With no selector the full report (``-a``) is shown.  A file that cannot be
decoded prints an error and the remaining files are still processed; the
exit status is 1 if any file failed.

References:
    - Click documentation: https://click.palletsprojects.com/
    - GNU Binutils. readelf(1).
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from shared.config import ElfScopeConfig
from shared.console import ScopeConsole
from shared.logger import ScopeLogger

from elfscope import __version__
from elfscope.core.engine import ALL_PARTS, ElfScopeEngine, Part
from elfscope.output.console import ElfConsoleOutput
from elfscope.output.report import ElfReportGenerator


def _selected_parts(
    *,
    show_all: bool,
    headers: bool,
    program_headers: bool,
    section_headers: bool,
    symbols: bool,
    dyn_syms: bool,
    notes: bool,
    relocs: bool,
) -> set[Part]:
    if show_all:
        return set(ALL_PARTS)
    parts: set[Part] = set()
    if program_headers or headers:
        parts.add(Part.SEGMENTS)
    if section_headers or headers:
        parts.add(Part.SECTIONS)
    if symbols:
        parts.update((Part.SYMBOLS, Part.DYNAMIC_SYMBOLS))
    if dyn_syms:
        parts.add(Part.DYNAMIC_SYMBOLS)
    if notes:
        parts.add(Part.NOTES)
    if relocs:
        parts.add(Part.RELOCATIONS)
    return parts


@click.command("elfscope")
@click.argument("files", nargs=-1, required=True, type=click.Path())
@click.option("-a", "--all", "show_all", is_flag=True, help="Equivalent to -h -l -S -s -n -r.")
@click.option("-h", "--file-header", is_flag=True, help="Display the ELF file header.")
@click.option(
    "-l", "--program-headers", "--segments", "program_headers",
    is_flag=True,
    help="Display the program headers.",
)
@click.option(
    "-S", "--section-headers", "--sections", "section_headers",
    is_flag=True,
    help="Display the section headers.",
)
@click.option(
    "-s", "--syms", "--symbols", "symbols",
    is_flag=True,
    help="Display the symbol table (static and dynamic).",
)
@click.option("--dyn-syms", is_flag=True, help="Display the dynamic symbol table.")
@click.option("-n", "--notes", is_flag=True, help="Display the core notes.")
@click.option("-r", "--relocs", is_flag=True, help="Display the relocations.")
@click.option("-e", "--headers", is_flag=True, help="Equivalent to -h -l -S.")
@click.option("--json", "json_output", is_flag=True, help="Print a JSON report to stdout.")
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write a JSON report to this path.",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="TOML configuration file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="elfscope")
def elfscope_cli(
    files: tuple[str, ...],
    show_all: bool,
    file_header: bool,
    program_headers: bool,
    section_headers: bool,
    symbols: bool,
    dyn_syms: bool,
    notes: bool,
    relocs: bool,
    headers: bool,
    json_output: bool,
    output_path: Optional[str],
    config_path: Optional[str],
    verbose: bool,
) -> None:
    """Display information about the contents of ELF format files.

    FILES are one or more ELF objects, executables or shared libraries.
    """
    config = ElfScopeConfig.load(config_path)
    if verbose:
        config.global_settings.log_level = "DEBUG"

    settings = config.global_settings
    logger = ScopeLogger(
        "cli",
        log_level=settings.log_level,
        log_file=settings.log_file or None,
        json_logs=settings.log_json,
    )
    console = ScopeConsole()

    show_all = show_all or not any((
        file_header, program_headers, section_headers,
        symbols, dyn_syms, notes, relocs, headers,
    ))
    parts = _selected_parts(
        show_all=show_all,
        headers=headers,
        program_headers=program_headers,
        section_headers=section_headers,
        symbols=symbols,
        dyn_syms=dyn_syms,
        notes=notes,
        relocs=relocs,
    )
    show_header = show_all or file_header or headers

    engine = ElfScopeEngine(config=config, logger=logger)
    try:
        reports = engine.decode_many(files, parts)
    except KeyboardInterrupt:
        console.warning("Interrupted by user.")
        sys.exit(130)

    if json_output:
        click.echo(ElfReportGenerator().render(reports))
    else:
        output = ElfConsoleOutput(console=console)
        for report in reports:
            output.display(report, show_header=show_header, parts=parts)

    if output_path:
        report_path = ElfReportGenerator().generate_json(reports, output_path)
        if not json_output:
            console.success(f"JSON report saved: {report_path}")

    if any(not r.ok for r in reports):
        sys.exit(1)


def main() -> None:
    """Entry point for the ``elfscope`` console script."""
    elfscope_cli()


if __name__ == "__main__":
    main()
