"""
ELFScope Report Generator
==========================

Writes decoded files as a single structured JSON document.  Descriptor
bytes in notes are hex-encoded by the model serialisers.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from elfscope import __version__
from elfscope.core.models import FileReport


class ElfReportGenerator:
    """Serialise :class:`FileReport` objects to JSON.

    Usage::

        gen = ElfReportGenerator()
        text = gen.render(reports)
        gen.generate_json(reports, "out/report.json")
    """

    def build(self, reports: Sequence[FileReport]) -> dict[str, Any]:
        """Return the report as plain JSON-compatible data."""
        return {
            "report_type": "elfscope_decode",
            "version": __version__,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "file_count": len(reports),
            "failed_count": sum(1 for r in reports if not r.ok),
            "files": [r.model_dump(mode="json") for r in reports],
        }

    def render(self, reports: Sequence[FileReport]) -> str:
        return json.dumps(self.build(reports), indent=2, ensure_ascii=False, default=str)

    def generate_json(self, reports: Sequence[FileReport], output_path: str | Path) -> str:
        """Write the JSON report to *output_path*.

        Returns:
            The absolute path of the generated report.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(self.render(reports))
        return str(path.resolve())
